"""Expand a validated registry document into a self-describing Profile

Each layout's components get their gamepad indices resolved, default node
names filled in and, when the registry declares none, the default visual
responses for their type. The transformation is deterministic and depends
only on the document, including the declared order of components.
"""
import logging
from typing import Dict

from core.constants import (
    ALL_STATES,
    AXIS_COMPONENT_TYPES,
    AXIS_NAMES,
    ComponentProperty,
    ComponentState,
    ComponentType,
    VisualResponseProperty,
    XR_STANDARD_MAPPING,
)
from core.profile import Component, GamepadIndices, Layout, Profile, VisualResponse

LOG = logging.getLogger("xrprofiles.registry")

TRANSFORM = VisualResponseProperty.TRANSFORM.value
VISIBILITY = VisualResponseProperty.VISIBILITY.value
TOUCHED_STATES = (ComponentState.TOUCHED.value, ComponentState.PRESSED.value)

# xr-standard: component type -> (button index, first axis index) for the first of each type
XR_STANDARD_SLOTS = {
    ComponentType.TRIGGER.value: (0, None),
    ComponentType.SQUEEZE.value: (1, None),
    ComponentType.TOUCHPAD.value: (2, 0),
    ComponentType.THUMBSTICK.value: (3, 2),
}
XR_STANDARD_FIRST_FREE_BUTTON = 4
XR_STANDARD_FIRST_FREE_AXIS = 4

_PRESSED = ("pressed", ComponentProperty.BUTTON.value, ALL_STATES, TRANSFORM)

# component type -> (name, component property, states, value node property)
DEFAULT_RESPONSES = {
    ComponentType.TRIGGER.value: (_PRESSED,),
    ComponentType.SQUEEZE.value: (_PRESSED,),
    ComponentType.BUTTON.value: (_PRESSED,),
    ComponentType.THUMBSTICK.value: (
        _PRESSED,
        ("xaxis_pressed", ComponentProperty.X_AXIS.value, ALL_STATES, TRANSFORM),
        ("yaxis_pressed", ComponentProperty.Y_AXIS.value, ALL_STATES, TRANSFORM),
    ),
    ComponentType.TOUCHPAD.value: (
        _PRESSED,
        ("xaxis_touched", ComponentProperty.X_AXIS.value, ALL_STATES, TRANSFORM),
        ("yaxis_touched", ComponentProperty.Y_AXIS.value, ALL_STATES, TRANSFORM),
        ("axes_touched", ComponentProperty.STATE.value, TOUCHED_STATES, VISIBILITY),
    ),
}


def default_root_node_name(component_id: str) -> str:
    return component_id.replace("-", "_")


def default_visual_responses(root_node_name: str, component_type: str) -> Dict[str, VisualResponse]:
    responses = {}
    for name, component_property, states, node_property in DEFAULT_RESPONSES[component_type]:
        prefix = f"{root_node_name}_{name}"
        if node_property == TRANSFORM:
            response = VisualResponse(
                component_property=component_property,
                value_node_property=node_property,
                value_node_name=f"{prefix}_value",
                min_node_name=f"{prefix}_min",
                max_node_name=f"{prefix}_max",
                states=states,
            )
        else:
            response = VisualResponse(
                component_property=component_property,
                value_node_property=node_property,
                value_node_name=f"{prefix}_value",
                states=states,
            )
        responses[prefix] = response
    return responses


def assign_gamepad_indices(components: dict, gamepad: dict) -> Dict[str, GamepadIndices]:
    """Resolve component id -> indices for one layout.

    Explicit `buttons`/`axes` arrays always win. Without them an
    `xr-standard` mapping assigns indices by convention; any other mapping
    assigns nothing.
    """
    if "buttons" in gamepad or "axes" in gamepad:
        return _explicit_indices(components, gamepad)
    if gamepad.get("mapping") == XR_STANDARD_MAPPING:
        return _xr_standard_indices(components)
    return {}


def _explicit_indices(components: dict, gamepad: dict) -> Dict[str, GamepadIndices]:
    slots = {component_id: {} for component_id in components}
    for index, component_id in enumerate(gamepad.get("buttons") or []):
        if component_id is not None:
            slots[component_id]["button"] = index
    for index, entry in enumerate(gamepad.get("axes") or []):
        if entry is not None:
            slots[entry["componentId"]][AXIS_NAMES[entry["axis"]]] = index
    return {
        component_id: GamepadIndices.from_dict(slot)
        for component_id, slot in slots.items()
        if slot
    }


def _xr_standard_indices(components: dict) -> Dict[str, GamepadIndices]:
    assigned = {}
    claimed = set()
    next_button = XR_STANDARD_FIRST_FREE_BUTTON
    next_axis = XR_STANDARD_FIRST_FREE_AXIS
    for component_id, component in components.items():
        component_type = component["type"]
        if component_type in XR_STANDARD_SLOTS and component_type not in claimed:
            claimed.add(component_type)
            button, axis = XR_STANDARD_SLOTS[component_type]
        else:
            button = next_button
            next_button += 1
            axis = None
            if component_type in AXIS_COMPONENT_TYPES:
                axis = next_axis
                next_axis += 2
        assigned[component_id] = GamepadIndices(
            button=button,
            x_axis=axis,
            y_axis=axis + 1 if axis is not None else None,
        )
    return assigned


def expand_component(component_id: str, raw: dict, indices: GamepadIndices) -> Component:
    component_type = raw["type"]
    root = raw.get("rootNodeName") or default_root_node_name(component_id)

    touch_point = raw.get("touchPointNodeName")
    if component_type == ComponentType.TOUCHPAD.value and not touch_point:
        touch_point = f"{root}_axes_touched_value"

    raw_responses = raw.get("visualResponses")
    if raw_responses is not None:
        responses = {name: VisualResponse.from_dict(r) for name, r in raw_responses.items()}
    else:
        responses = default_visual_responses(root, component_type)

    return Component(
        id=component_id,
        type=component_type,
        root_node_name=root,
        gamepad_indices=indices,
        touch_point_node_name=touch_point,
        visual_responses=responses,
        reserved=bool(raw.get("reserved", False)),
    )


def expand_layout(handedness: str, raw: dict) -> Layout:
    gamepad = raw.get("gamepad") or {}
    indices = assign_gamepad_indices(raw["components"], gamepad)

    components = {}
    reserved = {}
    for component_id, raw_component in raw["components"].items():
        component = expand_component(component_id, raw_component, indices.get(component_id, GamepadIndices()))
        if component.reserved:
            reserved[component_id] = component
        else:
            components[component_id] = component

    return Layout(
        handedness=handedness,
        select_component_id=raw["selectComponentId"],
        components=components,
        reserved_components=reserved,
        gamepad_mapping=gamepad.get("mapping", ""),
    )


def expand_registry_profile(registry: dict) -> Profile:
    layouts = {
        handedness: expand_layout(handedness, raw)
        for handedness, raw in registry["layouts"].items()
    }
    profile = Profile(
        profile_id=registry["profileId"],
        layouts=layouts,
        fallback_profile_ids=tuple(registry.get("fallbackProfileIds", ())),
    )
    LOG.debug("expanded %s: %s", profile.profile_id,
              {key: sorted(layout.components) for key, layout in layouts.items()})
    return profile
