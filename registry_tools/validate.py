"""Registry checks that JSON Schema cannot express

Run after the schema check. Every failure raises ProfileValidationError and
stops the load.
"""
import logging
from pathlib import Path

from core.constants import (
    AXIS_COMPONENT_TYPES,
    HANDEDNESS_GROUPS,
    ComponentProperty,
    ComponentType,
    XR_STANDARD_MAPPING,
)
from core.errors import ProfileValidationError
from core.profile import VisualResponse

LOG = logging.getLogger("xrprofiles.registry")

SCHEMA_PATH = Path(__file__).with_name("registry.schema.json")

AXIS_PROPERTIES = (ComponentProperty.X_AXIS.value, ComponentProperty.Y_AXIS.value)


def check_handedness_keys(keys, where: str):
    if frozenset(keys) not in HANDEDNESS_GROUPS:
        raise ProfileValidationError(f"{where}: handedness keys {sorted(keys)} mix incompatible layouts")


def check_visual_response(response: VisualResponse, component_type: str, where: str):
    """Shared by registry validation and asset override merging."""
    if response.component_property in AXIS_PROPERTIES and component_type not in AXIS_COMPONENT_TYPES:
        raise ProfileValidationError(
            f"{where}: {response.component_property} response on a {component_type} component")
    if not isinstance(response.value_node_name, str) or not response.value_node_name:
        raise ProfileValidationError(f"{where}: valueNodeName must be a non-empty string")
    if not response.is_transform:
        return
    min_node, max_node = response.min_node_name, response.max_node_name
    for label, node in (("minNodeName", min_node), ("maxNodeName", max_node)):
        if not isinstance(node, str) or not node:
            raise ProfileValidationError(f"{where}: transform response requires a non-empty {label}")
    if min_node == max_node:
        raise ProfileValidationError(
            f"{where}: transform response needs distinct min and max nodes (got {min_node!r} for both)")


def validate_registry_profile(profile: dict):
    profile_id = profile.get("profileId", "<unknown>")
    layouts = profile["layouts"]
    check_handedness_keys(layouts.keys(), f"registry profile {profile_id}")
    for handedness, layout in layouts.items():
        _validate_layout(f"{profile_id} {handedness} layout", layout)
    LOG.debug("registry profile %s passed structural validation", profile_id)


def _validate_layout(where: str, layout: dict):
    components = layout["components"]
    if not components:
        raise ProfileValidationError(f"{where}: no components declared")

    select_id = layout["selectComponentId"]
    if select_id not in components:
        raise ProfileValidationError(f"{where}: no select component {select_id!r} found")
    if components[select_id].get("reserved"):
        raise ProfileValidationError(f"{where}: select component {select_id!r} is reserved")

    for component_id, component in components.items():
        component_type = component["type"]
        if component.get("touchPointNodeName") and component_type != ComponentType.TOUCHPAD.value:
            raise ProfileValidationError(
                f"{where}: touchPointNodeName on non-touchpad component {component_id!r}")
        for name, raw in component.get("visualResponses", {}).items():
            check_visual_response(
                VisualResponse.from_dict(raw), component_type,
                f"{where}, component {component_id!r}, response {name!r}")

    gamepad = layout.get("gamepad")
    if gamepad:
        _validate_gamepad(where, layout, gamepad)


def _validate_gamepad(where: str, layout: dict, gamepad: dict):
    components = layout["components"]
    select_id = layout["selectComponentId"]
    mapping = gamepad.get("mapping", "")
    buttons = gamepad.get("buttons")
    axes = gamepad.get("axes")

    if buttons is None and axes is None:
        if mapping == XR_STANDARD_MAPPING:
            triggers = [cid for cid, c in components.items() if c["type"] == ComponentType.TRIGGER.value]
            if not triggers or triggers[0] != select_id:
                raise ProfileValidationError(
                    f"{where}: xr-standard requires the select component to be the first trigger")
        return

    buttons = buttons or []
    axes = axes or []
    referenced = set()

    for index, component_id in enumerate(buttons):
        if component_id is None:
            continue
        if component_id not in components:
            raise ProfileValidationError(f"{where}: gamepad button {index} names unknown component {component_id!r}")
        if component_id in referenced:
            raise ProfileValidationError(f"{where}: component {component_id!r} appears twice in gamepad buttons")
        referenced.add(component_id)

    seen_axes = set()
    for index, entry in enumerate(axes):
        if entry is None:
            continue
        component_id = entry["componentId"]
        if component_id not in components:
            raise ProfileValidationError(f"{where}: gamepad axis {index} names unknown component {component_id!r}")
        if components[component_id]["type"] not in AXIS_COMPONENT_TYPES:
            raise ProfileValidationError(
                f"{where}: gamepad axis {index} assigned to {components[component_id]['type']} {component_id!r}")
        key = (component_id, entry["axis"])
        if key in seen_axes:
            raise ProfileValidationError(f"{where}: {entry['axis']} of {component_id!r} appears twice in gamepad axes")
        seen_axes.add(key)
        referenced.add(component_id)

    for component_id, component in components.items():
        if not component.get("reserved") and component_id not in referenced:
            raise ProfileValidationError(f"{where}: component {component_id!r} is missing from the gamepad mapping")

    if mapping == XR_STANDARD_MAPPING:
        if not buttons or buttons[0] != select_id:
            raise ProfileValidationError(f"{where}: xr-standard requires button 0 to be the select component")
        if components[select_id]["type"] != ComponentType.TRIGGER.value:
            raise ProfileValidationError(f"{where}: xr-standard select component must be a trigger")
