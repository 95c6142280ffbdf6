"""Merge an expanded registry Profile with asset overrides

Override wins when present, else the registry value is inherited. Visual
responses are replaced per component as a whole, never field by field.
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from core.constants import ComponentType
from core.errors import ProfileValidationError
from core.profile import AssetOverrides, Component, ComponentOverride, Layout, LayoutOverride, Profile
from registry_tools.validate import check_handedness_keys, check_visual_response

LOG = logging.getLogger("xrprofiles.assets")

SCHEMA_PATH = Path(__file__).with_name("asset.schema.json")


def _ignored(strict: bool, message: str):
    if strict:
        raise ProfileValidationError(message)
    LOG.warning("%s; ignoring", message)


def merge_component(component: Component, override: Optional[ComponentOverride], where: str = "") -> Component:
    if override is None:
        return component

    if override.touch_point_node_name and component.type != ComponentType.TOUCHPAD.value:
        raise ProfileValidationError(f"{where}: touchPointNodeName override on a {component.type} component")

    responses = component.visual_responses
    if override.visual_responses is not None:
        responses = dict(override.visual_responses)
        for name, response in responses.items():
            check_visual_response(response, component.type, f"{where}, response {name!r}")

    return replace(
        component,
        root_node_name=override.root_node_name or component.root_node_name,
        touch_point_node_name=override.touch_point_node_name or component.touch_point_node_name,
        visual_responses=responses,
    )


def merge_layout(layout: Layout, override: Optional[LayoutOverride], profile_id: str = "",
                 strict: bool = False) -> Layout:
    if override is None:
        return layout

    where = f"{profile_id} {layout.handedness} override"
    for component_id in override.components:
        if component_id not in layout.components and component_id not in layout.reserved_components:
            _ignored(strict, f"{where}: component {component_id!r} is not in the registry layout")

    def merged(components):
        return {
            cid: merge_component(c, override.components.get(cid), f"{where}, component {cid!r}")
            for cid, c in components.items()
        }

    return replace(
        layout,
        asset_path=override.asset_path,
        components=merged(layout.components),
        reserved_components=merged(layout.reserved_components),
    )


def build_asset_profile(overrides: AssetOverrides, profile: Profile, strict: bool = False) -> Profile:
    """Return the concrete profile for `profile` with `overrides` applied.

    Only layouts present in the registry profile appear in the result;
    overrides for other handedness keys never add a layout.
    """
    if overrides.profile_id != profile.profile_id:
        raise ProfileValidationError(
            f"Asset overrides for {overrides.profile_id!r} do not match registry profile {profile.profile_id!r}")
    if overrides.overrides:
        check_handedness_keys(
            _complete_group(overrides.overrides.keys()), f"asset overrides {overrides.profile_id}")

    for handedness in overrides.overrides:
        if handedness not in profile.layouts:
            _ignored(strict, f"{profile.profile_id}: override for handedness {handedness!r} has no registry layout")

    layouts = {
        handedness: merge_layout(layout, overrides.overrides.get(handedness), profile.profile_id, strict)
        for handedness, layout in profile.layouts.items()
    }
    LOG.debug("built asset profile %s: %s", profile.profile_id,
              {key: layout.asset_path for key, layout in layouts.items()})
    return replace(profile, layouts=layouts)


def _complete_group(keys):
    """Override keys are optional; widen a partial set to the group it belongs to."""
    keys = set(keys)
    if keys <= {"left", "right", "none"} and keys & {"left", "right"}:
        return {"left", "right"} | (keys & {"none"})
    return keys
