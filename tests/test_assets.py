import logging

import pytest

from asset_tools.build import build_asset_profile, merge_component
from core.errors import MissingAssetError, ProfileValidationError
from core.profile import AssetOverrides, ComponentOverride, VisualResponse
from registry_tools.expand import expand_registry_profile


def _overrides(profile_id, overrides):
    return AssetOverrides.from_dict({"profileId": profile_id, "overrides": overrides})


def test_empty_overrides_leave_profile_unchanged(touch_registry):
    expanded = expand_registry_profile(touch_registry)
    built = build_asset_profile(AssetOverrides.empty("acme-touch"), expanded)

    assert built == expanded
    assert all(layout.asset_path is None for layout in built.layouts.values())


def test_built_profile_shares_no_mutable_state(acme_registry):
    raw_components = {"trigger": {"type": "trigger"}}
    acme_registry["layouts"]["left-right"]["components"] = raw_components
    expanded = expand_registry_profile(acme_registry)
    built = build_asset_profile(AssetOverrides.empty("acme-controller"), expanded)

    with pytest.raises(AttributeError):
        built.layouts["left-right"].components.pop("trigger")
    with pytest.raises(TypeError):
        built.layouts["left-right"].components["grip"] = built.layouts["left-right"].components["trigger"]
    with pytest.raises(TypeError):
        built.layouts["right"] = built.layouts["left-right"]
    with pytest.raises(TypeError):
        del built.layouts["left-right"].components["trigger"].visual_responses["trigger_pressed"]

    raw_components.clear()
    assert "trigger" in expanded.layouts["left-right"].components
    assert "trigger" in built.layouts["left-right"].components


def test_asset_path_applied(acme_registry):
    expanded = expand_registry_profile(acme_registry)
    built = build_asset_profile(
        _overrides("acme-controller", {"left-right": {"assetPath": "model.glb"}}), expanded)

    layout = built.layouts["left-right"]
    assert layout.asset_path == "model.glb"
    assert layout.require_asset_path() == "model.glb"
    assert layout.components["trigger"] == expanded.layouts["left-right"].components["trigger"]
    assert built.profile_id == "acme-controller"


def test_override_for_missing_handedness_adds_nothing(acme_registry, caplog):
    expanded = expand_registry_profile(acme_registry)
    with caplog.at_level(logging.WARNING, logger="xrprofiles.assets"):
        built = build_asset_profile(_overrides("acme-controller", {"right": {"assetPath": "r.glb"}}), expanded)

    assert list(built.layouts) == ["left-right"]
    assert built.layouts["left-right"].asset_path is None
    assert "'right' has no registry layout" in caplog.text


def test_override_for_missing_handedness_strict(acme_registry):
    expanded = expand_registry_profile(acme_registry)
    with pytest.raises(ProfileValidationError):
        build_asset_profile(_overrides("acme-controller", {"right": {}}), expanded, strict=True)


def test_visual_responses_replaced_as_a_whole(touch_registry):
    expanded = expand_registry_profile(touch_registry)
    custom = {
        "stick_tilt": {
            "componentProperty": "xAxis",
            "valueNodeProperty": "transform",
            "valueNodeName": "tilt_value",
            "minNodeName": "tilt_min",
            "maxNodeName": "tilt_max",
        }
    }
    built = build_asset_profile(_overrides("acme-touch", {
        "left": {"assetPath": "left.glb",
                 "components": {"xr-standard-thumbstick": {"visualResponses": custom}}},
        "right": {"assetPath": "right.glb"},
    }), expanded)

    stick = built.layouts["left"].components["xr-standard-thumbstick"]
    assert list(stick.visual_responses) == ["stick_tilt"]
    assert stick.visual_responses["stick_tilt"] == VisualResponse.from_dict(custom["stick_tilt"])
    assert stick.gamepad_indices == expanded.layouts["left"].components["xr-standard-thumbstick"].gamepad_indices
    assert built.layouts["right"].components == expanded.layouts["right"].components
    assert built.layouts["right"].asset_path == "right.glb"


def test_node_names_override_individually(touch_registry):
    component = expand_registry_profile(touch_registry).layouts["left"].components["x-button"]
    merged = merge_component(component, ComponentOverride(root_node_name="X_BUTTON"))

    assert merged.root_node_name == "X_BUTTON"
    assert merged.visual_responses == component.visual_responses


def test_unknown_component_ignored_unless_strict(acme_registry):
    expanded = expand_registry_profile(acme_registry)
    overrides = _overrides("acme-controller", {"left-right": {"components": {"grip": {"rootNodeName": "g"}}}})

    built = build_asset_profile(overrides, expanded)
    assert list(built.layouts["left-right"].components) == ["trigger"]

    with pytest.raises(ProfileValidationError, match="'grip'"):
        build_asset_profile(overrides, expanded, strict=True)


def test_override_response_checked(acme_registry):
    expanded = expand_registry_profile(acme_registry)
    overrides = _overrides("acme-controller", {"left-right": {"components": {"trigger": {"visualResponses": {
        "pressed": {"componentProperty": "button", "valueNodeProperty": "transform",
                    "valueNodeName": "v", "minNodeName": "m", "maxNodeName": "m"},
    }}}}})
    with pytest.raises(ProfileValidationError, match="distinct"):
        build_asset_profile(overrides, expanded)


def test_touch_point_override_on_trigger_rejected(acme_registry):
    expanded = expand_registry_profile(acme_registry)
    overrides = _overrides("acme-controller", {
        "left-right": {"components": {"trigger": {"touchPointNodeName": "dot"}}}})
    with pytest.raises(ProfileValidationError, match="touchPointNodeName"):
        build_asset_profile(overrides, expanded)


def test_profile_id_mismatch_rejected(acme_registry):
    expanded = expand_registry_profile(acme_registry)
    with pytest.raises(ProfileValidationError, match="do not match"):
        build_asset_profile(AssetOverrides.empty("other-controller"), expanded)


def test_mixed_override_handedness_rejected(touch_registry):
    expanded = expand_registry_profile(touch_registry)
    overrides = _overrides("acme-touch", {"left": {}, "left-right": {}})
    with pytest.raises(ProfileValidationError, match="incompatible"):
        build_asset_profile(overrides, expanded)


def test_missing_asset_path_fatal_on_use(acme_registry):
    built = build_asset_profile(AssetOverrides.empty("acme-controller"), expand_registry_profile(acme_registry))
    with pytest.raises(MissingAssetError):
        built.layouts["left-right"].require_asset_path()
