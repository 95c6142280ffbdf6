import pytest

from core.errors import ProfileValidationError, ResourceLoadError, SchemaValidationError
from core.profile import Profile
from pipeline import ProfileBuilder


@pytest.fixture(scope="module")
def builder():
    return ProfileBuilder()


def test_build_from_files(builder, write_json, acme_registry):
    registry = write_json("acme-controller.json", acme_registry)
    asset = write_json("profile.json", {
        "profileId": "acme-controller",
        "overrides": {"left-right": {"assetPath": "model.glb"}},
    })

    profile = builder.build_files(registry, asset)

    assert profile.layouts["left-right"].asset_path == "model.glb"
    assert list(profile.layouts["left-right"].components) == ["trigger"]


def test_missing_asset_document_means_empty_overrides(builder, acme_registry):
    profile = builder.build(acme_registry)
    assert profile.layouts["left-right"].asset_path is None


def test_schema_failure_stops_build(builder, acme_registry):
    acme_registry["layouts"]["none"] = acme_registry["layouts"]["left-right"]
    with pytest.raises(SchemaValidationError) as info:
        builder.build(acme_registry)
    assert info.value.document_kind == "registry"


def test_asset_schema_failure_stops_build(builder, acme_registry):
    with pytest.raises(SchemaValidationError) as info:
        builder.build(acme_registry, {"profileId": "acme-controller"})
    assert info.value.document_kind == "asset"


def test_structural_failure_stops_build(builder, acme_registry):
    acme_registry["layouts"]["left-right"]["selectComponentId"] = "grip"
    with pytest.raises(ProfileValidationError):
        builder.build(acme_registry)


def test_unreadable_json(builder, tmp_path):
    bad = tmp_path / "broken.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ResourceLoadError) as info:
        builder.build_files(bad)
    assert info.value.path == str(bad)

    with pytest.raises(ResourceLoadError):
        builder.build_files(tmp_path / "absent.json")


def test_built_profile_reloads_from_its_json(builder, touch_registry):
    profile = builder.build(touch_registry, {
        "profileId": "acme-touch",
        "overrides": {"left": {"assetPath": "left.glb"}, "right": {"assetPath": "right.glb"}},
    })
    assert Profile.from_dict(profile.to_dict()) == profile
