import pytest

from asset_tools import build as asset_build
from core.errors import SchemaValidationError
from core.schema import SchemaValidator
from registry_tools import validate as registry_validate


@pytest.fixture(scope="module")
def registry_schema():
    return SchemaValidator.from_file(registry_validate.SCHEMA_PATH, "registry")


@pytest.fixture(scope="module")
def asset_schema():
    return SchemaValidator.from_file(asset_build.SCHEMA_PATH, "asset")


def test_registry_documents_pass(registry_schema, acme_registry, touch_registry, touchpad_registry):
    for doc in (acme_registry, touch_registry, touchpad_registry):
        assert registry_schema.errors(doc) == []


def test_mixed_handedness_keys_fail(registry_schema, acme_registry):
    layout = acme_registry["layouts"]["left-right"]
    acme_registry["layouts"]["left"] = layout

    with pytest.raises(SchemaValidationError) as info:
        registry_schema.validate(acme_registry)

    assert [e["path"] for e in info.value.errors] == ["layouts"]
    assert "registry document failed schema validation" in str(info.value)


def test_left_without_right_fails(registry_schema, touch_registry):
    del touch_registry["layouts"]["right"]
    assert registry_schema.errors(touch_registry)


def test_component_requires_type(registry_schema, acme_registry):
    acme_registry["layouts"]["left-right"]["components"]["trigger"] = {"reserved": False}
    assert registry_schema.errors(acme_registry)


def test_unknown_gamepad_mapping_fails(registry_schema, touch_registry):
    touch_registry["layouts"]["left"]["gamepad"]["mapping"] = "standard"
    assert registry_schema.errors(touch_registry)


def test_empty_overrides_pass(asset_schema):
    assert asset_schema.errors({"profileId": "acme-controller", "overrides": {}}) == []


def test_partial_left_right_overrides_pass(asset_schema):
    doc = {"profileId": "acme-touch", "overrides": {"left": {"assetPath": "left.glb"}}}
    assert asset_schema.errors(doc) == []


def test_mixed_override_handedness_fails(asset_schema):
    doc = {
        "profileId": "acme-controller",
        "overrides": {"left": {"assetPath": "a.glb"}, "left-right": {"assetPath": "b.glb"}},
    }
    assert asset_schema.errors(doc)


def test_override_response_needs_value_node(asset_schema):
    doc = {
        "profileId": "acme-controller",
        "overrides": {"left-right": {"components": {"trigger": {"visualResponses": {
            "pressed": {"componentProperty": "button", "valueNodeProperty": "transform"},
        }}}}},
    }
    errors = asset_schema.errors(doc)
    assert len(errors) == 1
    assert errors[0]["path"] == "overrides"


def test_errors_sorted_by_path(registry_schema, acme_registry):
    acme_registry["profileId"] = "Acme Controller"
    del acme_registry["layouts"]["left-right"]["selectComponentId"]
    acme_registry["unexpected"] = True

    with pytest.raises(SchemaValidationError) as info:
        registry_schema.validate(acme_registry)

    paths = [err["path"] for err in info.value.errors]
    assert paths == sorted(paths)
    assert "profileId" in paths and "layouts" in paths
