import pytest
from pygltflib import GLTF2, Node, Scene

from asset_tools.verify import model_node_names, verify_asset_nodes
from core.errors import ResourceLoadError
from registry_tools.expand import expand_registry_profile


def write_model(path, names):
    gltf = GLTF2(
        nodes=[Node(name=name) for name in names],
        scenes=[Scene(nodes=list(range(len(names))))],
        scene=0,
    )
    gltf.save(str(path))
    return path


def test_node_names_read_from_model(tmp_path):
    model = write_model(tmp_path / "model.gltf", ["root", "trigger_pressed_value"])
    assert model_node_names(model) == {"root", "trigger_pressed_value"}


def test_complete_model_has_no_problems(tmp_path, acme_registry):
    layout = expand_registry_profile(acme_registry).layouts["left-right"]
    model = write_model(tmp_path / "model.gltf", [
        "trigger", "trigger_pressed_value", "trigger_pressed_min", "trigger_pressed_max",
    ])
    assert verify_asset_nodes(layout, model) == []


def test_missing_nodes_reported(tmp_path, touchpad_registry):
    layout = expand_registry_profile(touchpad_registry).layouts["none"]
    model = write_model(tmp_path / "model.gltf", [
        "trigger_pressed_value", "trigger_pressed_min",
        "menu_pressed_value", "menu_pressed_min", "menu_pressed_max",
    ])

    problems = verify_asset_nodes(layout, model)

    assert problems[0] == "Could not find trigger_pressed_max in the model"
    assert "Could not find touch dot, pad_axes_touched_value, in touchpad component pad" in problems
    assert problems.count("Could not find pad_axes_touched_value in the model") == 1
    assert not any("menu" in p for p in problems)


def test_missing_model_file(tmp_path, acme_registry):
    layout = expand_registry_profile(acme_registry).layouts["left-right"]
    with pytest.raises(ResourceLoadError):
        verify_asset_nodes(layout, tmp_path / "absent.glb")
