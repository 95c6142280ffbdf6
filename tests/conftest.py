import copy
import json

import pytest

ACME_REGISTRY = {
    "profileId": "acme-controller",
    "layouts": {
        "left-right": {
            "selectComponentId": "trigger",
            "components": {"trigger": {"type": "trigger"}},
        }
    },
}

TOUCH_REGISTRY = {
    "profileId": "acme-touch",
    "fallbackProfileIds": ["generic-trigger-squeeze-thumbstick"],
    "layouts": {
        "left": {
            "selectComponentId": "xr-standard-trigger",
            "components": {
                "xr-standard-trigger": {"type": "trigger"},
                "xr-standard-squeeze": {"type": "squeeze"},
                "xr-standard-thumbstick": {"type": "thumbstick"},
                "x-button": {"type": "button"},
                "thumbrest": {"type": "button", "reserved": True},
            },
            "gamepad": {"mapping": "xr-standard"},
        },
        "right": {
            "selectComponentId": "xr-standard-trigger",
            "components": {
                "xr-standard-trigger": {"type": "trigger"},
                "xr-standard-squeeze": {"type": "squeeze"},
                "xr-standard-thumbstick": {"type": "thumbstick"},
                "a-button": {"type": "button"},
                "thumbrest": {"type": "button", "reserved": True},
            },
            "gamepad": {"mapping": "xr-standard"},
        },
    },
}

TOUCHPAD_REGISTRY = {
    "profileId": "acme-wand",
    "layouts": {
        "none": {
            "selectComponentId": "trigger",
            "components": {
                "trigger": {"type": "trigger"},
                "pad": {"type": "touchpad"},
                "menu": {"type": "button"},
            },
            "gamepad": {
                "mapping": "",
                "buttons": ["trigger", None, "pad", "menu"],
                "axes": [
                    {"componentId": "pad", "axis": "x-axis"},
                    {"componentId": "pad", "axis": "y-axis"},
                ],
            },
        }
    },
}


@pytest.fixture
def acme_registry():
    return copy.deepcopy(ACME_REGISTRY)


@pytest.fixture
def touch_registry():
    return copy.deepcopy(TOUCH_REGISTRY)


@pytest.fixture
def touchpad_registry():
    return copy.deepcopy(TOUCHPAD_REGISTRY)


@pytest.fixture
def write_json(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
