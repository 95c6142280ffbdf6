"""Shared names used by registry documents, asset overrides and the runtime"""
from enum import Enum


class Handedness(str, Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    LEFT_RIGHT = "left-right"
    LEFT_RIGHT_NONE = "left-right-none"


# Allowed sets of layout keys in one document; a profile declares exactly one.
HANDEDNESS_GROUPS = (
    frozenset({Handedness.NONE.value}),
    frozenset({Handedness.LEFT.value, Handedness.RIGHT.value}),
    frozenset({Handedness.LEFT.value, Handedness.RIGHT.value, Handedness.NONE.value}),
    frozenset({Handedness.LEFT_RIGHT.value}),
    frozenset({Handedness.LEFT_RIGHT_NONE.value}),
)


class ComponentType(str, Enum):
    TRIGGER = "trigger"
    SQUEEZE = "squeeze"
    TOUCHPAD = "touchpad"
    THUMBSTICK = "thumbstick"
    BUTTON = "button"


class ComponentProperty(str, Enum):
    BUTTON = "button"
    X_AXIS = "xAxis"
    Y_AXIS = "yAxis"
    STATE = "state"


class ComponentState(str, Enum):
    DEFAULT = "default"
    TOUCHED = "touched"
    PRESSED = "pressed"


class VisualResponseProperty(str, Enum):
    TRANSFORM = "transform"
    VISIBILITY = "visibility"


XR_STANDARD_MAPPING = "xr-standard"

AXIS_NAMES = {"x-axis": ComponentProperty.X_AXIS.value, "y-axis": ComponentProperty.Y_AXIS.value}

AXIS_COMPONENT_TYPES = frozenset({ComponentType.TOUCHPAD.value, ComponentType.THUMBSTICK.value})

ALL_STATES = (ComponentState.DEFAULT.value, ComponentState.TOUCHED.value, ComponentState.PRESSED.value)

BUTTON_TOUCH_THRESHOLD = 0.05
AXIS_TOUCH_THRESHOLD = 0.1
