"""Motion controller runtime: map a GamepadState onto component data

For each interactive component the controller reads its button and axes,
derives a default/touched/pressed state and computes the value of every
visual response, ready for a viewer to pose or show model nodes.
"""
import logging
import math
from typing import Dict, Mapping

from core.constants import (
    AXIS_TOUCH_THRESHOLD,
    BUTTON_TOUCH_THRESHOLD,
    ComponentProperty,
    ComponentState,
    VisualResponseProperty,
)
from core.profile import Component, Profile, VisualResponse
from core.state import ComponentData, GamepadState

LOG = logging.getLogger("xrprofiles.motion")


def _clamp(value, low, high):
    return max(low, min(high, float(value)))


def normalize_axes(x_axis: float = 0.0, y_axis: float = 0.0):
    """Pull the point inside the unit circle, then map each axis from -1..1 to 0..1."""
    hypotenuse = math.sqrt(x_axis * x_axis + y_axis * y_axis)
    if hypotenuse > 1.0:
        theta = math.atan2(y_axis, x_axis)
        x_axis = math.cos(theta)
        y_axis = math.sin(theta)
    return x_axis * 0.5 + 0.5, y_axis * 0.5 + 0.5


def response_value(response: VisualResponse, data: ComponentData):
    active = data.state in response.states
    prop = response.component_property
    if prop == ComponentProperty.X_AXIS.value:
        return normalize_axes(data.x_axis, data.y_axis)[0] if active else 0.5
    if prop == ComponentProperty.Y_AXIS.value:
        return normalize_axes(data.x_axis, data.y_axis)[1] if active else 0.5
    if prop == ComponentProperty.BUTTON.value:
        return data.button if active else 0.0
    if response.value_node_property == VisualResponseProperty.VISIBILITY.value:
        return active
    return 1.0 if active else 0.0


class MotionController:
    def __init__(self, profile: Profile, handedness: str, asset_path: str = None):
        self.profile = profile
        self.handedness = handedness
        self.layout = profile.layout_for(handedness)
        self.asset_path = asset_path
        self.data: Dict[str, ComponentData] = {cid: ComponentData() for cid in self.components}

    @property
    def components(self) -> Mapping[str, Component]:
        return self.layout.components

    @property
    def select_component(self) -> Component:
        return self.layout.select_component

    def update_from_gamepad(self, gamepad: GamepadState) -> Dict[str, ComponentData]:
        for component_id, component in self.components.items():
            self.data[component_id] = self._map_component(component, gamepad)
        LOG.debug("mapped gamepad -> %s", {cid: d.state for cid, d in self.data.items()})
        return self.data

    def _map_component(self, component: Component, gamepad: GamepadState) -> ComponentData:
        data = ComponentData()
        idx = component.gamepad_indices

        if idx.button is not None and idx.button < len(gamepad.buttons):
            button = gamepad.buttons[idx.button]
            data.button = _clamp(button.value, 0.0, 1.0)
            if button.pressed or data.button == 1.0:
                data.state = ComponentState.PRESSED.value
            elif button.touched or data.button > BUTTON_TOUCH_THRESHOLD:
                data.state = ComponentState.TOUCHED.value

        for attr, axis_index in (("x_axis", idx.x_axis), ("y_axis", idx.y_axis)):
            if axis_index is None or axis_index >= len(gamepad.axes):
                continue
            value = _clamp(gamepad.axes[axis_index], -1.0, 1.0)
            setattr(data, attr, value)
            if data.state == ComponentState.DEFAULT.value and abs(value) > AXIS_TOUCH_THRESHOLD:
                data.state = ComponentState.TOUCHED.value

        for name, response in component.visual_responses.items():
            data.responses[name] = response_value(response, data)
        return data
