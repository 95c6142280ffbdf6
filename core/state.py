"""Runtime state models and lightweight DTOs"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from core.constants import ComponentState


@dataclass
class GamepadButton:
    value: float = 0.0
    touched: bool = False
    pressed: bool = False


@dataclass
class GamepadState:
    """A snapshot of a gamepad-like input: flat button and axis arrays."""
    id: str = ""
    mapping: str = ""
    buttons: List[GamepadButton] = field(default_factory=list)
    axes: List[float] = field(default_factory=list)

    @classmethod
    def for_layout(cls, layout, profile_id: str = ""):
        """Zeroed gamepad with room for every index the layout uses."""
        max_button = 0
        max_axis = 0
        for component in list(layout.components.values()) + list(layout.reserved_components.values()):
            idx = component.gamepad_indices
            if idx.button is not None:
                max_button = max(max_button, idx.button)
            for axis in (idx.x_axis, idx.y_axis):
                if axis is not None:
                    max_axis = max(max_axis, axis)
        return cls(
            id=profile_id,
            mapping=layout.gamepad_mapping,
            buttons=[GamepadButton() for _ in range(max_button + 1)],
            axes=[0.0] * (max_axis + 1),
        )


@dataclass
class ComponentData:
    state: str = ComponentState.DEFAULT.value
    button: float = 0.0
    x_axis: float = 0.0
    y_axis: float = 0.0
    # visual response name -> weight (0..1) or visibility flag
    responses: Dict[str, Union[float, bool]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "state": self.state,
            "button": self.button,
            "xAxis": self.x_axis,
            "yAxis": self.y_axis,
            "responses": dict(self.responses),
        }


@dataclass(frozen=True)
class MockInputSource:
    """Stand-in for an XR input source: a gamepad, a hand, and the profile
    ids the device reports, most specific first."""
    gamepad: GamepadState
    handedness: str
    profiles: Tuple[str, ...] = ()

    @classmethod
    def for_gamepad(cls, gamepad: GamepadState, handedness: str):
        if not handedness:
            raise ValueError("No handedness supplied")
        return cls(gamepad=gamepad, handedness=handedness, profiles=(gamepad.id,))
