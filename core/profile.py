"""Profile value objects and the JSON document shapes they read and write

Every record here is frozen, and its mapping fields are read-only views over
private copies. Expansion and merging always build new records, so a built
profile never shares mutable state with the profile it was built from.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from core.constants import ALL_STATES, VisualResponseProperty
from core.errors import MissingAssetError, ProfileError


def _drop_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


def _freeze(record, *names):
    # frozen dataclasses only block attribute assignment; copy the mappings too
    for name in names:
        value = getattr(record, name)
        if value is not None:
            object.__setattr__(record, name, MappingProxyType(dict(value)))


@dataclass(frozen=True)
class GamepadIndices:
    button: Optional[int] = None
    x_axis: Optional[int] = None
    y_axis: Optional[int] = None

    def is_empty(self) -> bool:
        return self.button is None and self.x_axis is None and self.y_axis is None

    def to_dict(self) -> dict:
        return _drop_none({"button": self.button, "xAxis": self.x_axis, "yAxis": self.y_axis})

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        data = data or {}
        return cls(button=data.get("button"), x_axis=data.get("xAxis"), y_axis=data.get("yAxis"))


@dataclass(frozen=True)
class VisualResponse:
    """Binds one channel of a component's state to a named model node."""
    component_property: str  # button | xAxis | yAxis | state
    value_node_property: str  # transform | visibility
    value_node_name: str
    min_node_name: Optional[str] = None
    max_node_name: Optional[str] = None
    states: Tuple[str, ...] = ALL_STATES

    @property
    def is_transform(self) -> bool:
        return self.value_node_property == VisualResponseProperty.TRANSFORM.value

    @property
    def node_names(self) -> Tuple[str, ...]:
        if self.is_transform:
            return (self.value_node_name, self.min_node_name, self.max_node_name)
        return (self.value_node_name,)

    def to_dict(self) -> dict:
        return _drop_none({
            "componentProperty": self.component_property,
            "states": list(self.states),
            "valueNodeProperty": self.value_node_property,
            "valueNodeName": self.value_node_name,
            "minNodeName": self.min_node_name,
            "maxNodeName": self.max_node_name,
        })

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            component_property=data["componentProperty"],
            value_node_property=data["valueNodeProperty"],
            value_node_name=data.get("valueNodeName", ""),
            min_node_name=data.get("minNodeName"),
            max_node_name=data.get("maxNodeName"),
            states=tuple(data.get("states", ALL_STATES)),
        )


def _responses_from_dict(data: Optional[dict]) -> Dict[str, VisualResponse]:
    return {name: VisualResponse.from_dict(raw) for name, raw in (data or {}).items()}


@dataclass(frozen=True)
class Component:
    id: str
    type: str
    root_node_name: str
    gamepad_indices: GamepadIndices = field(default_factory=GamepadIndices)
    touch_point_node_name: Optional[str] = None
    visual_responses: Mapping[str, VisualResponse] = field(default_factory=dict)
    reserved: bool = False

    def __post_init__(self):
        _freeze(self, "visual_responses")

    def to_dict(self) -> dict:
        data = {
            "type": self.type,
            "rootNodeName": self.root_node_name,
            "gamepadIndices": self.gamepad_indices.to_dict(),
            "visualResponses": {name: vr.to_dict() for name, vr in self.visual_responses.items()},
        }
        if self.touch_point_node_name:
            data["touchPointNodeName"] = self.touch_point_node_name
        if self.reserved:
            data["reserved"] = True
        return data

    @classmethod
    def from_dict(cls, component_id: str, data: dict):
        return cls(
            id=component_id,
            type=data["type"],
            root_node_name=data.get("rootNodeName", component_id),
            gamepad_indices=GamepadIndices.from_dict(data.get("gamepadIndices")),
            touch_point_node_name=data.get("touchPointNodeName"),
            visual_responses=_responses_from_dict(data.get("visualResponses")),
            reserved=bool(data.get("reserved", False)),
        )


@dataclass(frozen=True)
class Layout:
    handedness: str
    select_component_id: str
    components: Mapping[str, Component]
    reserved_components: Mapping[str, Component] = field(default_factory=dict)
    gamepad_mapping: str = ""
    asset_path: Optional[str] = None

    def __post_init__(self):
        _freeze(self, "components", "reserved_components")

    def require_asset_path(self) -> str:
        if not self.asset_path:
            raise MissingAssetError(f"No asset path configured for the {self.handedness} layout")
        return self.asset_path

    @property
    def select_component(self) -> Component:
        return self.components[self.select_component_id]

    def to_dict(self) -> dict:
        return {
            "selectComponentId": self.select_component_id,
            "gamepadMapping": self.gamepad_mapping,
            "assetPath": self.asset_path,
            "components": {cid: c.to_dict() for cid, c in self.components.items()},
            "reservedComponents": {cid: c.to_dict() for cid, c in self.reserved_components.items()},
        }

    @classmethod
    def from_dict(cls, handedness: str, data: dict):
        return cls(
            handedness=handedness,
            select_component_id=data["selectComponentId"],
            components={cid: Component.from_dict(cid, raw) for cid, raw in data.get("components", {}).items()},
            reserved_components={
                cid: Component.from_dict(cid, {**raw, "reserved": True})
                for cid, raw in data.get("reservedComponents", {}).items()
            },
            gamepad_mapping=data.get("gamepadMapping", ""),
            asset_path=data.get("assetPath"),
        )


@dataclass(frozen=True)
class Profile:
    profile_id: str
    layouts: Mapping[str, Layout]
    fallback_profile_ids: Tuple[str, ...] = ()

    def __post_init__(self):
        _freeze(self, "layouts")

    def layout_for(self, handedness: str) -> Layout:
        """Return the layout serving `handedness`.

        An exact key wins; otherwise a combined key such as `left-right`
        serves each of the hands it names.
        """
        if handedness in self.layouts:
            return self.layouts[handedness]
        for key, layout in self.layouts.items():
            if handedness in key.split("-"):
                return layout
        raise ProfileError(f"Profile {self.profile_id} has no layout for handedness {handedness!r}")

    def to_dict(self) -> dict:
        return {
            "profileId": self.profile_id,
            "fallbackProfileIds": list(self.fallback_profile_ids),
            "layouts": {key: layout.to_dict() for key, layout in self.layouts.items()},
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            profile_id=data["profileId"],
            layouts={key: Layout.from_dict(key, raw) for key, raw in data["layouts"].items()},
            fallback_profile_ids=tuple(data.get("fallbackProfileIds", ())),
        )


@dataclass(frozen=True)
class ComponentOverride:
    root_node_name: Optional[str] = None
    touch_point_node_name: Optional[str] = None
    visual_responses: Optional[Mapping[str, VisualResponse]] = None

    def __post_init__(self):
        _freeze(self, "visual_responses")

    @classmethod
    def from_dict(cls, data: dict):
        responses = data.get("visualResponses")
        return cls(
            root_node_name=data.get("rootNodeName"),
            touch_point_node_name=data.get("touchPointNodeName"),
            visual_responses=_responses_from_dict(responses) if responses is not None else None,
        )


@dataclass(frozen=True)
class LayoutOverride:
    asset_path: Optional[str] = None
    components: Mapping[str, ComponentOverride] = field(default_factory=dict)

    def __post_init__(self):
        _freeze(self, "components")

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            asset_path=data.get("assetPath"),
            components={cid: ComponentOverride.from_dict(raw) for cid, raw in data.get("components", {}).items()},
        )


@dataclass(frozen=True)
class AssetOverrides:
    profile_id: str
    overrides: Mapping[str, LayoutOverride] = field(default_factory=dict)

    def __post_init__(self):
        _freeze(self, "overrides")

    @classmethod
    def empty(cls, profile_id: str):
        return cls(profile_id=profile_id)

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            profile_id=data["profileId"],
            overrides={key: LayoutOverride.from_dict(raw) for key, raw in data.get("overrides", {}).items()},
        )
