"""In-memory lamp device."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from domoctl.core.coercion import enum_from_ordinal
from domoctl.core.config_object import ConfigObject
from domoctl.core.device import Device, DeviceState, state_field
from domoctl.core.factory import CreationContext
from domoctl.core.model import ParamKind

LOGGER = logging.getLogger(__name__)


class Scene(Enum):
    NORMAL = "normal"
    NIGHT = "night"
    READING = "reading"
    PARTY = "party"


@dataclass(frozen=True)
class LampState(DeviceState):
    on: bool = state_field(ParamKind.BOOL, False)
    level: float = state_field(ParamKind.FLOAT, 1.0)
    scene: Scene = state_field(ParamKind.ENUM, Scene.NORMAL, enum=Scene)
    room: str = state_field(ParamKind.STR, "", settable=False)
    tags: tuple[str, ...] = state_field(ParamKind.LIST, (), item_kind=ParamKind.STR)


class Lamp(Device):
    State = LampState

    def __init__(self, name: str, config: ConfigObject | None = None) -> None:
        super().__init__(name, config)
        tags = self.config.get("tags", ())
        self._state = LampState(
            name=name,
            type=self.type_name,
            on=self.config.get_bool("on", False),
            level=self.config.get_float("level", 1.0),
            scene=enum_from_ordinal(Scene, self.config.get_int("scene", 0)),
            room=self.config.get_str("room", ""),
            tags=tuple(tag.get_str("value", "") for tag in tags if isinstance(tag, ConfigObject)),
        )

    @classmethod
    def from_config(cls, config: ConfigObject, context: CreationContext) -> Lamp:
        return cls(config.get_str("name"), config)

    def on_apply(self, previous: DeviceState, current: DeviceState) -> None:
        if previous != current:
            LOGGER.debug("%s: %s -> %s", self.name, previous, current)
