"""Device base types and typed state declarations."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from domoctl.core.coercion import enum_ordinal, validate_kind
from domoctl.core.config_object import ConfigObject
from domoctl.core.errors import UnsupportedParameterType
from domoctl.core.model import ParamKind

_KIND = "domoctl.kind"
_ENUM = "domoctl.enum"
_ITEM_KIND = "domoctl.item_kind"
_SETTABLE = "domoctl.settable"


def state_field(
    kind: ParamKind,
    default: Any = dataclasses.MISSING,
    *,
    enum: type[Enum] | None = None,
    item_kind: ParamKind | None = None,
    settable: bool = True,
) -> Any:
    """Declare a typed device state field.

    Settable fields can be changed through merge-updates; the rest are
    reported in snapshots only.
    """
    metadata = {_KIND: kind, _ENUM: enum, _ITEM_KIND: item_kind, _SETTABLE: settable}
    return dataclasses.field(default=default, metadata=metadata)


@dataclass(frozen=True)
class StateField:
    name: str
    kind: ParamKind
    enum: type[Enum] | None
    item_kind: ParamKind | None
    settable: bool


@dataclass(frozen=True)
class DeviceState:
    name: str = state_field(ParamKind.STR, "", settable=False)
    type: str = state_field(ParamKind.STR, "", settable=False)


def state_fields(state_cls: type[DeviceState]) -> tuple[StateField, ...]:
    """Describe the declared fields of ``state_cls``, rejecting unsupported kinds."""
    described: list[StateField] = []
    for f in dataclasses.fields(state_cls):
        kind = f.metadata.get(_KIND)
        if kind is ParamKind.OBJECT:
            raise UnsupportedParameterType(f"{state_cls.__name__}.{f.name}: state fields cannot be objects")
        validate_kind(
            kind,
            enum=f.metadata.get(_ENUM),
            item_kind=f.metadata.get(_ITEM_KIND),
            context=f"{state_cls.__name__}.{f.name}",
        )
        described.append(
            StateField(
                name=f.name,
                kind=kind,
                enum=f.metadata.get(_ENUM),
                item_kind=f.metadata.get(_ITEM_KIND),
                settable=f.metadata.get(_SETTABLE, True),
            )
        )
    return tuple(described)


class Device:
    """Base class for devices.

    The device owns its state. ``copy_state`` hands out value copies and
    ``apply_state`` is the single commit point; both are called by the
    registry while it holds this device's lock.
    """

    State: type[DeviceState] = DeviceState

    def __init__(self, name: str, config: ConfigObject | None = None) -> None:
        self.name = name
        self.config = config if config is not None else ConfigObject()
        self._state = self.State(name=name, type=self.type_name)

    @property
    def type_name(self) -> str:
        return type(self).__name__

    def copy_state(self) -> DeviceState:
        return dataclasses.replace(self._state)

    def apply_state(self, state: DeviceState) -> None:
        if not isinstance(state, self.State):
            raise TypeError(f"{self.name} expects {self.State.__name__}, got {type(state).__name__}")
        current = dataclasses.replace(state, name=self.name, type=self.type_name)
        self.on_apply(self._state, current)
        self._state = current

    def on_apply(self, previous: DeviceState, current: DeviceState) -> None:
        """Hook for subclasses that drive hardware when state changes.

        Runs before the new state is stored; raising keeps the previous state.
        """


def snapshot_to_dict(state: DeviceState) -> dict[str, Any]:
    """Render a snapshot as plain JSON-ready data."""
    rendered: dict[str, Any] = {}
    for f in dataclasses.fields(state):
        rendered[f.name] = _render(getattr(state, f.name))
    return rendered


def _render(value: Any) -> Any:
    if isinstance(value, Enum):
        return enum_ordinal(value)
    if isinstance(value, (tuple, list)):
        return [_render(item) for item in value]
    return value
