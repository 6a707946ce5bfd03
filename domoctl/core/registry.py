"""Device registry with per-device locked snapshot and merge-update."""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from domoctl.core.coercion import coerce
from domoctl.core.config_object import ConfigObject, from_mapping
from domoctl.core.device import Device, DeviceState, StateField, state_fields
from domoctl.core.errors import BadRequest, CoercionError, DeviceNotFound, NodeCreationError
from domoctl.core.model import ParamKind

LOGGER = logging.getLogger(__name__)


@dataclass
class _Entry:
    device: Device
    fields: tuple[StateField, ...]
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class DeviceRegistry:
    """Devices by name, each paired with its own lock.

    Entries are added while settings load, before any request is served.
    Every state read or write happens under the entry's lock, and no call
    ever holds more than one device lock.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}

    def add(self, device: Device) -> None:
        if device.name in self._entries:
            raise NodeCreationError(f"Duplicate device name '{device.name}'")
        fields = state_fields(device.State)
        self._entries[device.name] = _Entry(device=device, fields=fields)

    def get(self, name: str) -> Device:
        return self._entry(name).device

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def snapshot(self, name: str) -> DeviceState:
        entry = self._entry(name)
        with entry.lock:
            return entry.device.copy_state()

    def snapshots(self) -> list[DeviceState]:
        states: list[DeviceState] = []
        for entry in list(self._entries.values()):
            with entry.lock:
                states.append(entry.device.copy_state())
        return states

    def merge(self, name: str, partial: Mapping[str, Any] | None) -> DeviceState:
        """Overwrite the settable fields present in ``partial`` and commit atomically.

        Fields absent from ``partial`` keep their current value. A field that
        fails coercion rejects the whole update before the lock is taken.
        """
        entry = self._entry(name)
        if partial is None:
            partial = ConfigObject()
        elif not isinstance(partial, Mapping):
            raise BadRequest(f"State update for '{name}' must be a mapping, got {type(partial).__name__}")
        elif not isinstance(partial, ConfigObject):
            partial = from_mapping(partial)

        changes = _coerce_changes(entry.fields, partial)

        with entry.lock:
            state = entry.device.copy_state()
            if changes:
                state = dataclasses.replace(state, **changes)
            entry.device.apply_state(state)
            result = entry.device.copy_state()

        LOGGER.debug("Merged %s into device %s", sorted(changes), name)
        return result

    def _entry(self, name: str) -> _Entry:
        entry = self._entries.get(name)
        if entry is None:
            raise DeviceNotFound(f"Unknown device: {name}")
        return entry


def _coerce_changes(fields: tuple[StateField, ...], partial: ConfigObject) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    for spec in fields:
        if spec.name not in partial or not spec.settable:
            continue
        if spec.kind is ParamKind.LIST:
            # Lists are not bound from payloads.
            continue
        try:
            changes[spec.name] = coerce(partial[spec.name], spec.kind, enum=spec.enum)
        except CoercionError as exc:
            raise BadRequest(f"Invalid value for '{spec.name}': {exc}") from exc
    return changes
