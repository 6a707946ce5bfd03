"""Device state service: list devices, read and merge-update device status.

    read  device/list                  -> [snapshot, ...]
    read  device/status/<deviceName>   -> snapshot
    write device/status/<deviceName>   -> snapshot after merging the payload
"""

from __future__ import annotations

from typing import Any

from domoctl.core.config_object import ConfigObject
from domoctl.core.device import DeviceState
from domoctl.core.factory import CreationContext
from domoctl.core.model import ParamKind, ParamSpec, Verb
from domoctl.core.registry import DeviceRegistry
from domoctl.core.service import Service


class DeviceManagerService(Service):
    def __init__(self, devices: DeviceRegistry, name: str = "device") -> None:
        super().__init__(name)
        self.devices = devices

        device_name = ParamSpec("device_name", ParamKind.STR)
        self.route(Verb.READ, "list", self.on_list_devices)
        self.route(Verb.READ, "status/{device_name}", self.on_get_device_status, [device_name])
        self.route(
            Verb.WRITE,
            "status/{device_name}",
            self.on_update_device_status,
            [device_name, ParamSpec("body", ParamKind.OBJECT)],
        )

    @classmethod
    def from_config(cls, config: ConfigObject, context: CreationContext) -> DeviceManagerService:
        return cls(context.devices, name=config.get_str("name", "device") or "device")

    def on_list_devices(self) -> list[DeviceState]:
        return self.devices.snapshots()

    def on_get_device_status(self, device_name: str) -> DeviceState:
        return self.devices.snapshot(device_name)

    def on_update_device_status(self, device_name: str, body: Any = None) -> DeviceState:
        return self.devices.merge(device_name, body)
