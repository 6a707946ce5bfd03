"""Built-in service and device types."""

from __future__ import annotations

from domoctl.core.device import Device
from domoctl.core.factory import FactoryRegistry
from domoctl.core.service import Service
from domoctl.devices.lamp import Lamp
from domoctl.services.device_manager import DeviceManagerService
from domoctl.services.events import EventService


def default_device_factories() -> FactoryRegistry[Device]:
    factories: FactoryRegistry[Device] = FactoryRegistry("device")
    factories.register("Lamp", Lamp.from_config)
    return factories


def default_service_factories() -> FactoryRegistry[Service]:
    factories: FactoryRegistry[Service] = FactoryRegistry("service")
    factories.register("DeviceManager", DeviceManagerService.from_config)
    factories.register("Events", EventService.from_config)
    return factories
