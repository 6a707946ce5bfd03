"""Controller: loads settings, creates devices and services, serves requests."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from domoctl.catalog import default_device_factories, default_service_factories
from domoctl.core.config_object import ConfigObject, from_mapping
from domoctl.core.device import Device
from domoctl.core.errors import NodeCreationError
from domoctl.core.factory import CreationContext, FactoryRegistry
from domoctl.core.model import Response, Verb
from domoctl.core.registry import DeviceRegistry
from domoctl.core.service import Service, ServiceManager
from domoctl.core.settings import Settings


class Controller:
    def __init__(
        self,
        settings: Settings,
        *,
        device_factories: FactoryRegistry[Device] | None = None,
        service_factories: FactoryRegistry[Service] | None = None,
    ) -> None:
        self.settings = settings
        self.config = settings.get_config()
        self.devices = DeviceRegistry()
        self.services = ServiceManager()

        context = CreationContext(services=self.services, devices=self.devices)
        created_devices = settings.create_devices(device_factories or default_device_factories(), context)
        created_services = settings.create_services(service_factories or default_service_factories(), context)
        self.load_failures: tuple[NodeCreationError, ...] = created_devices.failures + created_services.failures

    @classmethod
    def from_file(cls, path: Path | str, **kwargs: Any) -> Controller:
        return cls(Settings(path), **kwargs)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return tuple(str(failure) for failure in self.load_failures)

    def request(
        self,
        verb: Verb | str,
        path: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Response:
        if payload is not None and not isinstance(payload, ConfigObject):
            payload = from_mapping(payload)
        return self.services.dispatch(verb, path, payload)
