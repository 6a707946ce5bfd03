"""Stable public API for building tooling on top of domoctl.

This module is the supported integration surface for third-party callers
(transports, dashboards, scripts). Avoid importing from internal modules
unless intentionally depending on non-stable internals.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from domoctl.core.config_object import ConfigObject, build, from_mapping, to_xml
from domoctl.core.controller import Controller
from domoctl.core.device import Device, DeviceState, snapshot_to_dict, state_field
from domoctl.core.errors import (
    BadRequest,
    CoercionError,
    ConfigLoadError,
    DeviceNotFound,
    DomoctlError,
    HandlerError,
    NodeCreationError,
    RequestError,
    RouteConfigurationError,
    RouteNotFound,
    UnsupportedParameterType,
)
from domoctl.core.factory import CreationContext, FactoryRegistry
from domoctl.core.model import Event, ParamKind, ParamSpec, Response, Verb
from domoctl.core.service import Service
from domoctl.core.settings import Settings

__all__ = [
    "DomoctlError",
    "ConfigLoadError",
    "NodeCreationError",
    "RouteConfigurationError",
    "UnsupportedParameterType",
    "CoercionError",
    "RequestError",
    "RouteNotFound",
    "BadRequest",
    "HandlerError",
    "DeviceNotFound",
    "ConfigObject",
    "build",
    "from_mapping",
    "to_xml",
    "Device",
    "DeviceState",
    "state_field",
    "snapshot_to_dict",
    "CreationContext",
    "FactoryRegistry",
    "Event",
    "ParamKind",
    "ParamSpec",
    "Response",
    "Verb",
    "Service",
    "Settings",
    "Client",
]


class Client:
    """Public client over a loaded controller.

    Failures of individual requests are raised as ``RequestError``
    subclasses; use ``request`` to receive them as a ``Response`` instead.
    """

    def __init__(self, controller: Controller) -> None:
        self._controller = controller

    @classmethod
    def from_file(cls, path: Path | str, **kwargs: Any) -> Client:
        return cls(Controller.from_file(path, **kwargs))

    @property
    def config(self) -> dict[str, str]:
        return dict(self._controller.config)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._controller.load_warnings

    def request(self, verb: Verb | str, path: str, payload: Mapping[str, Any] | None = None) -> Response:
        return self._controller.request(verb, path, payload)

    def list_devices(self) -> list[DeviceState]:
        return self._unwrap(self.request(Verb.READ, "device/list"))

    def device_status(self, name: str) -> DeviceState:
        return self._unwrap(self.request(Verb.READ, f"device/status/{name}"))

    def update_device(self, name: str, changes: Mapping[str, Any]) -> DeviceState:
        return self._unwrap(self.request(Verb.WRITE, f"device/status/{name}", changes))

    def send_event(self, name: str, data: Mapping[str, str] | None = None) -> None:
        self._unwrap(self.request(Verb.WRITE, "events", {"name": name, "data": dict(data or {})}))

    @staticmethod
    def _unwrap(response: Response) -> Any:
        if response.error is not None:
            raise response.error
        return response.value
