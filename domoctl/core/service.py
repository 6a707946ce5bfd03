"""Service base class and the manager that routes requests to services."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from domoctl.core.dispatcher import Dispatcher
from domoctl.core.errors import NodeCreationError, RouteNotFound
from domoctl.core.model import ParamSpec, Response, RouteDescriptor, Verb
from domoctl.core.routes import RouteTable

LOGGER = logging.getLogger(__name__)


class Service:
    """A named group of routes. Subclasses call ``route`` from ``__init__``."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.routes = RouteTable()
        self.dispatcher = Dispatcher(self.routes)

    def route(
        self,
        verb: Verb | str,
        template: str,
        handler: Callable[..., Any],
        params: Iterable[ParamSpec] = (),
    ) -> RouteDescriptor:
        return self.routes.register(verb, template, handler, params)

    def dispatch(self, verb: Verb | str, path: str, payload: Mapping[str, Any] | None = None) -> Response:
        return self.dispatcher.dispatch(verb, path, payload)


class ServiceManager:
    def __init__(self) -> None:
        self._services: dict[str, Service] = {}

    def add(self, service: Service) -> None:
        if service.name in self._services:
            raise NodeCreationError(f"Duplicate service name '{service.name}'")
        self._services[service.name] = service

    def get(self, name: str) -> Service | None:
        return self._services.get(name)

    def services(self) -> list[Service]:
        return list(self._services.values())

    def dispatch(self, verb: Verb | str, path: str, payload: Mapping[str, Any] | None = None) -> Response:
        """Route ``<service>/<rest>`` to the named service's dispatcher."""
        service_name, _, rest = path.strip("/").partition("/")
        service = self._services.get(service_name)
        if service is None:
            LOGGER.debug("No service for path '%s'", path)
            return Response(error=RouteNotFound(f"Unknown service '{service_name}'"))
        return service.dispatch(verb, rest, payload)
