"""Request dispatch: resolve a route, bind parameters, invoke the handler."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from domoctl.core.coercion import coerce
from domoctl.core.errors import BadRequest, CoercionError, DomoctlError, HandlerError, RequestError
from domoctl.core.model import ParamKind, ParamSpec, Response, Verb
from domoctl.core.routes import RouteTable

LOGGER = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, routes: RouteTable) -> None:
        self.routes = routes

    def dispatch(self, verb: Verb | str, path: str, payload: Mapping[str, Any] | None = None) -> Response:
        """Run one request. Request-time failures come back in ``Response.error``."""
        try:
            resolved = self.routes.resolve(verb, path)
            kwargs = self._bind(resolved.descriptor.params, resolved.path_params, payload)
        except RequestError as exc:
            return Response(error=exc)

        handler = resolved.descriptor.handler
        try:
            value = handler(**kwargs)
        except RequestError as exc:
            return Response(error=exc)
        except DomoctlError as exc:
            return Response(error=HandlerError(str(exc)))
        except Exception as exc:
            LOGGER.exception("Handler for %s '%s' failed", resolved.descriptor.verb.value, path)
            error = HandlerError(f"{type(exc).__name__}: {exc}")
            error.__cause__ = exc
            return Response(error=error)
        return Response(value=value)

    def _bind(
        self,
        params: tuple[ParamSpec, ...],
        path_params: dict[str, str],
        payload: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        for spec in params:
            if spec.name in path_params:
                kwargs[spec.name] = _coerce_param(spec, path_params[spec.name], source="path")
                continue

            if payload is not None and spec.name in payload:
                raw = payload[spec.name]
                if spec.kind is ParamKind.LIST:
                    LOGGER.debug("List parameter '%s' is not bound from payloads", spec.name)
                    continue
                if spec.kind is ParamKind.OBJECT:
                    kwargs[spec.name] = _build_object(spec, raw)
                else:
                    kwargs[spec.name] = _coerce_param(spec, raw, source="payload")
                continue

            if spec.kind is ParamKind.OBJECT:
                kwargs[spec.name] = _build_object(spec, payload)
            elif spec.required and spec.kind is not ParamKind.LIST:
                raise BadRequest(f"Missing required parameter '{spec.name}'")
        return kwargs


def _coerce_param(spec: ParamSpec, raw: Any, *, source: str) -> Any:
    try:
        return coerce(raw, spec.kind, enum=spec.enum)
    except CoercionError as exc:
        raise BadRequest(f"Invalid {source} parameter '{spec.name}': {exc}") from exc


def _build_object(spec: ParamSpec, raw: Any) -> Any:
    if spec.factory is None or raw is None:
        return raw
    try:
        return spec.factory(raw)
    except (CoercionError, ValueError, TypeError) as exc:
        raise BadRequest(f"Invalid payload for '{spec.name}': {exc}") from exc
    except Exception as exc:
        LOGGER.exception("Building parameter '%s' failed", spec.name)
        raise HandlerError(f"{type(exc).__name__}: {exc}") from exc
