"""Domain-specific errors for domoctl."""

from __future__ import annotations

from http import HTTPStatus


class DomoctlError(Exception):
    """Base error for domoctl."""


class ConfigLoadError(DomoctlError):
    """Raised when the settings document is missing or cannot be parsed."""


class NodeCreationError(DomoctlError):
    """Raised when a single service or device node cannot be built."""


class RouteConfigurationError(DomoctlError):
    """Raised when a service declares an invalid route."""


class UnsupportedParameterType(RouteConfigurationError):
    """Raised when a parameter or state field declares a type that cannot be coerced."""


class CoercionError(DomoctlError):
    """Raised when a raw value does not parse as its declared type."""


class RequestError(DomoctlError):
    """Base request-time error, returned to the caller instead of raised."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR


class RouteNotFound(RequestError):
    """Raised when no registered route matches verb and path."""

    status = HTTPStatus.NOT_FOUND


class BadRequest(RequestError):
    """Raised when a path parameter or payload field fails coercion."""

    status = HTTPStatus.BAD_REQUEST


class HandlerError(RequestError):
    """Raised by a handler for a well-formed request it cannot fulfil."""

    status = HTTPStatus.UNPROCESSABLE_ENTITY


class DeviceNotFound(HandlerError):
    """Raised when a request names a device the registry does not hold."""

    status = HTTPStatus.NOT_FOUND
