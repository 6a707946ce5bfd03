"""Core data models used across routes, dispatcher, registry, and CLI."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any

from domoctl.core.errors import RequestError


class Verb(str, Enum):
    READ = "read"
    WRITE = "write"

    @classmethod
    def from_transport(cls, method: str) -> Verb:
        """Map a transport method (GET/PUT) onto a route verb."""
        mapping = {"GET": cls.READ, "PUT": cls.WRITE}
        try:
            return mapping[method.strip().upper()]
        except KeyError:
            raise ValueError(f"Unsupported transport method '{method}'") from None


class ParamKind(str, Enum):
    INT = "int"
    STR = "str"
    BOOL = "bool"
    FLOAT = "float"
    ENUM = "enum"
    LIST = "list"
    OBJECT = "object"


PRIMITIVE_KINDS = frozenset({ParamKind.INT, ParamKind.STR, ParamKind.BOOL, ParamKind.FLOAT, ParamKind.ENUM})


@dataclass(frozen=True)
class ParamSpec:
    name: str
    kind: ParamKind
    enum: type[Enum] | None = None
    item_kind: ParamKind | None = None
    factory: Callable[[Any], Any] | None = None
    required: bool = True


@dataclass(frozen=True)
class RouteDescriptor:
    verb: Verb
    template: str
    segments: tuple[str, ...]
    handler: Callable[..., Any]
    params: tuple[ParamSpec, ...]

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(s[1:-1] for s in self.segments if is_placeholder(s))


@dataclass(frozen=True)
class ResolvedRoute:
    descriptor: RouteDescriptor
    path_params: dict[str, str]


@dataclass(frozen=True)
class Response:
    value: Any = None
    error: RequestError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> HTTPStatus:
        if self.error is None:
            return HTTPStatus.OK
        return self.error.status


@dataclass(frozen=True)
class Event:
    name: str
    data: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> Event | None:
        """Build an event from an untyped payload, ignoring malformed fields."""
        if not isinstance(payload, Mapping):
            return None

        name = payload.get("name")
        if not isinstance(name, (str, int, float)) or isinstance(name, bool):
            name = ""

        data: dict[str, str] = {}
        raw_data = payload.get("data")
        if isinstance(raw_data, Mapping):
            for key, value in raw_data.items():
                if isinstance(value, bool):
                    data[str(key)] = "true" if value else "false"
                elif isinstance(value, (str, int, float)):
                    data[str(key)] = str(value)

        return cls(name=str(name), data=data)


def is_placeholder(segment: str) -> bool:
    return len(segment) > 2 and segment.startswith("{") and segment.endswith("}")
