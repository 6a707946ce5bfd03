"""Conversion of untyped request and config values into declared types."""

from __future__ import annotations

from enum import Enum
from typing import Any

from domoctl.core.errors import CoercionError, UnsupportedParameterType
from domoctl.core.model import PRIMITIVE_KINDS, ParamKind


def validate_kind(
    kind: Any,
    *,
    enum: Any = None,
    item_kind: Any = None,
    context: str,
) -> None:
    """Reject declarations the coercer cannot serve. Called at registration time."""
    if not isinstance(kind, ParamKind):
        raise UnsupportedParameterType(f"{context}: unsupported type {kind!r}")
    if kind is ParamKind.ENUM and not (isinstance(enum, type) and issubclass(enum, Enum) and len(enum) > 0):
        raise UnsupportedParameterType(f"{context}: enum parameters need a non-empty Enum type")
    if kind is ParamKind.LIST:
        if item_kind is None or item_kind not in PRIMITIVE_KINDS:
            raise UnsupportedParameterType(
                f"{context}: lists are only supported with primitive items, got {item_kind!r}"
            )
        if item_kind is ParamKind.ENUM:
            validate_kind(item_kind, enum=enum, context=context)


def coerce(raw: Any, kind: ParamKind, *, enum: type[Enum] | None = None) -> Any:
    """Convert ``raw`` (text or a decoded scalar) into ``kind``.

    Only primitive kinds are handled here. Lists are never bound from raw
    values and objects are bound whole, so asking for either is a caller bug.
    """
    if isinstance(raw, bool):
        scalar: Any = raw
    elif isinstance(raw, (str, int, float)):
        scalar = raw
    else:
        raise CoercionError(f"Expected a scalar value, got {type(raw).__name__}")

    if kind is ParamKind.INT:
        return _to_int(scalar)
    if kind is ParamKind.STR:
        if isinstance(scalar, bool):
            return "true" if scalar else "false"
        return str(scalar)
    if kind is ParamKind.BOOL:
        return _to_bool(scalar)
    if kind is ParamKind.FLOAT:
        return _to_float(scalar)
    if kind is ParamKind.ENUM:
        if enum is None:
            raise UnsupportedParameterType("Enum coercion requires an Enum type")
        return enum_from_ordinal(enum, _to_int(scalar))
    raise UnsupportedParameterType(f"Kind '{kind.value}' is not coercible from a scalar")


def enum_from_ordinal(enum: type[Enum], ordinal: int) -> Enum:
    members = list(enum)
    if not 0 <= ordinal < len(members):
        raise CoercionError(f"{ordinal} is out of range for {enum.__name__} (0..{len(members) - 1})")
    return members[ordinal]


def enum_ordinal(member: Enum) -> int:
    return list(type(member)).index(member)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise CoercionError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise CoercionError(f"Expected an integer, got {value!r}")
    try:
        return int(value.strip())
    except ValueError as exc:
        raise CoercionError(f"Expected an integer, got {value!r}") from exc


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise CoercionError(f"Expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value.strip())
    except ValueError as exc:
        raise CoercionError(f"Expected a number, got {value!r}") from exc


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise CoercionError(f"Expected true/false, got {value!r}")
