from __future__ import annotations

from enum import Enum

import pytest

from domoctl.core.coercion import coerce, enum_ordinal, validate_kind
from domoctl.core.config_object import ConfigObject
from domoctl.core.errors import CoercionError, UnsupportedParameterType
from domoctl.core.model import ParamKind


class Mode(Enum):
    AUTO = "auto"
    HEAT = "heat"
    COOL = "cool"


def test_integer_parsing() -> None:
    assert coerce("42", ParamKind.INT) == 42
    assert coerce(" -7 ", ParamKind.INT) == -7
    assert coerce(5, ParamKind.INT) == 5
    assert coerce(3.0, ParamKind.INT) == 3
    for bad in ("4.5", "abc", "", True, 2.5):
        with pytest.raises(CoercionError):
            coerce(bad, ParamKind.INT)


def test_float_parsing() -> None:
    assert coerce("0.15", ParamKind.FLOAT) == 0.15
    assert coerce(2, ParamKind.FLOAT) == 2.0
    with pytest.raises(CoercionError):
        coerce("bright", ParamKind.FLOAT)
    with pytest.raises(CoercionError):
        coerce(False, ParamKind.FLOAT)


def test_bool_parsing() -> None:
    assert coerce("true", ParamKind.BOOL) is True
    assert coerce(" FALSE ", ParamKind.BOOL) is False
    assert coerce(True, ParamKind.BOOL) is True
    for bad in ("yes", "1", 1):
        with pytest.raises(CoercionError):
            coerce(bad, ParamKind.BOOL)


def test_string_passthrough() -> None:
    assert coerce("hall", ParamKind.STR) == "hall"
    assert coerce(12, ParamKind.STR) == "12"
    assert coerce(False, ParamKind.STR) == "false"


def test_enum_maps_integer_to_ordinal() -> None:
    assert coerce("0", ParamKind.ENUM, enum=Mode) is Mode.AUTO
    assert coerce(2, ParamKind.ENUM, enum=Mode) is Mode.COOL
    assert enum_ordinal(Mode.HEAT) == 1
    for bad in ("3", "-1", "heat"):
        with pytest.raises(CoercionError):
            coerce(bad, ParamKind.ENUM, enum=Mode)


def test_structured_raw_values_are_rejected() -> None:
    with pytest.raises(CoercionError):
        coerce(ConfigObject(attributes={"a": "1"}), ParamKind.STR)
    with pytest.raises(CoercionError):
        coerce(("1", "2"), ParamKind.INT)


def test_validate_kind_rejects_unsupported_declarations() -> None:
    validate_kind(ParamKind.LIST, item_kind=ParamKind.STR, context="ok")
    validate_kind(ParamKind.OBJECT, context="ok")

    with pytest.raises(UnsupportedParameterType):
        validate_kind(ParamKind.LIST, item_kind=ParamKind.OBJECT, context="list of objects")
    with pytest.raises(UnsupportedParameterType):
        validate_kind(ParamKind.LIST, context="list without item kind")
    with pytest.raises(UnsupportedParameterType):
        validate_kind(ParamKind.ENUM, context="enum without type")
    with pytest.raises(UnsupportedParameterType):
        validate_kind(dict, context="arbitrary type")
