from __future__ import annotations

import pytest

from domoctl.core.config_object import ConfigObject
from domoctl.core.errors import BadRequest
from domoctl.core.payload import parse_payload


def test_json_payload() -> None:
    payload = parse_payload('{"on": true, "level": 0.5, "data": {"room": "hall"}}')
    assert isinstance(payload, ConfigObject)
    assert payload["on"] == "true"
    assert payload["level"] == "0.5"
    assert payload["data"]["room"] == "hall"


def test_yaml_payload_keeps_yes_no_on_off_as_text() -> None:
    payload = parse_payload("on: yes\nscene: 1\n")
    assert payload["on"] == "yes"
    assert payload["scene"] == "1"


def test_empty_payload_is_none() -> None:
    assert parse_payload(None) is None
    assert parse_payload("   ") is None
    assert parse_payload("~") is None


def test_non_mapping_payload_rejected() -> None:
    with pytest.raises(BadRequest):
        parse_payload("[1, 2]")


def test_invalid_yaml_rejected() -> None:
    with pytest.raises(BadRequest):
        parse_payload("{on: [")


def test_duplicate_keys_rejected() -> None:
    with pytest.raises(BadRequest):
        parse_payload("level: 1\nlevel: 2\n")


def test_numbers_and_times_stay_as_written() -> None:
    payload = parse_payload("{alarm: 12:30, code: 0755, mask: 0x1F, day: 2024-01-01, scene: 010}")
    assert payload["alarm"] == "12:30"
    assert payload["code"] == "0755"
    assert payload["mask"] == "0x1F"
    assert payload["day"] == "2024-01-01"
    assert payload["scene"] == "010"
