"""Request payload decoding for JSON/YAML bodies."""

from __future__ import annotations

from typing import Any

import yaml

from domoctl.core.config_object import ConfigObject, from_mapping
from domoctl.core.errors import BadRequest


class PayloadLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate keys and keeps plain scalars as text.

    Only null is resolved implicitly. Booleans, numbers and timestamps stay
    strings so that field coercion decides what they mean: `0755` is not
    octal and `12:30` is not sexagesimal.
    """


_TEXT_TAGS = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)


PayloadLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

for first_char, mappings in list(PayloadLoader.yaml_implicit_resolvers.items()):
    PayloadLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag not in _TEXT_TAGS
    ]


def _construct_mapping(loader: PayloadLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise BadRequest(f"Duplicate key '{key}' in payload")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


PayloadLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def parse_payload(text: str | None) -> ConfigObject | None:
    if text is None or not text.strip():
        return None

    try:
        loaded = yaml.load(text, Loader=PayloadLoader)
    except yaml.YAMLError as exc:
        raise BadRequest(f"Invalid payload: {exc}") from exc

    if loaded is None:
        return None
    if not isinstance(loaded, dict):
        raise BadRequest("Payload must contain a mapping at root")
    return from_mapping(loaded)
