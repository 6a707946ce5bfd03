"""Generic configuration object model built from settings documents and payloads."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any, Union

from domoctl.core.coercion import coerce
from domoctl.core.model import ParamKind

ChildValue = Union[str, int, float, bool, "ConfigObject", tuple[Any, ...]]

_MISSING = object()


class ConfigObject(Mapping[str, Any]):
    """Immutable key/value node.

    Attributes and children share one case-insensitive namespace. A child
    shadows an attribute of the same name, the same way a later write would.
    Lookups ignore case; iteration yields keys as the source spelled them.

        cfg = build(ET.fromstring('<device name="lamp"><level>0.5</level></device>'))
        cfg["name"]     -> "lamp"
        cfg.level       -> "0.5"
        cfg.get_float("level") -> 0.5
    """

    __slots__ = ("_attributes", "_children", "_spelling")

    def __init__(
        self,
        attributes: Mapping[str, str] | None = None,
        children: Mapping[str, ChildValue] | None = None,
    ) -> None:
        spelling: dict[str, str] = {}
        attrs: dict[str, str] = {}
        for key, value in (attributes or {}).items():
            attrs[key.lower()] = value
            spelling[key.lower()] = key
        kids: dict[str, ChildValue] = {}
        for key, value in (children or {}).items():
            kids[key.lower()] = value
            spelling[key.lower()] = key
        object.__setattr__(self, "_attributes", MappingProxyType(attrs))
        object.__setattr__(self, "_children", MappingProxyType(kids))
        object.__setattr__(self, "_spelling", MappingProxyType(spelling))

    @property
    def attributes(self) -> Mapping[str, str]:
        return self._attributes

    @property
    def children(self) -> Mapping[str, ChildValue]:
        return self._children

    def __getitem__(self, key: str) -> Any:
        lowered = key.lower()
        if lowered in self._children:
            return self._children[lowered]
        return self._attributes[lowered]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        lowered = key.lower()
        return lowered in self._children or lowered in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._spelling.values())

    def __len__(self) -> int:
        return len(self._spelling)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"ConfigObject has no key '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ConfigObject is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigObject):
            return NotImplemented
        return dict(self._attributes) == dict(other._attributes) and dict(self._children) == dict(other._children)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ConfigObject(attributes={dict(self._attributes)!r}, children={dict(self._children)!r})"

    def get_str(self, key: str, default: Any = _MISSING) -> str:
        return self._typed(key, ParamKind.STR, default)

    def get_int(self, key: str, default: Any = _MISSING) -> int:
        return self._typed(key, ParamKind.INT, default)

    def get_float(self, key: str, default: Any = _MISSING) -> float:
        return self._typed(key, ParamKind.FLOAT, default)

    def get_bool(self, key: str, default: Any = _MISSING) -> bool:
        return self._typed(key, ParamKind.BOOL, default)

    def _typed(self, key: str, kind: ParamKind, default: Any) -> Any:
        if key not in self:
            if default is _MISSING:
                raise KeyError(key)
            return default
        return coerce(self[key], kind)


def _text(element: ET.Element) -> str:
    text = element.text or ""
    # Whitespace-only text is layout, not content.
    return text if text.strip() else ""


def build(element: ET.Element) -> ConfigObject:
    """Interpret an element tree as a ConfigObject, folding plural nodes into tuples."""
    attributes = dict(element.attrib)

    text = _text(element)
    if len(element) == 0:
        if text:
            attributes["value"] = text
        return ConfigObject(attributes=attributes)

    children: dict[str, ChildValue] = {}
    for child in element:
        name = child.tag.lower()
        has_grandchildren = len(child) > 0
        is_array = (
            has_grandchildren
            and not child.attrib
            and all(grandchild.tag.lower() + "s" == name for grandchild in child)
        )

        if is_array:
            children[name] = tuple(build(grandchild) for grandchild in child)
        elif has_grandchildren or child.attrib:
            children[name] = build(child)
        else:
            children[name] = _text(child)

    return ConfigObject(attributes=attributes, children=children)


def build_flat(element: ET.Element) -> ConfigObject:
    """Attribute-only form: node attributes plus ``<value name="k">v</value>`` pairs."""
    attributes = dict(element.attrib)
    for value_node in element.findall("value"):
        name = value_node.get("name")
        if name is None:
            continue
        attributes[name] = value_node.text or ""
    return ConfigObject(attributes=attributes)


def from_mapping(mapping: Mapping[str, Any]) -> ConfigObject:
    """Build a ConfigObject from decoded JSON/YAML data."""
    children: dict[str, ChildValue] = {}
    for key, value in mapping.items():
        children[str(key)] = _from_value(value)
    return ConfigObject(children=children)


def _from_value(value: Any) -> Any:
    if isinstance(value, ConfigObject):
        return value
    if isinstance(value, Mapping):
        return from_mapping(value)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(_from_value(item) for item in value)
    if value is None:
        return ""
    return value


def to_element(obj: ConfigObject, tag: str) -> ET.Element:
    """Serialize ``obj`` so that ``build(to_element(obj, tag)) == obj`` for built objects."""
    element = ET.Element(tag)
    for key, value in obj.attributes.items():
        if key == "value" and not obj.children and value.strip():
            element.text = value
        else:
            element.set(key, value)

    for name, value in obj.children.items():
        if isinstance(value, ConfigObject):
            element.append(to_element(value, name))
        elif isinstance(value, tuple):
            container = ET.SubElement(element, name)
            item_tag = name[:-1] if name.endswith("s") else name
            for item in value:
                if isinstance(item, ConfigObject):
                    container.append(to_element(item, item_tag))
                else:
                    ET.SubElement(container, item_tag).text = _scalar_text(item)
        else:
            ET.SubElement(element, name).text = _scalar_text(value)
    return element


def to_xml(obj: ConfigObject, tag: str) -> str:
    return ET.tostring(to_element(obj, tag), encoding="unicode")


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
