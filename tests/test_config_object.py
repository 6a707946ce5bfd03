from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from domoctl.core.config_object import ConfigObject, build, build_flat, from_mapping, to_element, to_xml
from domoctl.core.errors import CoercionError


def _build(xml: str) -> ConfigObject:
    return build(ET.fromstring(xml))


def test_leaf_text_becomes_value() -> None:
    cfg = _build('<value Name="port">8080</value>')
    assert cfg.attributes == {"name": "port", "value": "8080"}
    assert cfg["value"] == "8080"
    assert cfg["NAME"] == "port"
    assert cfg.children == {}


def test_empty_node_yields_empty_object() -> None:
    cfg = _build("<device/>")
    assert cfg.attributes == {}
    assert cfg.children == {}
    assert len(cfg) == 0


def test_scalar_children_and_nested_objects() -> None:
    cfg = _build(
        """
        <device name="lamp_bedroom" type="Lamp">
            <Room>bedroom</Room>
            <remote code="1234"/>
            <schedule>
                <on>07:00</on>
                <off>23:00</off>
            </schedule>
        </device>
        """
    )
    assert cfg["name"] == "lamp_bedroom"
    assert cfg["room"] == "bedroom"
    assert isinstance(cfg["remote"], ConfigObject)
    assert cfg["remote"]["code"] == "1234"
    assert isinstance(cfg["schedule"], ConfigObject)
    assert cfg.schedule.off == "23:00"


def test_plural_node_folds_into_tuple() -> None:
    cfg = _build(
        """
        <device name="hall">
            <buttons>
                <button id="1">up</button>
                <button id="2">down</button>
            </buttons>
        </device>
        """
    )
    buttons = cfg["buttons"]
    assert isinstance(buttons, tuple)
    assert [b["id"] for b in buttons] == ["1", "2"]
    assert [b["value"] for b in buttons] == ["up", "down"]


def test_single_item_plural_node_still_folds() -> None:
    cfg = _build("<device><tags><tag>kitchen</tag></tags></device>")
    assert cfg["tags"] == (ConfigObject(attributes={"value": "kitchen"}),)


def test_mismatched_grandchild_prevents_folding() -> None:
    cfg = _build(
        """
        <device>
            <buttons>
                <button>up</button>
                <switch>down</switch>
            </buttons>
        </device>
        """
    )
    buttons = cfg["buttons"]
    assert isinstance(buttons, ConfigObject)
    assert buttons["button"] == "up"
    assert buttons["switch"] == "down"


def test_attributes_on_plural_node_prevent_folding() -> None:
    cfg = _build('<device><buttons layout="grid"><button>up</button></buttons></device>')
    buttons = cfg["buttons"]
    assert isinstance(buttons, ConfigObject)
    assert buttons["layout"] == "grid"
    assert buttons["button"] == "up"


def test_folding_is_case_insensitive() -> None:
    cfg = _build("<device><Tags><TAG>a</TAG><tag>b</tag></Tags></device>")
    assert isinstance(cfg["tags"], tuple)
    assert len(cfg["tags"]) == 2


def test_whitespace_text_is_not_a_value() -> None:
    cfg = _build('<device name="x">\n    \n</device>')
    assert "value" not in cfg
    assert cfg.attributes == {"name": "x"}


def test_children_shadow_attributes() -> None:
    cfg = _build('<device level="1"><level>2</level></device>')
    assert cfg.attributes["level"] == "1"
    assert cfg["level"] == "2"
    assert sorted(cfg) == ["level"]


def test_folded_tree_rebuilds_to_equal_object() -> None:
    original = _build(
        """
        <settings>
            <devices>
                <device name="a" type="Lamp"><room>hall</room></device>
                <device name="b" type="Lamp">
                    <tags><tag>x</tag><tag>y</tag></tags>
                </device>
                <device/>
            </devices>
            <port>80</port>
            <empty/>
            <remote code="1"/>
        </settings>
        """
    )
    assert isinstance(original["devices"], tuple)

    rebuilt = build(to_element(original, "settings"))
    assert rebuilt == original

    reparsed = build(ET.fromstring(to_xml(original, "settings")))
    assert reparsed == original


def test_config_object_is_immutable() -> None:
    cfg = _build('<device name="x"/>')
    with pytest.raises(AttributeError):
        cfg.name = "y"
    with pytest.raises(TypeError):
        cfg.attributes["name"] = "y"  # type: ignore[index]


def test_missing_attribute_navigation_raises() -> None:
    cfg = _build('<device name="x"/>')
    with pytest.raises(AttributeError):
        _ = cfg.level
    assert cfg.get("level") is None


def test_typed_getters() -> None:
    cfg = _build("<device><level>0.25</level><count>3</count><on>True</on></device>")
    assert cfg.get_float("level") == 0.25
    assert cfg.get_int("count") == 3
    assert cfg.get_bool("on") is True
    assert cfg.get_str("missing", "fallback") == "fallback"
    with pytest.raises(KeyError):
        cfg.get_int("missing")
    with pytest.raises(CoercionError):
        cfg.get_int("level")


def test_build_flat_collects_values() -> None:
    cfg = build_flat(
        ET.fromstring(
            """
            <service name="dummy" type="Events">
                <value name="Port">4</value>
                <value name="active">true</value>
                <nested><value name="ignored">1</value></nested>
            </service>
            """
        )
    )
    assert cfg.attributes == {"name": "dummy", "type": "Events", "port": "4", "active": "true"}
    assert cfg.children == {}


def test_from_mapping_nests_objects_and_sequences() -> None:
    cfg = from_mapping({"Name": "scene", "data": {"Room": "hall"}, "items": [{"id": 1}, "two"], "gone": None})
    assert cfg["name"] == "scene"
    assert isinstance(cfg["data"], ConfigObject)
    assert cfg["data"]["room"] == "hall"
    assert cfg["items"][0] == ConfigObject(children={"id": 1})
    assert cfg["items"][1] == "two"
    assert cfg["gone"] == ""


def test_keys_keep_their_spelling() -> None:
    cfg = from_mapping({"RoomId": "kitchen", "level": "1"})
    assert list(cfg) == ["RoomId", "level"]
    assert dict(cfg.items()) == {"RoomId": "kitchen", "level": "1"}
    assert cfg["roomid"] == cfg["ROOMID"] == "kitchen"
    assert cfg.children == {"roomid": "kitchen", "level": "1"}
    assert cfg == from_mapping({"roomid": "kitchen", "LEVEL": "1"})
