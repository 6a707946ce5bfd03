"""Settings document loading and service/device creation.

Expected layout::

    <settings>
        <config>
            <value name="latitude">59.3</value>
        </config>
        <services>
            <service name="device" type="DeviceManager"/>
        </services>
        <devices>
            <device name="lamp_bedroom" type="Lamp">
                <room>bedroom</room>
            </device>
        </devices>
    </settings>
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domoctl.core.config_object import ConfigObject, build, build_flat
from domoctl.core.errors import ConfigLoadError, NodeCreationError
from domoctl.core.factory import CreationContext, FactoryRegistry

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedNodes:
    created: tuple[str, ...]
    failures: tuple[NodeCreationError, ...]


def default_settings_path() -> Path:
    explicit = os.environ.get("DOMOCTL_SETTINGS")
    if explicit:
        return Path(explicit)
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "domoctl/settings.xml"


class Settings:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        if not self.path.is_file():
            raise ConfigLoadError(f"Missing settings file: {self.path}")
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigLoadError(f"Could not read settings file {self.path}: {exc}") from exc
        self.root = _parse(content, source=str(self.path))

    @classmethod
    def from_string(cls, content: str, *, source: str = "<string>") -> Settings:
        settings = cls.__new__(cls)
        settings.path = Path(source)
        settings.root = _parse(content, source=source)
        return settings

    def get_config(self) -> dict[str, str]:
        node = self.root.find("config")
        if node is None:
            return {}

        values: dict[str, str] = {}
        for value_node in node.findall("value"):
            name = value_node.get("name")
            if name is None:
                raise ConfigLoadError(f"Config value without a name: {ET.tostring(value_node, encoding='unicode')}")
            if name in values:
                raise ConfigLoadError(f"Duplicate config value '{name}'")
            values[name] = value_node.text or ""
        return values

    def create_devices(self, factories: FactoryRegistry[Any], context: CreationContext) -> CreatedNodes:
        return self._create_nodes(
            "devices/device",
            "device",
            build,
            factories,
            context,
            context.devices.add,
        )

    def create_services(self, factories: FactoryRegistry[Any], context: CreationContext) -> CreatedNodes:
        return self._create_nodes(
            "services/service",
            "service",
            build_flat,
            factories,
            context,
            context.services.add,
        )

    def _create_nodes(
        self,
        xpath: str,
        kind: str,
        to_config: Callable[[ET.Element], ConfigObject],
        factories: FactoryRegistry[Any],
        context: CreationContext,
        add: Callable[[Any], None],
    ) -> CreatedNodes:
        created: list[str] = []
        failures: list[NodeCreationError] = []

        for node in self.root.findall(xpath):
            type_name = node.get("type", "")
            try:
                config = to_config(node)
                instance = factories.create(type_name, config, context)
                add(instance)
            except Exception as exc:
                error = exc if isinstance(exc, NodeCreationError) else NodeCreationError(str(exc))
                if error is not exc:
                    error.__cause__ = exc
                LOGGER.error(
                    "Failed creating %s for node: %s",
                    kind,
                    ET.tostring(node, encoding="unicode").strip(),
                    exc_info=error,
                )
                failures.append(error)
                continue

            LOGGER.info("Created %s: %s of type: %s", kind, instance.name, type_name)
            created.append(instance.name)

        return CreatedNodes(created=tuple(created), failures=tuple(failures))


def _parse(content: str, *, source: str) -> ET.Element:
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise ConfigLoadError(f"Invalid settings document {source}: {exc}") from exc
    if root.tag.lower() != "settings":
        raise ConfigLoadError(f"Settings document {source} must have a <settings> root, got <{root.tag}>")
    return root
