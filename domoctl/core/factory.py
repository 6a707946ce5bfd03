"""Type-name keyed constructor registries for services and devices."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from domoctl.core.config_object import ConfigObject
from domoctl.core.errors import NodeCreationError

if TYPE_CHECKING:
    from domoctl.core.registry import DeviceRegistry
    from domoctl.core.service import ServiceManager

T = TypeVar("T")


@dataclass(frozen=True)
class CreationContext:
    services: ServiceManager
    devices: DeviceRegistry


Constructor = Callable[[ConfigObject, CreationContext], Any]


class FactoryRegistry(Generic[T]):
    """Maps a declared ``type`` attribute onto a constructor.

    Populated once at startup and handed to the settings loader.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._constructors: dict[str, Callable[[ConfigObject, CreationContext], T]] = {}

    def register(self, type_name: str, constructor: Callable[[ConfigObject, CreationContext], T]) -> None:
        self._constructors[type_name] = constructor

    def types(self) -> list[str]:
        return sorted(self._constructors)

    def create(self, type_name: str, config: ConfigObject, context: CreationContext) -> T:
        constructor = self._constructors.get(type_name)
        if constructor is None:
            available = ", ".join(self.types()) or "<none>"
            raise NodeCreationError(f"Unknown {self.kind} type '{type_name}'. Available: {available}")
        try:
            return constructor(config, context)
        except NodeCreationError:
            raise
        except Exception as exc:
            raise NodeCreationError(f"Failed creating {self.kind} of type '{type_name}': {exc}") from exc
