"""Event broadcast service."""

from __future__ import annotations

import logging
from collections.abc import Callable

from domoctl.core.config_object import ConfigObject
from domoctl.core.factory import CreationContext
from domoctl.core.model import Event, ParamKind, ParamSpec, Verb
from domoctl.core.service import Service

LOGGER = logging.getLogger(__name__)

Listener = Callable[["EventService", Event], None]


class EventService(Service):
    def __init__(self, name: str = "events") -> None:
        super().__init__(name)
        self._listeners: list[Listener] = []
        self.route(
            Verb.WRITE,
            "",
            self.on_event_request,
            [ParamSpec("event", ParamKind.OBJECT, factory=Event.from_payload)],
        )

    @classmethod
    def from_config(cls, config: ConfigObject, context: CreationContext) -> EventService:
        return cls(name=config.get_str("name", "events") or "events")

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def on_event_request(self, event: Event | None = None) -> None:
        if event is None:
            return

        LOGGER.info("Got event %s", event.name)
        for listener in list(self._listeners):
            listener(self, event)
