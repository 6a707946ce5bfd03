"""Verb + path-template route registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from domoctl.core.coercion import validate_kind
from domoctl.core.errors import RouteConfigurationError, RouteNotFound, UnsupportedParameterType
from domoctl.core.model import PRIMITIVE_KINDS, ParamSpec, ResolvedRoute, RouteDescriptor, Verb, is_placeholder

LOGGER = logging.getLogger(__name__)


def split_path(path: str) -> tuple[str, ...]:
    return tuple(path.strip("/").split("/"))


def _segments_overlap(left: tuple[str, ...], right: tuple[str, ...]) -> bool:
    if len(left) != len(right):
        return False
    return all(is_placeholder(a) or is_placeholder(b) or a == b for a, b in zip(left, right))


def _parse_verb(verb: Verb | str) -> Verb:
    if isinstance(verb, Verb):
        return verb
    try:
        return Verb(str(verb).strip().lower())
    except ValueError:
        raise RouteConfigurationError(f"Unknown verb '{verb}'. Expected 'read' or 'write'.") from None


class RouteTable:
    """Routes of one service, built at construction and read-only afterwards.

    Templates are slash-separated literal and ``{name}`` segments. Two routes
    with the same verb that could match one concrete path are rejected when
    the second is registered, so resolution never has to break ties.
    """

    def __init__(self) -> None:
        self._routes: list[RouteDescriptor] = []

    def register(
        self,
        verb: Verb | str,
        template: str,
        handler: Callable[..., Any],
        params: Iterable[ParamSpec] = (),
    ) -> RouteDescriptor:
        parsed_verb = _parse_verb(verb)
        segments = split_path(template)
        specs = tuple(params)

        seen: set[str] = set()
        for spec in specs:
            context = f"{parsed_verb.value} '{template}' parameter '{spec.name}'"
            if spec.name in seen:
                raise RouteConfigurationError(f"{context} is declared twice")
            seen.add(spec.name)
            validate_kind(spec.kind, enum=spec.enum, item_kind=spec.item_kind, context=context)

        by_name = {spec.name: spec for spec in specs}
        for segment in segments:
            if not is_placeholder(segment):
                if "{" in segment or "}" in segment:
                    raise RouteConfigurationError(f"Malformed segment '{segment}' in template '{template}'")
                continue
            name = segment[1:-1]
            spec = by_name.get(name)
            if spec is None:
                raise RouteConfigurationError(
                    f"Placeholder '{{{name}}}' in '{template}' has no declared parameter"
                )
            if spec.kind not in PRIMITIVE_KINDS:
                raise UnsupportedParameterType(
                    f"Path parameter '{name}' in '{template}' must be a primitive, got {spec.kind.value}"
                )

        for existing in self._routes:
            if existing.verb is parsed_verb and _segments_overlap(existing.segments, segments):
                raise RouteConfigurationError(
                    f"Route {parsed_verb.value} '{template}' overlaps existing route '{existing.template}'"
                )

        descriptor = RouteDescriptor(
            verb=parsed_verb,
            template=template,
            segments=segments,
            handler=handler,
            params=specs,
        )
        self._routes.append(descriptor)
        LOGGER.debug("Registered route %s '%s'", parsed_verb.value, template)
        return descriptor

    def resolve(self, verb: Verb | str, path: str) -> ResolvedRoute:
        try:
            parsed_verb = _parse_verb(verb)
        except RouteConfigurationError:
            raise RouteNotFound(f"Unknown verb '{verb}'") from None

        requested = split_path(path)
        for route in self._routes:
            if route.verb is not parsed_verb or len(route.segments) != len(requested):
                continue
            params: dict[str, str] = {}
            for expected, actual in zip(route.segments, requested):
                if is_placeholder(expected):
                    params[expected[1:-1]] = actual
                elif expected != actual:
                    break
            else:
                return ResolvedRoute(descriptor=route, path_params=params)

        raise RouteNotFound(f"No route for {parsed_verb.value} '{path}'")

    def routes(self) -> list[RouteDescriptor]:
        return list(self._routes)
