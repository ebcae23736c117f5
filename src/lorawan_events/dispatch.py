"""Per-scope dispatch of events to field builders.

Each scope owns an ordered tuple of ``(predicate, builder)`` entries. The first
predicate that holds selects the builder; otherwise the scope's default runs.
The error entry always comes first so payload errors pre-empt any name-derived
category.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, NamedTuple, Tuple

from . import builders
from .classifier import (
    classify,
    is_crud_event,
    is_device_downlink_event,
    is_device_join_event,
    is_device_uplink_event,
    is_error_event,
    is_gateway_connection_event,
    is_gateway_downlink_event,
    is_gateway_uplink_event,
)
from .models import BuiltFields, RenderedEvent, Scope


logger = logging.getLogger(__name__)

Predicate = Callable[[Mapping[str, Any]], bool]
Builder = Callable[[Mapping[str, Any]], BuiltFields]


class DispatchEntry(NamedTuple):
    predicate: Predicate
    builder: Builder


class DispatchTable(NamedTuple):
    entries: Tuple[DispatchEntry, ...]
    default: Builder


DEVICE_TABLE = DispatchTable(
    entries=(
        DispatchEntry(is_error_event, builders.build_error_fields),
        DispatchEntry(is_crud_event, builders.build_crud_fields),
        DispatchEntry(is_device_join_event, builders.build_device_join_fields),
        DispatchEntry(is_device_downlink_event, builders.build_device_downlink_fields),
        DispatchEntry(is_device_uplink_event, builders.build_device_uplink_fields),
    ),
    default=builders.build_default_fields,
)

GATEWAY_TABLE = DispatchTable(
    entries=(
        DispatchEntry(is_error_event, builders.build_error_fields),
        DispatchEntry(is_crud_event, builders.build_crud_fields),
        DispatchEntry(is_gateway_uplink_event, builders.build_gateway_uplink_fields),
        DispatchEntry(is_gateway_downlink_event, builders.build_default_fields),
        DispatchEntry(is_gateway_connection_event, builders.build_gateway_connection_fields),
    ),
    default=builders.build_default_fields,
)

ENTITY_TABLE = DispatchTable(
    entries=(
        DispatchEntry(is_error_event, builders.build_entity_error_fields),
        DispatchEntry(is_crud_event, builders.build_crud_fields),
    ),
    default=builders.build_default_fields,
)

DISPATCH_TABLES: Dict[Scope, DispatchTable] = {
    Scope.DEVICE: DEVICE_TABLE,
    Scope.GATEWAY: GATEWAY_TABLE,
    Scope.APPLICATION: ENTITY_TABLE,
    Scope.ORGANIZATION: ENTITY_TABLE,
}


def select_builder(event: Mapping[str, Any], scope: Scope) -> Builder:
    table = DISPATCH_TABLES[Scope(scope)]
    for entry in table.entries:
        if entry.predicate(event):
            return entry.builder
    logger.debug(
        "No category matched, using default builder",
        extra={"scope": Scope(scope).value, "event": _event_name(event)},
    )
    return table.default


def _event_name(event: Mapping[str, Any]) -> Any:
    return event.get("name") if isinstance(event, Mapping) else None


def _optional_str(value: Any) -> Any:
    return value if isinstance(value, str) else None


def render_event(
    event: Mapping[str, Any], scope: Scope, widget: bool = False
) -> RenderedEvent:
    """Classify ``event`` and build its display fields for ``scope``.

    Widget mode keeps identity, time and category but drops the field list and
    the raw detail pass-through.
    """
    classification = classify(event)
    built = select_builder(event, scope)(event)
    return RenderedEvent(
        name=_optional_str(_event_name(event)),
        time=_optional_str(event.get("time")) if isinstance(event, Mapping) else None,
        category=classification.category,
        subtype=classification.subtype,
        is_error=classification.is_error,
        identity_id=built.identity_id,
        icon=built.icon,
        fields=[] if widget else list(built.fields),
        details=None if widget or not isinstance(event, Mapping) else dict(event),
    )


def render_events(
    events: Iterable[Mapping[str, Any]], scope: Scope, widget: bool = False
) -> List[RenderedEvent]:
    return [render_event(event, scope, widget=widget) for event in events]
