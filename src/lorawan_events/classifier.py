"""Name and payload predicates over a single event record.

All predicates are pure functions of the event mapping. Name predicates treat
a missing or non-string ``name`` as a non-match.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .data_types import ERROR_DETAILS, get_event_data_type
from .models import Classification, EventCategory
from .patterns import PATTERNS, match_name


def _name(event: Mapping[str, Any]) -> Any:
    if not isinstance(event, Mapping):
        return None
    return event.get("name")


def is_error_event(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) == ERROR_DETAILS


def is_crud_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.crud, _name(event)) is not None


def is_crud_create_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.crud_create, _name(event)) is not None


def is_crud_update_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.crud_update, _name(event)) is not None


def is_crud_delete_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.crud_delete, _name(event)) is not None


def is_device_uplink_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.device_uplink, _name(event)) is not None


def is_device_downlink_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.device_downlink, _name(event)) is not None


def is_device_join_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.device_join, _name(event)) is not None


def is_device_ns_utility_event(event: Mapping[str, Any]) -> bool:
    """Network server housekeeping: an ``ns.*`` name that is not traffic."""
    return (
        match_name(PATTERNS.ns_generic, _name(event)) is not None
        and not is_device_uplink_event(event)
        and not is_device_downlink_event(event)
        and not is_device_join_event(event)
    )


def is_gateway_uplink_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.gateway_uplink, _name(event)) is not None


def is_gateway_downlink_event(event: Mapping[str, Any]) -> bool:
    return match_name(PATTERNS.gateway_downlink, _name(event)) is not None


def gateway_connection_kind(event: Mapping[str, Any]) -> Optional[str]:
    """Return ``"connect"`` or ``"disconnect"`` for connection events, else ``None``."""
    match = match_name(PATTERNS.gateway_connection, _name(event))
    if match is None:
        return None
    return match.group("verb")


def is_gateway_connection_event(event: Mapping[str, Any]) -> bool:
    return gateway_connection_kind(event) is not None


def is_gateway_connect_event(event: Mapping[str, Any]) -> bool:
    return gateway_connection_kind(event) == "connect"


def is_gateway_disconnect_event(event: Mapping[str, Any]) -> bool:
    return gateway_connection_kind(event) == "disconnect"


def crud_verb(event: Mapping[str, Any]) -> Optional[str]:
    match = match_name(PATTERNS.crud, _name(event))
    if match is None:
        return None
    return match.group("verb")


def classify(event: Mapping[str, Any]) -> Classification:
    """Derive the single name-based category plus the structural error flag."""
    is_error = is_error_event(event)

    verb = crud_verb(event)
    if verb is not None:
        return Classification(category=EventCategory.CRUD, subtype=verb, is_error=is_error)
    if is_device_join_event(event):
        category = EventCategory.DEVICE_JOIN
    elif is_device_downlink_event(event):
        category = EventCategory.DEVICE_DOWNLINK
    elif is_device_uplink_event(event):
        category = EventCategory.DEVICE_UPLINK
    elif is_gateway_uplink_event(event):
        category = EventCategory.GATEWAY_UPLINK
    elif is_gateway_downlink_event(event):
        category = EventCategory.GATEWAY_DOWNLINK
    elif is_gateway_connection_event(event):
        return Classification(
            category=EventCategory.GATEWAY_CONNECTION,
            subtype=gateway_connection_kind(event),
            is_error=is_error,
        )
    elif is_device_ns_utility_event(event):
        category = EventCategory.DEVICE_NS_UTILITY
    else:
        category = EventCategory.UNKNOWN
    return Classification(category=category, is_error=is_error)
