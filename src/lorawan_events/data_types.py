"""Payload type resolution and structural shape checks.

The ``data`` envelope of an event is self-describing through its ``@type``
URL. Several shapes share one type (``ApplicationUp`` carries either a
``join_accept`` or an ``uplink_message``), so the checks below combine the
resolved type with key presence. None of them raise on absent keys.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


APPLICATION_UP = "ApplicationUp"
APPLICATION_UPLINK = "ApplicationUplink"
APPLICATION_DOWNLINK = "ApplicationDownlink"
JOIN_REQUEST = "JoinRequest"
UPLINK_MESSAGE = "UplinkMessage"
DOWNLINK_MESSAGE = "DownlinkMessage"
ERROR_DETAILS = "ErrorDetails"

JOIN_REQUEST_CARRIERS = frozenset({APPLICATION_UPLINK, JOIN_REQUEST, UPLINK_MESSAGE})
MAC_PAYLOAD_CARRIERS = frozenset({APPLICATION_UPLINK, UPLINK_MESSAGE})


def get_data(event: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    data = event.get("data") if isinstance(event, Mapping) else None
    if isinstance(data, Mapping):
        return data
    return None


def dig(value: Any, *keys: str) -> Any:
    """Walk nested mappings, returning ``None`` as soon as a key is missing."""
    for key in keys:
        if not isinstance(value, Mapping) or key not in value:
            return None
        value = value[key]
    return value


def has_path(value: Any, *keys: str) -> bool:
    for key in keys:
        if not isinstance(value, Mapping) or key not in value:
            return False
        value = value[key]
    return True


def get_event_data_type(event: Mapping[str, Any]) -> Optional[str]:
    """Return the last dot segment of ``data["@type"]``, or ``None``."""
    type_url = dig(get_data(event), "@type")
    if not isinstance(type_url, str):
        return None
    return type_url.split(".")[-1]


def is_application_up_data_type(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) == APPLICATION_UP


def is_application_uplink_data_type(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) == APPLICATION_UPLINK


def is_join_request_data_type(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) == JOIN_REQUEST


def is_application_downlink_data_type(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) == APPLICATION_DOWNLINK


def is_uplink_message_data_type(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) == UPLINK_MESSAGE


def is_downlink_message_data_type(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) == DOWNLINK_MESSAGE


def has_join_accept_data(event: Mapping[str, Any]) -> bool:
    return is_application_up_data_type(event) and has_path(get_data(event), "join_accept")


def has_uplink_message_data(event: Mapping[str, Any]) -> bool:
    return is_application_up_data_type(event) and has_path(get_data(event), "uplink_message")


def has_join_request_data(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) in JOIN_REQUEST_CARRIERS and has_path(
        get_data(event), "payload", "join_request_payload"
    )


def has_mac_data(event: Mapping[str, Any]) -> bool:
    return get_event_data_type(event) in MAC_PAYLOAD_CARRIERS and has_path(
        get_data(event), "payload", "mac_payload"
    )
