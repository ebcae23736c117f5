"""Field builders turning a classified event into normalized display fields.

Each builder takes the raw event mapping and returns ``BuiltFields``. Builders
only surface values that are present; a missing key drops the field.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional

from .classifier import gateway_connection_kind
from .codec import base64_to_hex
from .data_types import (
    dig,
    get_data,
    has_join_accept_data,
    has_join_request_data,
    has_mac_data,
    has_path,
    has_uplink_message_data,
    is_application_downlink_data_type,
)
from .models import BuiltFields, NormalizedField


# Most specific first
IDENTIFIER_KEYS = (
    ("device_ids", "device_id"),
    ("gateway_ids", "gateway_id"),
    ("application_ids", "application_id"),
    ("organization_ids", "organization_id"),
    ("user_ids", "user_id"),
    ("client_ids", "client_id"),
)

ERROR_KEYS = ("namespace", "name", "message_format", "code")

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _raw_identifiers(event: Mapping[str, Any]) -> List[Any]:
    identifiers = event.get("identifiers") if isinstance(event, Mapping) else None
    if not isinstance(identifiers, (list, tuple)):
        return []
    return list(identifiers)


def _identifiers(event: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    return [ids for ids in _raw_identifiers(event) if isinstance(ids, Mapping)]


def _id_value(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def device_ids(event: Mapping[str, Any]) -> Mapping[str, Any]:
    for ids in _identifiers(event):
        found = ids.get("device_ids")
        if isinstance(found, Mapping):
            return found
    return {}


def resolve_identity(event: Mapping[str, Any]) -> Optional[str]:
    """Pick the id of the most specific identifier record on the event."""
    records = _identifiers(event)
    for ids_key, id_key in IDENTIFIER_KEYS:
        for ids in records:
            value = _id_value(dig(ids, ids_key, id_key))
            if value is not None:
                return value
    return None


def resolve_first_identity(event: Mapping[str, Any]) -> Optional[str]:
    """Device id over application id, looking only at ``identifiers[0]``."""
    records = _raw_identifiers(event)
    if not records:
        return None
    first = records[0]
    return _id_value(dig(first, "device_ids", "device_id")) or _id_value(
        dig(first, "application_ids", "application_id")
    )


def text_field(key: str, value: Any) -> Optional[NormalizedField]:
    if value is None:
        return None
    return NormalizedField(key=key, value=value, kind="text")


def byte_field(key: str, value: Any) -> Optional[NormalizedField]:
    """Identifier bytes travel as hex strings already."""
    if not isinstance(value, str) or not value:
        return None
    return NormalizedField(key=key, value=value.upper(), kind="byte")


def payload_field(key: str, value: Any) -> Optional[NormalizedField]:
    hex_value = base64_to_hex(value if isinstance(value, str) else None)
    if not hex_value:
        return None
    return NormalizedField(key=key, value=hex_value, kind="byte")


def code_field(key: str, value: Any) -> Optional[NormalizedField]:
    if value is None:
        return None
    return NormalizedField(key=key, value=value, kind="code")


def _collect(*fields: Optional[NormalizedField]) -> List[NormalizedField]:
    return [field for field in fields if field is not None]


def _extend(target: List[NormalizedField], fields: Iterable[Optional[NormalizedField]]) -> None:
    target.extend(field for field in fields if field is not None)


def format_error_message(message_format: Any, attributes: Any) -> Optional[str]:
    if not isinstance(message_format, str):
        return None
    if not isinstance(attributes, Mapping):
        return message_format

    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in attributes:
            return str(attributes[key])
        return match.group(0)

    return _PLACEHOLDER.sub(replace, message_format)


def _error_fields(event: Mapping[str, Any]) -> List[NormalizedField]:
    data = get_data(event) or {}
    fields = _collect(*(text_field(key, data.get(key)) for key in ERROR_KEYS))
    message = format_error_message(data.get("message_format"), data.get("attributes"))
    if message is not None and message != data.get("message_format"):
        _extend(fields, [text_field("message", message)])
    _extend(fields, [code_field("attributes", data.get("attributes"))])
    cause = data.get("cause")
    if isinstance(cause, Mapping):
        _extend(fields, [code_field("cause", {key: cause[key] for key in ERROR_KEYS if key in cause})])
    return fields


def build_error_fields(event: Mapping[str, Any]) -> BuiltFields:
    return BuiltFields(
        fields=_error_fields(event),
        icon="event_error",
        identity_id=resolve_identity(event),
    )


def build_entity_error_fields(event: Mapping[str, Any]) -> BuiltFields:
    """Error builder for application and organization streams."""
    return BuiltFields(
        fields=_error_fields(event),
        icon="event_error",
        identity_id=resolve_first_identity(event),
    )


def build_crud_fields(event: Mapping[str, Any]) -> BuiltFields:
    return BuiltFields(identity_id=resolve_identity(event))


def build_default_fields(event: Mapping[str, Any]) -> BuiltFields:
    return BuiltFields(identity_id=resolve_identity(event))


def _dev_addr(event: Mapping[str, Any]) -> Optional[NormalizedField]:
    dev_addr = device_ids(event).get("dev_addr")
    if not dev_addr:
        dev_addr = dig(get_data(event), "end_device_ids", "dev_addr")
    return byte_field("dev_addr", dev_addr)


def build_device_join_fields(event: Mapping[str, Any]) -> BuiltFields:
    if has_join_accept_data(event) or has_join_request_data(event):
        ids = device_ids(event)
        join_request = dig(get_data(event), "payload", "join_request_payload")
        fields = _collect(
            _dev_addr(event),
            byte_field("join_eui", ids.get("join_eui") or dig(join_request, "join_eui")),
            byte_field("dev_eui", ids.get("dev_eui") or dig(join_request, "dev_eui")),
        )
    else:
        fields = _collect(_dev_addr(event))
    return BuiltFields(fields=fields, identity_id=resolve_identity(event))


def build_device_downlink_fields(event: Mapping[str, Any]) -> BuiltFields:
    if is_application_downlink_data_type(event):
        data = get_data(event) or {}
        fields = _collect(
            _dev_addr(event),
            text_field("f_port", data.get("f_port")),
            payload_field("frm_payload", data.get("frm_payload")),
        )
    else:
        fields = _collect(_dev_addr(event))
    return BuiltFields(fields=fields, identity_id=resolve_identity(event))


def build_device_uplink_fields(event: Mapping[str, Any]) -> BuiltFields:
    data = get_data(event) or {}
    fields = _collect(_dev_addr(event))

    if has_uplink_message_data(event):
        uplink = data.get("uplink_message")
        if not isinstance(uplink, Mapping):
            uplink = {}
        if "f_port" in uplink:
            _extend(fields, [text_field("f_port", uplink.get("f_port"))])
        if "decoded_payload" in uplink:
            _extend(
                fields,
                [
                    code_field("decoded_payload", uplink.get("decoded_payload")),
                    payload_field("frm_payload", uplink.get("frm_payload")),
                ],
            )
        else:
            _extend(fields, [payload_field("frm_payload", uplink.get("frm_payload"))])
    elif has_mac_data(event):
        mac_payload = dig(data, "payload", "mac_payload")
        if not fields:
            _extend(fields, [byte_field("dev_addr", dig(mac_payload, "f_hdr", "dev_addr"))])
        if has_path(mac_payload, "f_port"):
            _extend(fields, [text_field("f_port", mac_payload["f_port"])])
        if has_path(mac_payload, "frm_payload"):
            _extend(fields, [payload_field("frm_payload", mac_payload["frm_payload"])])

    return BuiltFields(fields=fields, identity_id=resolve_identity(event))


def build_gateway_uplink_fields(event: Mapping[str, Any]) -> BuiltFields:
    data = get_data(event) or {}
    if has_mac_data(event):
        mac_payload = dig(data, "payload", "mac_payload")
        fields = _collect(
            byte_field("dev_addr", dig(mac_payload, "f_hdr", "dev_addr")),
            text_field("f_port", dig(mac_payload, "f_port")),
            payload_field("frm_payload", dig(mac_payload, "frm_payload")),
        )
    elif has_join_request_data(event):
        join_request = dig(data, "payload", "join_request_payload")
        fields = _collect(
            byte_field("join_eui", dig(join_request, "join_eui")),
            byte_field("dev_eui", dig(join_request, "dev_eui")),
        )
    else:
        fields = []
    return BuiltFields(fields=fields, identity_id=resolve_identity(event))


def build_gateway_connection_fields(event: Mapping[str, Any]) -> BuiltFields:
    kind = gateway_connection_kind(event)
    return BuiltFields(
        icon=f"gateway_{kind}" if kind is not None else None,
        identity_id=resolve_identity(event),
    )
