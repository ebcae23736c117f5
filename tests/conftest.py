"""Sample stack events shared across the test modules."""

from __future__ import annotations

from typing import Any, Dict

import pytest


TYPE_PREFIX = "type.googleapis.com/ttn.lorawan.v3."

DEVICE_IDS = {
    "device_id": "test-dev-01",
    "application_ids": {"application_id": "test-app"},
    "dev_eui": "0004A30B001C1E48",
    "join_eui": "8000000000000003",
    "dev_addr": "2700000B",
}


def make_event(name: Any, data_type: str | None = None, **data: Any) -> Dict[str, Any]:
    event: Dict[str, Any] = {
        "name": name,
        "time": "2020-09-25T13:46:54.243812282Z",
        "identifiers": [{"device_ids": dict(DEVICE_IDS)}],
        "correlation_ids": ["ns:uplink:01EK2R8FMHS2K1B5FPBE65PFQN"],
        "origin": "ip-10-20-12-205.eu-west-1.compute.internal",
        "unique_id": "01EK2R8HD3GF7385AXR4028NJE",
    }
    if data_type is not None:
        event["data"] = {"@type": TYPE_PREFIX + data_type, **data}
    return event


@pytest.fixture
def ns_uplink_event() -> Dict[str, Any]:
    return make_event(
        "ns.up.data.receive",
        "UplinkMessage",
        raw_payload="QAsAACeAAQABAeo=",
        payload={
            "m_hdr": {"m_type": "UNCONFIRMED_UP"},
            "mac_payload": {
                "f_hdr": {"dev_addr": "2700000B", "f_ctrl": {"adr": True}, "f_cnt": 1},
                "f_port": 1,
                "frm_payload": "AQ==",
            },
        },
    )


@pytest.fixture
def as_uplink_event() -> Dict[str, Any]:
    return make_event(
        "as.up.data.forward",
        "ApplicationUp",
        end_device_ids=dict(DEVICE_IDS),
        uplink_message={
            "session_key_id": "AXBSH1Pk6Z0G166fNWWOMA==",
            "f_port": 1,
            "f_cnt": 18,
            "frm_payload": "q80=",
            "decoded_payload": {"temperature": 22.3, "status": "ON"},
        },
    )


@pytest.fixture
def join_accept_event() -> Dict[str, Any]:
    return make_event(
        "as.up.join.forward",
        "ApplicationUp",
        end_device_ids=dict(DEVICE_IDS),
        join_accept={"session_key_id": "AWogTGghnCfSJwgfSwASXQ=="},
    )


@pytest.fixture
def gateway_join_request_event() -> Dict[str, Any]:
    return {
        "name": "gs.up.receive",
        "time": "2019-04-15T09:20:39.449267Z",
        "identifiers": [{"gateway_ids": {"gateway_id": "admin-gtw", "eui": "0102030405060708"}}],
        "data": {
            "@type": TYPE_PREFIX + "UplinkMessage",
            "raw_payload": "AAgHBgUEAwIBCAcGBQQDAgEwAQBPZ7E=",
            "payload": {
                "m_hdr": {},
                "mic": "AE9nsQ==",
                "join_request_payload": {
                    "join_eui": "0102030405060708",
                    "dev_eui": "0807060504030201",
                    "dev_nonce": "0130",
                },
            },
        },
    }


@pytest.fixture
def gateway_uplink_event() -> Dict[str, Any]:
    return {
        "name": "gs.up.receive",
        "time": "2019-03-28T13:18:48.376022Z",
        "identifiers": [{"gateway_ids": {"gateway_id": "admin-gtw", "eui": "0102030405060708"}}],
        "data": {
            "@type": TYPE_PREFIX + "UplinkMessage",
            "raw_payload": "gNik0AAAAAAB6LgQBaNT",
            "payload": {
                "m_hdr": {"m_type": "CONFIRMED_UP"},
                "mic": "EAWjUw==",
                "mac_payload": {
                    "f_hdr": {"dev_addr": "00D0A4D8", "f_ctrl": {}},
                    "f_port": 1,
                    "frm_payload": "6Lg=",
                },
            },
        },
    }


@pytest.fixture
def error_event() -> Dict[str, Any]:
    return {
        "name": "ns.up.data.drop",
        "time": "2020-04-27T13:37:27.060385577Z",
        "identifiers": [
            {
                "device_ids": {
                    "device_id": "test-dev-01",
                    "application_ids": {"application_id": "test-app"},
                }
            }
        ],
        "data": {
            "@type": TYPE_PREFIX + "ErrorDetails",
            "namespace": "pkg/networkserver",
            "name": "duplicate",
            "message_format": "uplink is a duplicate",
            "code": 9,
        },
    }


@pytest.fixture
def application_create_event() -> Dict[str, Any]:
    return {
        "name": "application.create",
        "time": "2019-03-28T13:18:13.376022Z",
        "identifiers": [{"application_ids": {"application_id": "admin-app"}}],
    }


@pytest.fixture
def event_factory():
    """Build a device event with the given name and optional typed payload."""
    return make_event
