"""Name grammar of the compiled pattern registry."""

import dataclasses

import pytest

from lorawan_events.patterns import PATTERNS, EventPatterns, match_name


@pytest.mark.parametrize(
    "name",
    [
        "application.create",
        "end_device.update",
        "gateway.api-key.delete",
        "ns.end_device.update",
        "as.link.delete",
        "js.end_device.create",
        "abc.def.ghi.create",
        "a1b.c2d.update",
    ],
)
def test_crud_names(name: str) -> None:
    assert match_name(PATTERNS.crud, name) is not None


@pytest.mark.parametrize(
    "name",
    [
        "create",
        "ab.create",
        "application.created",
        "Application.create",
        "application..create",
        "app--x.create",
        "app_.create",
        "gs.create",
        "xx.application.create",
        " application.create",
    ],
)
def test_non_crud_names(name: str) -> None:
    assert match_name(PATTERNS.crud, name) is None


def test_crud_verb_patterns_are_exclusive() -> None:
    for verb, pattern in [
        ("create", PATTERNS.crud_create),
        ("update", PATTERNS.crud_update),
        ("delete", PATTERNS.crud_delete),
    ]:
        name = f"organization.{verb}"
        matched = [
            other
            for other in (PATTERNS.crud_create, PATTERNS.crud_update, PATTERNS.crud_delete)
            if match_name(other, name)
        ]
        assert matched == [pattern]
        assert match_name(PATTERNS.crud, name).group("verb") == verb


@pytest.mark.parametrize(
    "pattern, name, expected",
    [
        (PATTERNS.device_uplink, "ns.up.data.receive", True),
        (PATTERNS.device_uplink, "as.up.data.forward", True),
        (PATTERNS.device_uplink, "ns.up.merge_metadata", True),
        (PATTERNS.device_uplink, "js.up.data.receive", False),
        (PATTERNS.device_uplink, "ns.up", False),
        (PATTERNS.device_uplink, "ns.upx.data", False),
        (PATTERNS.device_downlink, "ns.down.data.schedule.attempt", True),
        (PATTERNS.device_downlink, "as.down.data.forward", True),
        (PATTERNS.device_downlink, "gs.down.send", False),
        (PATTERNS.device_join, "js.join.accept", True),
        (PATTERNS.device_join, "ns.up.join.forward", True),
        (PATTERNS.device_join, "ns.down.join.schedule.attempt", True),
        (PATTERNS.device_join, "as.up.join.forward", True),
        (PATTERNS.device_join, "ns.rejoin.receive", True),
        (PATTERNS.device_join, "js.join", False),
        (PATTERNS.device_join, "gs.up.join.forward", False),
        (PATTERNS.gateway_uplink, "gs.up.receive", True),
        (PATTERNS.gateway_uplink, "gs.up.drop", True),
        (PATTERNS.gateway_uplink, "ns.up.receive", False),
        (PATTERNS.gateway_downlink, "gs.down.send", True),
        (PATTERNS.gateway_downlink, "gs.down.tx.success", False),
        (PATTERNS.gateway_downlink, "gs.down.send.success", True),
        (PATTERNS.gateway_connection, "gs.gateway.connect", True),
        (PATTERNS.gateway_connection, "gs.gateway.disconnect", True),
        (PATTERNS.gateway_connection, "gs.gateway.connects", False),
        (PATTERNS.gateway_connection, "gs.gateway.connect.fail", False),
        (PATTERNS.ns_generic, "ns.mac.link_adr.request", True),
        (PATTERNS.ns_generic, "ns.class.switch.c", False),
    ],
)
def test_traffic_patterns(pattern, name: str, expected: bool) -> None:
    assert (match_name(pattern, name) is not None) is expected


@pytest.mark.parametrize("name", [None, 42, b"application.create", ["gs.up.receive"]])
def test_non_string_names_never_match(name) -> None:
    for field in dataclasses.fields(EventPatterns):
        assert match_name(getattr(PATTERNS, field.name), name) is None


def test_registry_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        PATTERNS.crud = PATTERNS.ns_generic  # type: ignore[misc]
