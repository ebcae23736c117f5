"""Base64 to hex rendering of frame bytes."""

import logging

import pytest

from lorawan_events.codec import base64_to_hex


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1A==", "D4"),
        ("AQ==", "01"),
        ("q80=", "ABCD"),
        ("6Lg=", "E8B8"),
        ("Afs2AADArgA=", "01FB360000C0AE00"),
    ],
)
def test_base64_to_hex(value: str, expected: str) -> None:
    assert base64_to_hex(value) == expected


def test_is_deterministic() -> None:
    assert base64_to_hex("1A==") == base64_to_hex("1A==")


@pytest.mark.parametrize("value", [None, ""])
def test_empty_input(value) -> None:
    assert base64_to_hex(value) == ""


@pytest.mark.parametrize("value", ["not base64!", "AQ"])
def test_undecodable_input_is_logged(value: str, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="lorawan_events.codec"):
        assert base64_to_hex(value) == ""
    assert "Undecodable base64 payload" in caplog.text
