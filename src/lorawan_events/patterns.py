"""Compiled name patterns for the dotted event naming grammar.

Every pattern is applied with full-string semantics (``re.fullmatch``). A name
segment is at least three characters, starts and ends alphanumeric and may
carry single ``-`` or ``_`` separators inside.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional


SEGMENT = r"[a-z0-9](?:[-_]?[a-z0-9]){2,}"
CRUD_PREFIX = r"(?:(?:ns|as|js)\.)?"


def _crud(verbs: str) -> re.Pattern[str]:
    return re.compile(rf"{CRUD_PREFIX}(?:{SEGMENT}\.)+(?P<verb>{verbs})")


def _prefixed(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"{prefix}(?:\.{SEGMENT})+")


@dataclass(frozen=True)
class EventPatterns:
    crud: re.Pattern[str] = field(default_factory=lambda: _crud("create|delete|update"))
    crud_create: re.Pattern[str] = field(default_factory=lambda: _crud("create"))
    crud_delete: re.Pattern[str] = field(default_factory=lambda: _crud("delete"))
    crud_update: re.Pattern[str] = field(default_factory=lambda: _crud("update"))
    device_uplink: re.Pattern[str] = field(default_factory=lambda: _prefixed(r"(?:ns|as)\.up"))
    device_downlink: re.Pattern[str] = field(default_factory=lambda: _prefixed(r"(?:ns|as)\.down"))
    device_join: re.Pattern[str] = field(
        default_factory=lambda: _prefixed(r"(?:js|ns|as)(?:\.up|\.down)?\.(?:join|rejoin)")
    )
    gateway_uplink: re.Pattern[str] = field(default_factory=lambda: _prefixed(r"gs\.up"))
    gateway_downlink: re.Pattern[str] = field(default_factory=lambda: _prefixed(r"gs\.down"))
    gateway_connection: re.Pattern[str] = field(
        default_factory=lambda: re.compile(r"gs\.gateway\.(?P<verb>connect|disconnect)")
    )
    ns_generic: re.Pattern[str] = field(default_factory=lambda: _prefixed(r"ns"))


PATTERNS = EventPatterns()


def match_name(pattern: re.Pattern[str], name: Any) -> Optional[re.Match[str]]:
    """Full-match ``name`` against ``pattern``; non-string names never match."""
    if not isinstance(name, str):
        return None
    return pattern.fullmatch(name)
