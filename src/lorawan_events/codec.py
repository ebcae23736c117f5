from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional


logger = logging.getLogger(__name__)


def base64_to_hex(value: Optional[str]) -> str:
    """Render base64-encoded frame bytes as uppercase hex.

    Empty or missing input yields ``""``. Undecodable input is logged and also
    yields ``""`` since the result only feeds display fields.
    """
    if not value:
        return ""
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError, TypeError):
        logger.warning("Undecodable base64 payload", extra={"status": "codec_error"})
        return ""
    return raw.hex().upper()
