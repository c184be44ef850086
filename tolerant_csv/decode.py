"""
Bytes to text for uploaded delimited files.

Rules:
- Detect encoding best-effort via charset-normalizer.
- If detection yields nothing, try UTF-8.
- A UTF-8 BOM selects utf-8-sig so the BOM does not reach the tokenizer.
- If decode fails, fall back to strict UTF-8, then to UTF-8 with replacement
  characters, and report it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
        except UnicodeDecodeError:
            # Last resort: keep going with replacement characters
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"

    if decode_fallback:
        logger.warning(
            "decode of %d bytes fell back to %s (detected %s)",
            len(raw),
            decode_used,
            detected,
        )

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, report
