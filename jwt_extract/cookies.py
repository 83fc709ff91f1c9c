"""Parsing of the HTTP ``Cookie`` request header."""

import logging
import re
from typing import Dict, Optional
from urllib.parse import unquote

logger = logging.getLogger(__name__)

_ESCAPED_RE = re.compile(r"(?:[^%]|%[0-9A-Fa-f]{2})*")


def _decode(value: str) -> str:
    if "%" not in value:
        return value
    if not _ESCAPED_RE.fullmatch(value):
        return value
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        # Undecodable escapes are kept as sent.
        return value


def parse_cookie(header: Optional[str]) -> Dict[str, str]:
    """Parse a ``Cookie`` header into a name -> value dict.

    Pairs are separated by ``;``. Names and values are stripped, a value in
    double quotes is unquoted and percent-escapes are decoded. Pairs with no
    ``=`` are skipped and the first occurrence of a name wins.
    """

    if not header or not isinstance(header, str):
        return {}

    out: Dict[str, str] = {}
    for pair in header.split(";"):
        name, sep, value = pair.partition("=")
        if not sep:
            continue

        name = name.strip()
        if name in out:
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
            value = value[1:-1]

        out[name] = _decode(value)

    logger.debug("Parsed %d cookie(s)", len(out))
    return out
