"""Decoders for single protocol values.

Every decoder takes the name of the field it is decoding so failures can
report which key carried the bad text. Durations and timestamps are kept at
seconds resolution.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from .errors import ParseError, TimeParseError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ZERO = timedelta(0)

_UNSIGNED_RE = re.compile(r"[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_TIME_RE = re.compile(
    r"([0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2})"
    r"(?:\.[0-9]+)?"
    r"(Z|[+-][0-9]{2}:?[0-9]{2})"
)
_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_int(field: str, text: str, bits: int = 32, signed: bool = False) -> int:
    pattern = _SIGNED_RE if signed else _UNSIGNED_RE
    if not pattern.fullmatch(text):
        raise ParseError(field, text, "not a decimal integer")
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    out_of_range = f"out of range for {'i' if signed else 'u'}{bits}"
    sign = text[0] if text[0] in "+-" else ""
    digits = text[len(sign):].lstrip("0") or "0"
    # Bound the length first so int() never sees an arbitrarily long string.
    if len(digits) > len(str(high)):
        raise ParseError(field, text, out_of_range)
    value = int(sign + digits)
    if not low <= value <= high:
        raise ParseError(field, text, out_of_range)
    return value


def parse_duration(field: str, text: str) -> timedelta:
    """Decode a whole number of seconds."""
    seconds = parse_int(field, text, bits=64)
    try:
        return timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ParseError(field, text, "duration out of range") from exc


def parse_time(field: str, text: str) -> datetime:
    """Decode ``YYYY-MM-DDTHH:MM:SS`` followed by ``Z`` or a UTC offset.

    Fractional seconds are accepted and dropped. The result is an aware
    datetime in UTC.
    """
    match = _TIME_RE.fullmatch(text)
    if not match:
        raise TimeParseError(field, text)
    base, zone = match.groups()
    offset = "+0000" if zone == "Z" else zone.replace(":", "")
    try:
        parsed = datetime.strptime(base + offset, _TIME_FORMAT)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as exc:
        raise TimeParseError(field, text) from exc


def parse_epoch(field: str, text: str) -> datetime:
    """Decode a Unix timestamp given as integer seconds."""
    seconds = parse_int(field, text, bits=64, signed=True)
    try:
        return EPOCH + timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ParseError(field, text, "timestamp out of range") from exc


def parse_range(field: str, text: str) -> Tuple[timedelta, Optional[timedelta]]:
    """Decode ``A-B``, ``A-``, ``-B``, ``-`` or an empty string.

    A missing start is zero, a missing end is unbounded (``None``).
    """
    head, _, tail = text.partition("-")
    start = parse_duration(field, head) if head else ZERO
    end = parse_duration(field, tail) if tail else None
    return start, end
