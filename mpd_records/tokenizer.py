"""Turning raw response lines into ``(key, value)`` pairs.

The transport hands over one command response as an iterable of lines.
:func:`iter_pairs` splits them lazily and stops at the terminating ``OK``.
Record builders accept either those pairs or any iterable whose elements are
pairs or exception instances; :func:`unwrap` normalizes both into a single
failure channel.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Tuple, Union

from . import proto_keys
from .errors import MalformedLineError, MpdRecordsError, ServerError, TransportError

Pair = Tuple[str, str]
PairResult = Union[Pair, BaseException]

_ACK_RE = re.compile(r"ACK \[([0-9]+)@([0-9]+)\] \{([^}]*)\}\s?(.*)")


def split_line(line: str) -> Pair:
    """Split ``key: value`` at the first separator."""
    key, sep, value = line.partition(": ")
    if not sep:
        # Some servers omit the trailing space on empty values.
        if line.endswith(":") and len(line) > 1:
            return line[:-1], ""
        raise MalformedLineError(line)
    if not key:
        raise MalformedLineError(line)
    return key, value


def parse_ack(line: str) -> ServerError:
    match = _ACK_RE.fullmatch(line)
    if not match:
        raise MalformedLineError(line)
    code, index, command, message = match.groups()
    return ServerError(int(code), int(index), command or None, message)


def iter_pairs(lines: Iterable[Union[str, bytes]]) -> Iterator[Pair]:
    """Yield pairs until ``OK``/``list_OK`` or the end of ``lines``.

    An ``ACK`` line raises :class:`ServerError`.
    """
    for raw in lines:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        line = raw.rstrip("\r\n")
        if line in (proto_keys.OK, proto_keys.LIST_OK):
            return
        if line.startswith(proto_keys.ACK):
            raise parse_ack(line)
        yield split_line(line)


def unwrap(results: Iterable[PairResult]) -> Iterator[Pair]:
    """Yield pairs from ``results``, raising the first error found.

    Errors from this package pass through unchanged. Anything else, whether
    carried as an element or raised while pulling, becomes a
    :class:`TransportError` chained to the underlying exception.
    """
    iterator = iter(results)
    while True:
        try:
            item = next(iterator)
        except StopIteration:
            return
        except MpdRecordsError:
            raise
        except Exception as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        if isinstance(item, MpdRecordsError):
            raise item
        if isinstance(item, BaseException):
            raise TransportError(str(item) or type(item).__name__) from item
        yield item


def split_records(results: Iterable[PairResult], first_key: str) -> Iterator[List[Pair]]:
    """Group a listing into one pair list per record.

    A record starts at each ``first_key`` line, e.g. ``file`` for song
    listings and ``playlist`` for playlist listings.
    """
    current: List[Pair] = []
    for key, value in unwrap(results):
        if key == first_key and current:
            yield current
            current = []
        current.append((key, value))
    if current:
        yield current
