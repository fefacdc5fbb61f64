"""Errors raised while decoding protocol records."""

from __future__ import annotations

from typing import Optional


class MpdRecordsError(Exception):
    """Base error for this package."""


class ProtocolError(MpdRecordsError):
    """Raised when a response does not have the shape a record requires."""


class MissingFieldError(ProtocolError):
    def __init__(self, field: str) -> None:
        super().__init__(f"missing field {field!r}")
        self.field = field


class MalformedLineError(ProtocolError):
    def __init__(self, line: str) -> None:
        super().__init__(f"expected 'key: value', got {line!r}")
        self.line = line


class ServerError(ProtocolError):
    """An ``ACK`` line reported by the server."""

    def __init__(
        self,
        code: int,
        command_index: int,
        command: Optional[str],
        message: str,
    ) -> None:
        super().__init__(f"[{code}@{command_index}] {{{command or ''}}} {message}")
        self.code = code
        self.command_index = command_index
        self.command = command
        self.message = message


class ParseError(MpdRecordsError):
    """Raised when a field value cannot be converted to its type."""

    def __init__(self, field: str, raw: str, reason: Optional[str] = None) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"cannot parse {field} from {raw!r}{detail}")
        self.field = field
        self.raw = raw


class TimeParseError(MpdRecordsError):
    """Raised when a timestamp does not match ``YYYY-MM-DDTHH:MM:SS<tz>``."""

    def __init__(self, field: str, raw: str) -> None:
        super().__init__(f"cannot parse {field} timestamp from {raw!r}")
        self.field = field
        self.raw = raw


class TransportError(MpdRecordsError):
    """Wraps a failure surfaced by the line source itself."""
