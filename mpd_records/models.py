from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from . import proto_keys
from .fields import EPOCH, ZERO, parse_range
from .timefmt import (
    duration_secs,
    optional_duration_secs,
    optional_time_secs,
    time_secs,
)


@dataclass(frozen=True, slots=True, order=True)
class Id:
    """Song id assigned by the server when a song is queued."""

    value: int = 0

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    def to_record(self) -> List[int]:
        return [self.value]


@dataclass(frozen=True, slots=True)
class QueuePlace:
    id: Id = field(default_factory=Id)
    pos: int = 0
    """Absolute zero-based position in the queue"""
    prio: int = 0

    def to_record(self) -> Dict[str, object]:
        return {"id": self.id.to_record(), "pos": self.pos, "prio": self.prio}


@dataclass(frozen=True, slots=True)
class Range:
    """Part of a queued song to play; ``end`` of ``None`` plays to the end."""

    start: timedelta = ZERO
    end: Optional[timedelta] = None

    @classmethod
    def parse(cls, text: str) -> "Range":
        start, end = parse_range(proto_keys.RANGE, text)
        return cls(start, end)

    def __str__(self) -> str:
        end = optional_duration_secs(self.end)
        return f"{duration_secs(self.start)}:{'' if end is None else end}"

    def to_record(self) -> List[Optional[int]]:
        return [duration_secs(self.start), optional_duration_secs(self.end)]


@dataclass(frozen=True, slots=True)
class Song:
    file: str = ""
    name: Optional[str] = None
    last_mod: Optional[datetime] = None
    duration: Optional[timedelta] = None
    place: Optional[QueuePlace] = None
    range: Optional[Range] = None
    tags: Dict[str, str] = field(default_factory=dict)

    def to_record(self) -> Dict[str, object]:
        return {
            "file": self.file,
            "name": self.name,
            "last_mod": optional_time_secs(self.last_mod),
            "duration": optional_duration_secs(self.duration),
            "place": self.place.to_record() if self.place else None,
            "range": self.range.to_record() if self.range else None,
            "tags": {key: self.tags[key] for key in sorted(self.tags)},
        }


@dataclass(frozen=True, slots=True)
class Stats:
    """Database and playback statistics reported by ``stats``."""

    artists: int = 0
    albums: int = 0
    songs: int = 0
    uptime: timedelta = ZERO
    playtime: timedelta = ZERO
    db_playtime: timedelta = ZERO
    db_update: datetime = EPOCH

    def to_record(self) -> Dict[str, object]:
        return {
            "artists": self.artists,
            "albums": self.albums,
            "songs": self.songs,
            "uptime": duration_secs(self.uptime),
            "playtime": duration_secs(self.playtime),
            "db_playtime": duration_secs(self.db_playtime),
            "db_update": time_secs(self.db_update),
        }


@dataclass(frozen=True, slots=True)
class Playlist:
    name: str
    last_mod: datetime

    def to_record(self) -> Dict[str, object]:
        return {"name": self.name, "last_mod": time_secs(self.last_mod)}
