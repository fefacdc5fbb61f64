"""Folding ``(key, value)`` pairs into records.

Each builder consumes the pairs of exactly one record. The first failure,
whether it came from the line source or from decoding a value, aborts the
build; no partially filled record is ever returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from . import proto_keys
from .config import DecoderSettings
from .errors import MissingFieldError
from .fields import parse_duration, parse_epoch, parse_int, parse_time
from .models import Id, Playlist, QueuePlace, Range, Song, Stats
from .tokenizer import PairResult, split_records, unwrap

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _PlaceDraft:
    id: int = 0
    pos: int = 0
    prio: int = 0

    def freeze(self) -> QueuePlace:
        return QueuePlace(Id(self.id), self.pos, self.prio)


class SongBuilder:
    def __init__(self, settings: Optional[DecoderSettings] = None) -> None:
        self._settings = settings or DecoderSettings()
        self._file: Optional[str] = None
        self._name: Optional[str] = None
        self._last_mod: Optional[datetime] = None
        self._duration: Optional[timedelta] = None
        self._range: Optional[Range] = None
        self._place: Optional[_PlaceDraft] = None
        self._tags: Dict[str, str] = {}

    def feed(self, key: str, value: str) -> None:
        handler = self._HANDLERS.get(key)
        if handler is not None:
            handler(self, value)
            return
        if key in self._tags:
            logger.debug("Tag %s repeated (%r -> %r)", key, self._tags[key], value)
        self._tags[key] = value

    def _place_draft(self) -> _PlaceDraft:
        # Created by whichever of Id/Pos/Prio shows up first.
        if self._place is None:
            self._place = _PlaceDraft()
        return self._place

    def _set_file(self, value: str) -> None:
        self._file = value

    def _set_last_mod(self, value: str) -> None:
        self._last_mod = parse_time(proto_keys.LAST_MODIFIED, value)

    def _set_name(self, value: str) -> None:
        self._name = value

    def _set_duration(self, value: str) -> None:
        self._duration = parse_duration(proto_keys.TIME, value)

    def _set_range(self, value: str) -> None:
        self._range = Range.parse(value)

    def _set_id(self, value: str) -> None:
        song_id = parse_int(proto_keys.ID, value)
        self._place_draft().id = song_id

    def _set_pos(self, value: str) -> None:
        pos = parse_int(proto_keys.POS, value)
        self._place_draft().pos = pos

    def _set_prio(self, value: str) -> None:
        prio = parse_int(proto_keys.PRIO, value, bits=8)
        self._place_draft().prio = prio

    _HANDLERS: Dict[str, Callable[["SongBuilder", str], None]] = {
        proto_keys.FILE: _set_file,
        proto_keys.LAST_MODIFIED: _set_last_mod,
        proto_keys.NAME: _set_name,
        proto_keys.TIME: _set_duration,
        proto_keys.RANGE: _set_range,
        proto_keys.ID: _set_id,
        proto_keys.POS: _set_pos,
        proto_keys.PRIO: _set_prio,
    }

    def build(self) -> Song:
        if self._file is None and self._settings.require_file:
            raise MissingFieldError(proto_keys.FILE)
        return Song(
            file=self._file or "",
            name=self._name,
            last_mod=self._last_mod,
            duration=self._duration,
            place=self._place.freeze() if self._place else None,
            range=self._range,
            tags=dict(self._tags),
        )


def _count(field: str, text: str) -> int:
    return parse_int(field, text)


class StatsBuilder:
    _FIELDS: Dict[str, Callable[[str, str], object]] = {
        proto_keys.ARTISTS: _count,
        proto_keys.ALBUMS: _count,
        proto_keys.SONGS: _count,
        proto_keys.UPTIME: parse_duration,
        proto_keys.PLAYTIME: parse_duration,
        proto_keys.DB_PLAYTIME: parse_duration,
        proto_keys.DB_UPDATE: parse_epoch,
    }

    def __init__(self) -> None:
        self._values: Dict[str, object] = {}

    def feed(self, key: str, value: str) -> None:
        decoder = self._FIELDS.get(key)
        if decoder is None:
            logger.debug("Ignoring unknown stats key %s", key)
            return
        self._values[key] = decoder(key, value)

    def build(self) -> Stats:
        return Stats(**self._values)


def song_from_pairs(
    results: Iterable[PairResult], settings: Optional[DecoderSettings] = None
) -> Song:
    builder = SongBuilder(settings)
    for key, value in unwrap(results):
        builder.feed(key, value)
    song = builder.build()
    logger.debug("Decoded song %s", song.file)
    return song


def songs_from_pairs(
    results: Iterable[PairResult], settings: Optional[DecoderSettings] = None
) -> List[Song]:
    """Decode a song listing such as ``playlistinfo`` or ``find`` output."""
    return [song_from_pairs(pairs, settings) for pairs in split_records(results, proto_keys.FILE)]


def stats_from_pairs(results: Iterable[PairResult]) -> Stats:
    builder = StatsBuilder()
    for key, value in unwrap(results):
        builder.feed(key, value)
    return builder.build()


def pairs_to_map(results: Iterable[PairResult]) -> Dict[str, str]:
    """Collect pairs into a mapping; a repeated key keeps its last value."""
    return {key: value for key, value in unwrap(results)}


def playlist_from_map(mapping: Mapping[str, str]) -> Playlist:
    name = mapping.get(proto_keys.PLAYLIST)
    if name is None:
        raise MissingFieldError(proto_keys.PLAYLIST)
    last_mod = mapping.get(proto_keys.LAST_MODIFIED)
    if last_mod is None:
        raise MissingFieldError(proto_keys.LAST_MODIFIED)
    return Playlist(name=name, last_mod=parse_time(proto_keys.LAST_MODIFIED, last_mod))


def playlists_from_pairs(results: Iterable[PairResult]) -> List[Playlist]:
    """Decode ``listplaylists`` output."""
    return [
        playlist_from_map(pairs_to_map(pairs))
        for pairs in split_records(results, proto_keys.PLAYLIST)
    ]
