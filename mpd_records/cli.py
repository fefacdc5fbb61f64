from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .builders import (
    pairs_to_map,
    playlist_from_map,
    playlists_from_pairs,
    song_from_pairs,
    songs_from_pairs,
    stats_from_pairs,
)
from .config import Settings, find_config
from .errors import MpdRecordsError
from .tokenizer import iter_pairs

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

RECORD_KINDS = ("song", "songs", "stats", "playlist", "playlists")


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def configure_logging(level_name: str) -> None:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def decode(kind: str, lines: Iterable[str], settings: Settings) -> object:
    """Decode one command response and return its serialized form."""
    pairs = iter_pairs(lines)
    if kind == "song":
        return song_from_pairs(pairs, settings.decoder).to_record()
    if kind == "songs":
        return [song.to_record() for song in songs_from_pairs(pairs, settings.decoder)]
    if kind == "stats":
        return stats_from_pairs(pairs).to_record()
    if kind == "playlist":
        return playlist_from_map(pairs_to_map(pairs)).to_record()
    if kind == "playlists":
        return [playlist.to_record() for playlist in playlists_from_pairs(pairs)]
    raise ValueError(f"unknown record kind: {kind}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Decode MPD protocol responses into JSON records"
    )
    parser.add_argument("--config", type=Path, help="Path to mpd-records.yaml")
    parser.add_argument("--log-level", default=None, help="Python logging level")
    parser.add_argument("kind", choices=RECORD_KINDS, help="Record type in the response")
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="File holding the raw response lines (defaults to stdin)",
    )
    args = parser.parse_args(argv)

    config_path = find_config(args.config)
    settings = Settings.load(config_path) if config_path else Settings()
    configure_logging(args.log_level or settings.log_level)
    if config_path:
        logger.debug("Loaded settings from %s", config_path)

    try:
        if args.input is None:
            payload = decode(args.kind, sys.stdin, settings)
        else:
            with args.input.open("r", encoding="utf-8") as fh:
                payload = decode(args.kind, fh, settings)
    except MpdRecordsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
