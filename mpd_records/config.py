from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator


class DecoderSettings(BaseModel):
    # Songs without a ``file`` line decode with file="" unless this is set.
    require_file: bool = False


class Settings(BaseModel):
    decoder: DecoderSettings = DecoderSettings()
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return str(value).upper()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "mpd-records.yaml", cwd / "mpd-records.yml"):
        if candidate.exists():
            return candidate
    return None
