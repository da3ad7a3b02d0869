from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .diagnostics import DEFAULT_MAX_EVENTS
from .models import TagKind


class DiagnosticsSettings(BaseModel):
    log_level: str = "WARNING"
    max_events: int = Field(default=DEFAULT_MAX_EVENTS, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str | int) -> str:
        if isinstance(value, int):
            value = logging.getLevelName(value)
        name = str(value).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {value}")
        return name

    def level_number(self) -> int:
        return logging.getLevelName(self.log_level)


class LoaderSettings(BaseModel):
    enabled_tags: List[TagKind] = Field(default_factory=lambda: list(TagKind))
    strict: bool = False


class Settings(BaseModel):
    diagnostics: DiagnosticsSettings = DiagnosticsSettings()
    loader: LoaderSettings = LoaderSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Path:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "serato-meta.yaml", cwd / "serato-meta.yml"):
        if candidate.exists():
            return candidate
    raise FileNotFoundError("Could not find serato-meta.yaml - pass the path explicitly.")
