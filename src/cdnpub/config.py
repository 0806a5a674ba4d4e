"""Application configuration: settings schema and config.yaml loader"""

import os
from datetime import date
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "CDNPUB_"


def default_version(today: Optional[date] = None) -> str:
    """Local calendar date as YYYYMMDD."""
    return (today or date.today()).strftime("%Y%m%d")


def normalize_version(label: Any) -> str:
    """Strip one optional leading 'v'/'V' from a version label."""
    label = str(label).strip()
    return label[1:] if label[:1] in ("v", "V") else label


class Settings(BaseModel):
    """Immutable build configuration, passed explicitly to every build step."""
    model_config = ConfigDict(frozen=True)

    input_dir:  str  = Field(default="./source/v3_curated", description="Curated input root")
    output_dir: str  = Field(default="./cdn",               description="Output root served by the CDN")
    version:    str  = Field(default_factory=default_version, description="Version label (YYYYMMDD by default)")
    checksum:   bool = Field(default=False, description="Attach sha256 checksums to articles and manifests")
    log_level:  str  = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$", description="Logging level")

    @field_validator("version", mode="before")
    @classmethod
    def _normalize_version(cls, v: Any) -> str:
        if v is None or v == "":
            return default_version()
        label = normalize_version(v)
        if not label:
            raise ValueError(f"version label {v!r} is empty after stripping the 'v' prefix")
        return label

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @property
    def input_path(self) -> Path:
        return Path(self.input_dir)

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then CDNPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
