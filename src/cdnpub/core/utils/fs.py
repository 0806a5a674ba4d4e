"""Filesystem helpers: JSON read/write, directory clearing and listing"""

import json
import shutil
from pathlib import Path
from typing import Any

from cdnpub.core.errors import BuildError


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def read_json(path: Path, label: str = "json") -> Any:
    """Parse the JSON file at path. Raises BuildError naming label and path.

    NaN, Infinity and -Infinity are rejected like any other invalid token.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, ValueError) as e:
        raise BuildError(f"Cannot read {label} at {path}: {e}") from e
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise BuildError(f"Invalid JSON in {label} at {path}: {e}") from e


def dump_json(data: Any) -> str:
    """Serialize data the way every output document is written (2-space indent)."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json(path: Path, data: Any) -> Path:
    """Write data as indented JSON, creating parent directories."""
    return write_bytes(path, dump_json(data).encode("utf-8"))


def write_bytes(path: Path, data: bytes) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except (OSError, ValueError) as e:
        raise BuildError(f"Cannot write {path}: {e}") from e
    return path


def ensure_dir(path: Path) -> Path:
    """Create path and its parents if missing; existing content is left alone."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BuildError(f"Cannot create directory {path}: {e}") from e
    return path


def clean_dir(path: Path) -> Path:
    """Recursively delete path if present, then recreate it empty."""
    try:
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BuildError(f"Cannot clear directory {path}: {e}") from e
    return path


def _entries(base: Path) -> list[Path]:
    """Children of base; [] if base is missing, BuildError if it can't be listed."""
    if not base.is_dir():
        return []
    try:
        return list(base.iterdir())
    except OSError as e:
        raise BuildError(f"Cannot list directory {base}: {e}") from e


def list_dirs(base: Path) -> list[str]:
    """Names of immediate subdirectories of base, sorted; [] if base is missing."""
    return sorted(p.name for p in _entries(base) if p.is_dir())


def list_json_files(base: Path) -> list[str]:
    """Names of *.json files (case-insensitive suffix) directly in base, sorted."""
    return sorted(p.name for p in _entries(base) if p.is_file() and p.suffix.lower() == ".json")
