from __future__ import annotations

from importlib import metadata
from pathlib import Path


def get_version() -> str:
    try:
        version = metadata.version("gml-fmt")
    except metadata.PackageNotFoundError:
        version = None
    if not version:
        version_file = _find_version_file()
        if version_file is not None:
            return version_file.read_text(encoding="utf-8").strip()
        return "0.0.0"
    return version


def _find_version_file() -> Path | None:
    base = Path(__file__).resolve()
    for candidate in (base.parent / "VERSION", base.parent.parent.parent / "VERSION"):
        if candidate.exists():
            return candidate
    return None


__all__ = ["get_version"]
