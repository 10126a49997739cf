from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from gml_fmt.config.model import LangConfig
from gml_fmt.errors.base import GmlFmtError
from gml_fmt.errors.guidance import build_guidance_message

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("gml_fmt.toml", ".gml_fmt.toml", ".gml_fmt")


@dataclass(frozen=True)
class ConfigSource:
    kind: str
    path: str | None = None


def load_lang_config(root: Path | None = None) -> LangConfig:
    config, _ = resolve_lang_config(root)
    return config


def resolve_lang_config(root: Path | None = None) -> tuple[LangConfig, ConfigSource]:
    """Read the language config from `root` (default: the working directory).

    Missing, unreadable or invalid files fall back to the defaults.
    """
    config_path = find_config_file(Path(root) if root is not None else Path.cwd())
    if config_path is None:
        return LangConfig(), ConfigSource(kind="defaults")
    try:
        data = _parse_toml(config_path.read_text(encoding="utf-8"), config_path)
        config = LangConfig.from_mapping(data)
    except (OSError, UnicodeDecodeError, GmlFmtError) as err:
        logger.warning("Ignoring %s and using default settings: %s", config_path, err)
        return LangConfig(), ConfigSource(kind="defaults")
    for key in sorted(set(data) - {"use_spaces", "space_size", "newlines_at_end"}):
        logger.debug("Unknown config key %r in %s", key, config_path)
    logger.debug("Loaded config from %s", config_path)
    return config, ConfigSource(kind="toml", path=config_path.as_posix())


def find_config_file(root: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _parse_toml(text: str, path: Path) -> Dict[str, Any]:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as err:
        raise GmlFmtError(
            build_guidance_message(
                what=f"{path.name} is not valid TOML.",
                why=f"TOML parsing failed: {err}.",
                fix=f"Fix the TOML syntax in {path.name}.",
                example="space_size = 2",
            ),
            details={"file": path.as_posix()},
        ) from err
    return data if isinstance(data, dict) else {}


__all__ = ["CONFIG_FILENAMES", "ConfigSource", "find_config_file", "load_lang_config", "resolve_lang_config"]
