from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from gml_fmt.errors.base import GmlFmtError
from gml_fmt.errors.guidance import build_guidance_message


@dataclass(frozen=True)
class LangConfig:
    use_spaces: bool = True
    space_size: int = 4
    newlines_at_end: int = 1

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "LangConfig":
        defaults = cls()
        use_spaces = data.get("use_spaces", defaults.use_spaces)
        space_size = data.get("space_size", defaults.space_size)
        newlines_at_end = data.get("newlines_at_end", defaults.newlines_at_end)
        if not isinstance(use_spaces, bool):
            raise _invalid_value("use_spaces", use_spaces, "a boolean", "use_spaces = false")
        if not _is_int(space_size) or space_size < 1:
            raise _invalid_value("space_size", space_size, "a positive integer", "space_size = 2")
        if not _is_int(newlines_at_end) or newlines_at_end < 0:
            raise _invalid_value("newlines_at_end", newlines_at_end, "a non-negative integer", "newlines_at_end = 1")
        return cls(use_spaces=use_spaces, space_size=space_size, newlines_at_end=newlines_at_end)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _invalid_value(key: str, value: object, expected: str, example: str) -> GmlFmtError:
    return GmlFmtError(
        build_guidance_message(
            what=f"Config key '{key}' has invalid value {value!r}.",
            why=f"'{key}' must be {expected}.",
            fix=f"Set '{key}' to {expected} or remove it to use the default.",
            example=example,
        ),
        details={"key": key},
    )


__all__ = ["LangConfig"]
