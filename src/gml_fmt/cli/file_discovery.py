from __future__ import annotations

from pathlib import Path
from typing import List

from gml_fmt.errors.base import GmlFmtError
from gml_fmt.errors.guidance import build_guidance_message

GML_SUFFIX = ".gml"


def collect_targets(path: Path, single_file: bool) -> List[Path]:
    """Resolve the CLI path into the list of files to format."""
    if not path.exists():
        raise GmlFmtError(
            build_guidance_message(
                what="Filepath given does not exist.",
                why=f"Nothing was found at {path.as_posix()}.",
                fix="Pass an existing .gml file with -f, or a project directory.",
                example="gml_fmt scripts/ or gml_fmt -f scripts/player.gml",
            ),
            details={"file": path.as_posix()},
        )
    if path.is_dir():
        if single_file:
            raise GmlFmtError(
                build_guidance_message(
                    what="Passed -f or --file but gave a directory filepath.",
                    why="-f formats exactly one file.",
                    fix="Drop -f to format every .gml file below the directory.",
                    example=f"gml_fmt {path.as_posix()}",
                )
            )
        return sorted(candidate for candidate in path.rglob(f"*{GML_SUFFIX}") if candidate.is_file())
    if not single_file:
        raise GmlFmtError(
            build_guidance_message(
                what="Did not pass -f but gave a filepath. Pass -f for files.",
                why="Without -f the path is treated as a directory to walk.",
                fix="Add -f to format a single file.",
                example=f"gml_fmt -f {path.as_posix()}",
            )
        )
    return [path]


__all__ = ["GML_SUFFIX", "collect_targets"]
