from __future__ import annotations

from typing import Optional


def build_guidance_message(
    *,
    what: str,
    why: Optional[str] = None,
    fix: Optional[str] = None,
    example: Optional[str] = None,
) -> str:
    lines = [f"What happened: {what}"]
    if why:
        lines.append(f"Why: {why}")
    if fix:
        lines.append(f"Fix: {fix}")
    if example:
        lines.append(f"Example: {example}")
    return "\n".join(lines)


__all__ = ["build_guidance_message"]
