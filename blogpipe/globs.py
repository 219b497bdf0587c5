"""Glob helpers shared by the tasks and the watcher.

pathlib handles `*`, `?` and `**`; brace alternatives (`*.{jpg,png}`) are
expanded here first.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

_MAGIC = set("*?[{")


def expand_braces(pattern: str) -> list[str]:
    """Expand `{a,b}` groups into separate patterns (cartesian product)."""
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    end = -1
    splits: list[int] = []
    for i in range(start, len(pattern)):
        ch = pattern[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                end = i
                break
        elif ch == "," and depth == 1:
            splits.append(i)

    if end == -1:
        # Unbalanced: treat the brace literally.
        return [pattern]

    prefix = pattern[:start]
    suffix = pattern[end + 1 :]
    bounds = [start, *splits, end]
    alternatives = [pattern[bounds[k] + 1 : bounds[k + 1]] for k in range(len(bounds) - 1)]

    out: list[str] = []
    for alt in alternatives:
        for expanded in expand_braces(prefix + alt + suffix):
            if expanded not in out:
                out.append(expanded)
    return out


def glob_files(root: Path, patterns: Iterable[str]) -> list[Path]:
    """Return files under `root` matching any pattern, sorted by relative path."""
    found: dict[str, Path] = {}
    for pattern in patterns:
        for expanded in expand_braces(pattern):
            for p in root.glob(expanded):
                if p.is_file():
                    found.setdefault(p.relative_to(root).as_posix(), p)
    return [found[k] for k in sorted(found)]


def glob_base(pattern: str) -> str:
    """Leading directory of a pattern that contains no glob magic."""
    parts = pattern.split("/")
    base: list[str] = []
    for part in parts[:-1]:
        if _MAGIC & set(part):
            break
        base.append(part)
    return "/".join(base)
