"""
Input expansion for batch runs.

Turns the ``--input`` argument (a file, a directory or a glob pattern) into
a concrete, deduplicated list of files. Extension and pattern matching is
case-insensitive.
"""

from __future__ import annotations

import glob
import logging
import re
from pathlib import Path
from typing import Iterable, List, Set

from .errors import ResolutionError

logger = logging.getLogger(__name__)

BRACE_PATTERN = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """
    Expand ``{a,b}`` alternatives in a glob pattern.

    ``"img/*.{png,jpg}"`` becomes ``["img/*.png", "img/*.jpg"]``. Nested
    and repeated groups are expanded left to right.
    """
    match = BRACE_PATTERN.search(pattern)
    if not match:
        return [pattern]

    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: List[str] = []
    for alternative in match.group(1).split(","):
        expanded.extend(expand_braces(head + alternative + tail))
    return expanded


def case_insensitive_pattern(pattern: str) -> str:
    """Rewrite letters outside ``[...]`` classes as ``[xX]`` pairs."""
    chars: List[str] = []
    in_class = False
    for ch in pattern:
        if ch == "[" and not in_class:
            in_class = True
            chars.append(ch)
        elif ch == "]" and in_class:
            in_class = False
            chars.append(ch)
        elif not in_class and ch.lower() != ch.upper():
            chars.append(f"[{ch.lower()}{ch.upper()}]")
        else:
            chars.append(ch)
    return "".join(chars)


def has_extension(path: Path, extensions: Iterable[str]) -> bool:
    return path.suffix.lower() in {ext.lower() for ext in extensions}


def filter_supported(paths: Iterable[Path], extensions: Iterable[str]) -> List[Path]:
    """Keep only paths with a recognized extension; others are dropped silently."""
    allowed = {ext.lower() for ext in extensions}
    return [Path(p) for p in paths if Path(p).suffix.lower() in allowed]


def _dedupe(paths: Iterable[Path]) -> List[Path]:
    seen: Set[Path] = set()
    out: List[Path] = []
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        out.append(path)
    return out


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def _walk_directory(root: Path, extensions: Iterable[str]) -> List[Path]:
    """List matching files below ``root``, skipping dotfiles and dot-directories."""
    try:
        candidates = sorted(root.rglob("*"), key=lambda p: str(p))
    except OSError as exc:
        raise ResolutionError(f"Cannot list directory {root}: {exc}") from exc
    return [
        p
        for p in candidates
        if not _is_hidden(p, root) and p.is_file() and has_extension(p, extensions)
    ]


def _expand_glob(pattern: str) -> List[Path]:
    matches: List[Path] = []
    for alternative in expand_braces(pattern):
        found = glob.glob(case_insensitive_pattern(alternative), recursive=True)
        matches.extend(Path(p) for p in sorted(found))
    return [p for p in matches if p.is_file()]


def resolve_files(input_path: str, extensions: Iterable[str]) -> List[Path]:
    """
    Resolve an input argument into candidate files.

    Args:
        input_path: Existing file, existing directory or glob pattern
        extensions: Suffixes (with dot) collected from directories

    Returns:
        Deduplicated list of files. A single file is returned as-is without
        extension filtering; a pattern matching nothing yields an empty list.

    Raises:
        ResolutionError: If a directory cannot be listed or the pattern is invalid
    """
    if not input_path:
        raise ResolutionError("No input path given")

    path = Path(input_path).expanduser()
    if path.is_file():
        return [path]
    if path.is_dir():
        files = _walk_directory(path, extensions)
    elif path.exists():
        logger.warning("Input %s is neither a file nor a directory", input_path)
        files = []
    else:
        try:
            files = _expand_glob(str(path))
        except (OSError, re.error) as exc:
            raise ResolutionError(f"Cannot expand pattern {input_path!r}: {exc}") from exc

    resolved = _dedupe(files)
    logger.debug("Resolved %d file(s) from %s", len(resolved), input_path)
    return resolved
