"""Project-relative path normalization."""

import re
from typing import List

from promptide.core.exceptions import InvalidPathError

_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def normalize_path(raw: str) -> str:
    """
    Turn user or classifier supplied text into a canonical project path.

    Backslashes become '/', repeated separators collapse, leading '/' and
    './' are dropped and '.' segments are removed. Raises InvalidPathError
    for empty paths, '..' segments, drive letters, control characters and
    paths that name a directory (trailing '/').
    """
    if raw is None:
        raise InvalidPathError("", "path is empty")

    path = raw.strip().replace("\\", "/")
    if not path:
        raise InvalidPathError(raw, "path is empty")
    if _DRIVE_RE.match(path):
        raise InvalidPathError(raw, "drive letters are not allowed")
    if any(ord(ch) < 32 for ch in path):
        raise InvalidPathError(raw, "control characters are not allowed")
    if path.endswith("/"):
        raise InvalidPathError(raw, "path names a folder, not a file")

    segments = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            raise InvalidPathError(raw, "'..' segments are not allowed")
        segments.append(segment)

    if not segments:
        raise InvalidPathError(raw, "path is empty")
    return "/".join(segments)


def is_valid_path(raw: str) -> bool:
    try:
        normalize_path(raw)
    except InvalidPathError:
        return False
    return True


def parent_folders(path: str) -> List[str]:
    """'a/b/c.txt' -> ['a', 'a/b']"""
    parts = path.split("/")[:-1]
    return ["/".join(parts[:i]) for i in range(1, len(parts) + 1)]


def join_path(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name
