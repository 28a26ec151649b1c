"""Path utilities for repository paths.

Repository paths are always absolute, slash-separated and canonical:

    >>> canonicalize("/css/../js/./app.js/")
    '/js/app.js'

These helpers work on plain strings. They never touch the disk, except
where noted for filesystem paths.
"""

import os
from typing import Any, List

from vresource.exceptions import InvalidPathError


def assert_path(path: Any) -> None:
    """Validate that ``path`` is a non-empty string starting with "/".

    Raises:
        InvalidPathError: If the path is invalid
    """
    if not isinstance(path, str):
        raise InvalidPathError(
            f"The path must be a string. Got: {type(path).__name__}"
        )
    if not path:
        raise InvalidPathError("The path must not be empty.")
    if not path.startswith("/"):
        raise InvalidPathError(f'The path "{path}" is not absolute.')


def canonicalize(path: str) -> str:
    """Normalize a path.

    Backslashes become slashes, "." segments and duplicate slashes are
    dropped, ".." removes the previous segment and trailing slashes are
    stripped. ".." never climbs above the root of an absolute path.

    Args:
        path: Path to normalize

    Returns:
        Canonical path
    """
    if path == "":
        return ""

    path = path.replace("\\", "/")
    absolute = path.startswith("/")

    parts: List[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not absolute:
                parts.append(segment)
            continue
        parts.append(segment)

    joined = "/".join(parts)
    if absolute:
        return "/" + joined
    return joined or "."


def is_absolute(path: str) -> bool:
    return path.startswith("/") or os.path.isabs(path)


def is_base_path(base_path: str, path: str) -> bool:
    """Check whether ``base_path`` is ``path`` or one of its ancestors.

    "/app" is a base path of "/app" and "/app/css", but not of
    "/application". "/" is a base path of every absolute path.
    """
    return (path + "/").startswith(base_path.rstrip("/") + "/")


def get_directory(path: str) -> str:
    """Return the parent directory of a canonical path.

    The parent of "/" is "/".
    """
    path = canonicalize(path)
    if path == "/" or "/" not in path:
        return "/" if path.startswith("/") else ""
    parent = path.rsplit("/", 1)[0]
    return parent or "/"


def get_filename(path: str) -> str:
    if path in ("", "/"):
        return ""
    return path.rstrip("/").rsplit("/", 1)[-1]


def join(base_path: str, name: str) -> str:
    """Join a child name onto a repository path.

    >>> join("/", "css")
    '/css'
    >>> join("/css", "style.css")
    '/css/style.css'
    """
    if base_path == "/":
        return "/" + name.lstrip("/")
    return base_path.rstrip("/") + "/" + name.lstrip("/")


def make_absolute(path: str, base_path: str) -> str:
    """Turn a filesystem path into an absolute one.

    Args:
        path: Absolute or relative filesystem path
        base_path: Directory relative paths are resolved against

    Returns:
        Canonical absolute path
    """
    path = path.replace("\\", "/")
    if path.startswith("/"):
        return canonicalize(path)
    if os.path.isabs(path):
        # Windows drive paths
        return os.path.normpath(path)
    return canonicalize(base_path.replace("\\", "/").rstrip("/") + "/" + path)


def make_relative(path: str, base_path: str) -> str:
    """Express ``path`` relative to ``base_path`` if it lies below it.

    Paths outside of ``base_path`` are returned in absolute form.
    """
    path = canonicalize(path)
    base_path = canonicalize(base_path)

    if path == base_path:
        return "."
    if is_base_path(base_path, path):
        if base_path == "/":
            return path[1:]
        return path[len(base_path) + 1:]
    return path
