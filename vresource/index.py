"""Flattened path-to-reference index.

The index maps canonical repository paths to references:

    {
        "/": null,
        "/css": "res/css",
        "/css/style.css": "res/css/style.css",
        "/css/reset.css": ["theme/reset.css", "res/css/reset.css"],
        "/latest": "@/css/style.css"
    }

A reference is one of:

    - None: a virtual directory without backing content
    - a filesystem path, absolute or relative to the base directory
    - a list of filesystem paths (override stack, the first one wins)
    - "@" followed by a repository path: a link

Keys are kept in ascending order at all times. Glob lookups exploit this:
all paths starting with the static prefix of a glob are adjacent, so a
lookup only visits that run of keys instead of the whole table.
"""

import logging
import os
import re
from bisect import bisect_left, insort
from typing import Dict, Iterator, List, Mapping, Optional, Pattern, Tuple, Union

from vresource import globs
from vresource.paths import make_absolute

logger = logging.getLogger(__name__)

Reference = Union[None, str, List[str]]

LINK_PREFIX = "@"

STOP_ON_FIRST = 1


def is_filesystem_reference(reference: Optional[str]) -> bool:
    return reference is not None and not reference.startswith(LINK_PREFIX)


def is_link_reference(reference: Optional[str]) -> bool:
    return reference is not None and reference.startswith(LINK_PREFIX)


class ReferenceIndex:
    """Sorted mapping from repository paths to references.

    Attributes:
        base_directory: Directory relative filesystem references are
            resolved against
    """

    def __init__(self, base_directory: str, references: Optional[Mapping[str, Reference]] = None):
        """Initialize the index.

        Args:
            base_directory: Directory for relative filesystem references
            references: Initial mapping, e.g. loaded from a JSON file
        """
        self.base_directory = make_absolute(base_directory, os.getcwd())
        self._references: Dict[str, Reference] = {}
        self._keys: List[str] = []

        if references:
            self.load(references)

    def load(self, references: Mapping[str, Reference]) -> None:
        """Replace the contents of the index.

        Raises:
            ValueError: If a value is not None, a string or a list of strings
        """
        for path, reference in references.items():
            _check_reference(path, reference)

        self._references = {
            path: list(reference) if isinstance(reference, list) else reference
            for path, reference in references.items()
        }
        self._keys = sorted(self._references)

    def to_dict(self) -> Dict[str, Reference]:
        """Export the index in key order."""
        return {
            path: list(self._references[path])
            if isinstance(self._references[path], list)
            else self._references[path]
            for path in self._keys
        }

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, path: object) -> bool:
        return path in self._references

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._keys))

    def keys(self) -> List[str]:
        return list(self._keys)

    def raw(self, path: str) -> Reference:
        """Return the stored reference of a path without resolving it."""
        return self._references[path]

    def insert(self, path: str, reference: Reference) -> None:
        """Insert or overwrite the reference of a path."""
        _check_reference(path, reference)
        if path not in self._references:
            insort(self._keys, path)
        self._references[path] = reference

    def delete(self, path: str) -> None:
        del self._references[path]
        del self._keys[bisect_left(self._keys, path)]

    def clear(self) -> None:
        self._references = {}
        self._keys = []

    def get_references_for_path(self, path: str) -> Dict[str, Optional[str]]:
        """Look up a single path.

        Returns:
            ``{path: reference}`` with filesystem references made absolute,
            or an empty dict if the path is unknown or its file is gone
        """
        if path not in self._references:
            return {}

        found, reference = self._resolve(self._references[path])
        if not found:
            return {}

        return {path: reference}

    def get_references_for_glob(self, glob: str, flags: int = 0) -> Dict[str, Optional[str]]:
        """Look up all paths matching a glob.

        Args:
            glob: Canonical glob
            flags: STOP_ON_FIRST to return after the first match

        Returns:
            Matching paths and their resolved references in key order
        """
        if not globs.is_dynamic(glob):
            return self.get_references_for_path(globs.unescape(glob))

        return self.get_references_for_regex(
            globs.get_static_prefix(glob),
            globs.compile_glob(glob),
            flags,
        )

    def get_references_for_regex(
        self,
        static_prefix: str,
        regex: Pattern,
        flags: int = 0,
    ) -> Dict[str, Optional[str]]:
        """Look up all paths that start with a prefix and match a regex.

        Args:
            static_prefix: Prefix every matching path starts with
            regex: Compiled pattern the full path must match
            flags: STOP_ON_FIRST to return after the first match
        """
        result: Dict[str, Optional[str]] = {}

        for path, reference in self._scan(static_prefix, regex):
            found, resolved = self._resolve(reference)

            # Ignore missing files. Entries pointing to deleted files
            # behave as if they had never been added.
            if not found:
                continue

            result[path] = resolved

            if flags & STOP_ON_FIRST:
                break

        return result

    def get_references_in_directory(self, path: str, flags: int = 0) -> Dict[str, Optional[str]]:
        """Look up the direct children of a path."""
        base_path = path.rstrip("/")

        return self.get_references_for_regex(
            base_path + "/",
            re.compile("^" + re.escape(base_path) + "/[^/]+$"),
            flags,
        )

    def remove_references(self, glob: str) -> int:
        """Remove all paths matching a glob together with their descendants.

        Returns:
            Number of removed entries
        """
        expanded = glob + "{,/**/*}"
        matched = [
            path
            for path, _ in self._scan(
                globs.get_static_prefix(expanded),
                globs.compile_glob(expanded),
            )
        ]

        for path in matched:
            self.delete(path)

        logger.debug(f"Removed {len(matched)} entries matching {glob}")
        return len(matched)

    def _scan(self, static_prefix: str, regex: Pattern) -> Iterator[Tuple[str, Reference]]:
        """Yield the entries in the run of keys starting with a prefix.

        Paths starting with the same prefix are adjacent in sorted order.
        The run starts at the insertion point of the prefix and ends at
        the first key that does not start with it.
        """
        keys = self._keys

        for i in range(bisect_left(keys, static_prefix), len(keys)):
            path = keys[i]

            if not path.startswith(static_prefix):
                break

            if regex.match(path):
                yield path, self._references[path]

    def _resolve(self, reference: Reference) -> Tuple[bool, Optional[str]]:
        # Only the first entry of an override stack is relevant
        if isinstance(reference, list):
            if not reference:
                return False, None
            reference = reference[0]

        if is_filesystem_reference(reference):
            reference = make_absolute(reference, self.base_directory)

            if not os.path.exists(reference):
                return False, None

        return True, reference


def _check_reference(path: str, reference: Reference) -> None:
    if reference is None or isinstance(reference, str):
        return
    if isinstance(reference, list) and all(isinstance(item, str) for item in reference):
        return
    raise ValueError(
        f'The reference for "{path}" must be null, a string or a list of strings. '
        f"Got: {type(reference).__name__}"
    )
