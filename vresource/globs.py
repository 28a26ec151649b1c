"""Glob patterns for repository paths.

Supported syntax:

    *        any number of characters except "/"
    ?        exactly one character except "/"
    [abc]    one character out of a set ("[!abc]" or "[^abc]" negates)
    {a,b}    one of several alternatives, may be nested or empty
    /**/     zero or more directories
    **       any characters, including "/"
    \\x       the literal character x

Example:

    >>> match("/css/style.css", "/css/*.css")
    True
    >>> get_static_prefix("/css/*.css")
    '/css/'
"""

import re
from functools import lru_cache
from typing import Any, List, Optional, Pattern, Tuple

from vresource.exceptions import InvalidPathError, UnsupportedLanguageError

WILDCARDS = "*?[{"

GLOB_LANGUAGE = "glob"


def assert_glob(glob: Any) -> None:
    """Validate that a selector is a non-empty string starting with "/".

    Raises:
        InvalidPathError: If the selector is invalid
    """
    if not isinstance(glob, str):
        raise InvalidPathError(
            f"The glob must be a string. Got: {type(glob).__name__}"
        )
    if not glob:
        raise InvalidPathError("The glob must not be empty.")
    if not glob.startswith("/"):
        raise InvalidPathError(f'The glob "{glob}" is not absolute.')


def assert_language(language: str) -> None:
    if language != GLOB_LANGUAGE:
        raise UnsupportedLanguageError.for_language(language)


def is_dynamic(glob: str) -> bool:
    """Return whether the glob contains unescaped wildcards."""
    i = 0
    while i < len(glob):
        char = glob[i]
        if char == "\\":
            i += 2
            continue
        if char in WILDCARDS:
            return True
        i += 1
    return False


def get_static_prefix(glob: str) -> str:
    """Return the literal part of a glob up to its first wildcard.

    Escape sequences are resolved, so "/a\\*b/*" yields "/a*b/".
    """
    prefix = []
    i = 0
    while i < len(glob):
        char = glob[i]
        if char == "\\" and i + 1 < len(glob):
            prefix.append(glob[i + 1])
            i += 2
            continue
        if char in WILDCARDS:
            break
        prefix.append(char)
        i += 1
    return "".join(prefix)


def to_regex(glob: str) -> str:
    """Translate a glob into an anchored regular expression."""
    return "^" + _translate(glob) + "$"


@lru_cache(maxsize=256)
def compile_glob(glob: str) -> Pattern:
    return re.compile(to_regex(glob))


def match(path: str, glob: str) -> bool:
    return compile_glob(glob).match(path) is not None


def unescape(glob: str) -> str:
    """Resolve escape sequences in a static glob."""
    return re.sub(r"\\(.)", r"\1", glob)


def _translate(glob: str) -> str:
    regex = []
    i = 0
    length = len(glob)

    while i < length:
        char = glob[i]

        if char == "\\":
            if i + 1 < length:
                regex.append(re.escape(glob[i + 1]))
                i += 2
            else:
                regex.append(re.escape(char))
                i += 1
            continue

        if glob.startswith("/**/", i):
            regex.append("/(?:[^/]+/)*")
            i += 4
            continue

        if glob.startswith("**", i):
            regex.append(".*")
            i += 2
            continue

        if char == "*":
            regex.append("[^/]*")
            i += 1
            continue

        if char == "?":
            regex.append("[^/]")
            i += 1
            continue

        if char == "[":
            parsed = _parse_class(glob, i)
            if parsed is None:
                regex.append(re.escape(char))
                i += 1
            else:
                class_regex, i = parsed
                regex.append(class_regex)
            continue

        if char == "{":
            parsed_group = _parse_alternatives(glob, i)
            if parsed_group is None:
                regex.append(re.escape(char))
                i += 1
            else:
                alternatives, i = parsed_group
                regex.append(
                    "(?:" + "|".join(_translate(alt) for alt in alternatives) + ")"
                )
            continue

        regex.append(re.escape(char))
        i += 1

    return "".join(regex)


def _parse_class(glob: str, start: int) -> Optional[Tuple[str, int]]:
    """Parse a character class starting at ``glob[start] == "["``.

    Returns:
        Tuple of (regex, index after the closing bracket), or None if
        the class is not terminated
    """
    i = start + 1
    negate = False
    if i < len(glob) and glob[i] in "!^":
        negate = True
        i += 1

    body_start = i
    # A "]" directly after the opening bracket is a literal
    if i < len(glob) and glob[i] == "]":
        i += 1

    while i < len(glob) and glob[i] != "]":
        if glob[i] == "\\":
            i += 1
        i += 1

    if i >= len(glob):
        return None

    body = glob[body_start:i].replace("[", "\\[")
    if negate:
        return "[^/" + body + "]", i + 1
    return "[" + body + "]", i + 1


def _parse_alternatives(glob: str, start: int) -> Optional[Tuple[List[str], int]]:
    """Split a "{a,b,...}" group into its top-level alternatives.

    Returns:
        Tuple of (alternatives, index after the closing brace), or None if
        the group is not terminated
    """
    depth = 0
    alternatives = []
    current = []
    i = start + 1

    while i < len(glob):
        char = glob[i]
        if char == "\\" and i + 1 < len(glob):
            current.append(glob[i:i + 2])
            i += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                alternatives.append("".join(current))
                return alternatives, i + 1
            depth -= 1
        elif char == "," and depth == 0:
            alternatives.append("".join(current))
            current = []
            i += 1
            continue
        current.append(char)
        i += 1

    return None
