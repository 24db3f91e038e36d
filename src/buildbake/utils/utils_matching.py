# src/buildbake/utils/utils_matching.py


import re
from functools import lru_cache


_ESCAPE = "\\"


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Read one (possibly escaped) character inside a [...] class."""
    n = len(pattern)
    if i >= n:
        msg = "unterminated character class"
        raise ValueError(msg)
    ch = pattern[i]
    if ch in "-]":
        msg = f"unexpected {ch!r} in character class"
        raise ValueError(msg)
    if ch == _ESCAPE:
        if i + 1 >= n:
            msg = "trailing backslash in character class"
            raise ValueError(msg)
        return pattern[i + 1], i + 2
    return ch, i + 1


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the class opening at pattern[start] into a regex class.

    Returns the regex piece and the index just past the closing ']'.
    """
    n = len(pattern)
    i = start + 1
    negate = False
    if i < n and pattern[i] in "^!":
        negate = True
        i += 1

    ranges: list[str] = []
    while True:
        if i >= n:
            msg = "unterminated character class"
            raise ValueError(msg)
        if pattern[i] == "]" and ranges:
            i += 1
            break

        lo, i = _class_char(pattern, i)
        hi = lo
        if i < n and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                msg = f"bad character range {lo}-{hi}"
                raise ValueError(msg)

        if lo == hi:
            ranges.append(re.escape(lo))
        else:
            ranges.append(f"{re.escape(lo)}-{re.escape(hi)}")

    return f"[{'^' if negate else ''}{''.join(ranges)}]", i


@lru_cache(maxsize=512)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a shell-style glob into an anchored, case-sensitive regex.

    Supports literals, '?', '*', '[...]' classes (with '^' or '!' negation
    and 'a-z' ranges) and backslash escapes. Like path.Match semantics,
    '*' and '?' never match '/'.

    Unlike fnmatch, malformed patterns are rejected instead of being
    matched literally.

    Raises:
        ValueError: If the pattern is not a well-formed glob.
    """
    i = 0
    n = len(pattern)
    pieces: list[str] = []
    while i < n:
        ch = pattern[i]

        if ch == _ESCAPE:
            if i + 1 >= n:
                msg = "trailing backslash"
                raise ValueError(msg)
            pieces.append(re.escape(pattern[i + 1]))
            i += 2
            continue

        if ch == "[":
            piece, i = _translate_class(pattern, i)
            pieces.append(piece)
            continue

        if ch == "*":
            # a run of stars is the same as one
            while i < n and pattern[i] == "*":
                i += 1
            pieces.append("[^/]*")
            continue

        if ch == "?":
            pieces.append("[^/]")
            i += 1
            continue

        pieces.append(re.escape(ch))
        i += 1

    return re.compile(f"(?s:{''.join(pieces)})\\Z")


def glob_match(name: str, pattern: str) -> bool:
    """Return True if the whole of `name` matches the glob `pattern`.

    Raises:
        ValueError: If the pattern is malformed.
    """
    return compile_glob(pattern).match(name) is not None
