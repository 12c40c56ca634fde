"""Lenient JSON — parse the bulk dataset blob with comments and trailing commas.

Invariants:
    - Pure functions: no IO
    - `//` line comments, `/* */` block comments and trailing commas are removed
      only outside string literals
    - Object keys are lower-cased so field matching is case-insensitive
    - Any syntax problem raises ValueError (json.JSONDecodeError included)
"""

import json
import re
from typing import Any

_WHITESPACE = " \t\r\n"
_STRING = re.compile(r'"[^"\\]*(?:\\.[^"\\]*)*"?', re.DOTALL)
_SPECIAL = re.compile(r'["/,]')


def _skip_comment(text: str, i: int) -> int:
    """Index just past the comment starting at i, or i if none starts there."""
    if text.startswith("//", i):
        end = text.find("\n", i)
        return len(text) if end == -1 else end
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        if end == -1:
            raise ValueError(f"Unterminated block comment at offset {i}")
        return end + 2
    return i


def _next_significant(text: str, i: int) -> int:
    """Index of the next char that is neither whitespace nor inside a comment."""
    n = len(text)
    while i < n:
        if text[i] in _WHITESPACE:
            i += 1
            continue
        after = _skip_comment(text, i)
        if after == i:
            return i
        i = after
    return n


def strip_json_extensions(text: str) -> str:
    """Remove comments and trailing commas so the stdlib parser accepts text.

    Plain runs between quotes, slashes and commas are copied as slices.
    """
    out: list[str] = []
    i, n = 0, len(text)
    while i < n:
        match = _SPECIAL.search(text, i)
        if match is None:
            out.append(text[i:])
            break
        j = match.start()
        out.append(text[i:j])
        ch = text[j]

        if ch == '"':
            end = _STRING.match(text, j).end()
            out.append(text[j:end])
            i = end
            continue

        if ch == "/":
            after = _skip_comment(text, j)
            if after != j:
                out.append(" ")
                i = after
                continue
        else:
            k = _next_significant(text, j + 1)
            if k < n and text[k] in "}]":
                i = j + 1
                continue

        out.append(ch)
        i = j + 1
    return "".join(out)


def fold_keys(value: Any) -> Any:
    """Recursively lower-case every object key."""
    if isinstance(value, dict):
        return {str(k).lower(): fold_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [fold_keys(v) for v in value]
    return value


def loads_lenient(text: str) -> Any:
    """Parse JSON that may carry comments, trailing commas and mixed-case keys.

    Strict JSON is parsed directly; the stripping pass runs only when the
    stdlib parser rejects the text.
    """
    text = text.lstrip("\ufeff")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = json.loads(strip_json_extensions(text))
    return fold_keys(data)
