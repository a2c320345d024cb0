"""Low-level text scanning helpers shared by the extractor and clause parser.

The paren helpers walk the text once with an explicit stack or depth counter,
so deeply nested input never recurses and cost stays linear in input size.
"""
from __future__ import annotations

import re
from typing import Iterator

QUOTE_CHARS = "`\"'"

# One identifier part: quoted with backticks, double/single quotes or
# brackets, or a bare run of characters that cannot be punctuation.
IDENTIFIER = r"(?:`[^`]+`|\"[^\"]+\"|'[^']+'|\[[^\]]+\]|[^\s`\"'()\[\],;.]+)"
QUALIFIED_IDENTIFIER = rf"{IDENTIFIER}(?:\s*\.\s*{IDENTIFIER})*"

_IDENTIFIER_PART = re.compile(IDENTIFIER)
_PAIRS = {"`": "`", '"': '"', "'": "'", "[": "]"}


def unquote_identifier(token: str) -> str:
    """Strip identifier quoting (backticks, double/single quotes, brackets)."""
    token = token.strip()
    if len(token) >= 2 and _PAIRS.get(token[0]) == token[-1]:
        token = token[1:-1]
    return token.strip(QUOTE_CHARS).strip()


def unquote_qualified(text: str) -> str:
    """Unquote every part of a dotted name: `"public"."users"` -> `public.users`."""
    return ".".join(unquote_identifier(part) for part in _IDENTIFIER_PART.findall(text))


def split_identifier_list(text: str) -> list[str]:
    """Split `a, "b", c` into unquoted names, dropping empties."""
    names = []
    for part in text.split(","):
        name = unquote_identifier(part)
        if name:
            names.append(name)
    return names


def _unquoted_chars(text: str) -> Iterator[tuple[int, str]]:
    """Yield (position, char) for every character outside a quoted literal.

    Quote characters themselves are not yielded. Inside a literal a doubled
    quote (`'it''s'`) or a backslash (`'it\\'s'`) escapes the next character.
    """
    quote = None
    i = 0
    length = len(text)

    while i < length:
        char = text[i]

        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                if i + 1 < length and text[i + 1] == quote:
                    i += 2
                    continue
                quote = None
        elif char in ("'", '"'):
            quote = char
        else:
            yield i, char
        i += 1


def match_parens(text: str) -> dict[int, int]:
    """Map each opening parenthesis to its closing one in a single pass.

    Parentheses inside quoted literals are ignored. Openings that are never
    closed are absent from the result, as are stray closing parentheses.

    Args:
        text: The text to scan

    Returns:
        Dict of opening position -> closing position
    """
    pairs = {}
    stack = []

    for i, char in _unquoted_chars(text):
        if char == "(":
            stack.append(i)
        elif char == ")" and stack:
            pairs[stack.pop()] = i

    return pairs


def split_outside_parens(text: str, delimiter: str = ",") -> list[str]:
    """Split text on delimiter but not inside parentheses or quoted literals."""
    parts = []
    start = 0
    depth = 0

    for i, char in _unquoted_chars(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == delimiter and depth == 0:
            parts.append(text[start:i])
            start = i + 1

    if start < len(text):
        parts.append(text[start:])

    return parts
