"""Text normalization applied before statement extraction."""
from __future__ import annotations

import re

_LINE_COMMENT = re.compile(r"--[^\n]*")


def preprocess_sql(text: str | None) -> str:
    """Strip `--` line comments and blank lines from raw DDL text.

    Args:
        text: Raw SQL text (may be None or empty)

    Returns:
        Normalized text with one non-blank line per input line
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _LINE_COMMENT.sub("", text)

    lines = [line.rstrip() for line in text.split("\n")]
    return "\n".join(line for line in lines if line.strip()).strip()
