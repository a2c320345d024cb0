"""CREATE TABLE statement extraction.

Locates each CREATE TABLE header and isolates the table body at its matching
closing parenthesis. All parentheses are paired in one pass up front, so
type arguments such as VARCHAR(255) or CHECK (price > 0) never end the body
early and unterminated headers never trigger a rescan.
"""
from __future__ import annotations

import logging
import re

from .scanner import QUALIFIED_IDENTIFIER, match_parens, unquote_qualified

logger = logging.getLogger(__name__)

_CREATE_TABLE = re.compile(
    r"\bCREATE\s+(?:OR\s+REPLACE\s+)?(?:(?:GLOBAL|LOCAL)\s+)?(?:TEMP(?:ORARY)?\s+)?"
    r"TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?"
    rf"(?P<name>{QUALIFIED_IDENTIFIER})\s*\(",
    re.IGNORECASE,
)


def extract_create_tables(text: str) -> list[tuple[str, str]]:
    """Extract (table_name, body) pairs from preprocessed SQL.

    Statements other than CREATE TABLE are ignored. An unterminated
    statement is skipped and scanning resumes after its header.

    Args:
        text: Preprocessed SQL text

    Returns:
        List of (table_name, body_text) in order of appearance
    """
    statements = []
    closing = match_parens(text)
    pos = 0

    while True:
        match = _CREATE_TABLE.search(text, pos)
        if not match:
            break

        table_name = unquote_qualified(match.group("name"))
        open_idx = match.end() - 1
        close_idx = closing.get(open_idx, -1)

        if close_idx == -1:
            logger.warning(f"Skipping unterminated CREATE TABLE {table_name!r} at offset {match.start()}")
            pos = match.end()
            continue

        if not table_name:
            logger.warning(f"Skipping CREATE TABLE with empty name at offset {match.start()}")
        else:
            statements.append((table_name, text[open_idx + 1:close_idx]))
        pos = close_idx + 1

    return statements
