"""DDL to schema parsing entry point.

Runs the full pipeline over raw SQL text:

    preprocess -> extract CREATE TABLE -> parse clauses
               -> resolve relationships -> encode diagram

Each call builds its own working structures and returns an immutable
ParseResult, so it is safe to call concurrently.
"""
from __future__ import annotations

import logging

from .clauses import parse_table_body
from .diagram import encode_diagram
from .extractor import extract_create_tables
from .models import ParseResult, Table
from .preprocess import preprocess_sql
from .relationships import resolve_relationships

logger = logging.getLogger(__name__)


def parse_tables(sql: str) -> dict[str, Table]:
    """Parse every CREATE TABLE statement in preprocessed SQL.

    A later definition of the same table replaces the earlier one but
    keeps its original position.
    """
    tables: dict[str, Table] = {}

    for table_name, body in extract_create_tables(sql):
        if table_name in tables:
            logger.warning(f"Table {table_name} defined more than once, keeping the last definition")
        tables[table_name] = parse_table_body(table_name, body)

    return tables


def parse_ddl(text: str | None) -> ParseResult:
    """Parse raw DDL text into tables, relationships and diagram text.

    Never raises: any unexpected failure is logged and an empty result
    is returned.

    Args:
        text: Raw SQL text

    Returns:
        ParseResult (empty for blank or unusable input)
    """
    try:
        sql = preprocess_sql(text)
        if not sql:
            logger.debug("Empty SQL provided")
            return ParseResult.empty()

        tables = parse_tables(sql)
        relationships = resolve_relationships(tables)
        table_list = tuple(tables.values())

        result = ParseResult(
            tables=table_list,
            relationships=tuple(relationships),
            diagram_text=encode_diagram(table_list, relationships),
            table_index=tables,
        )
    except Exception:
        logger.exception("Error parsing SQL")
        return ParseResult.empty()

    logger.debug(
        f"Parsed {len(result.tables)} tables and {len(result.relationships)} relationships"
    )
    return result
