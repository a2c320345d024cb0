"""Entity-relationship diagram text encoding."""
from __future__ import annotations

import logging
from typing import Sequence

from .models import DIAGRAM_HEADER, Column, Relationship, Table
from .relationships import table_names

logger = logging.getLogger(__name__)

TABLE_INDENT = "    "
COLUMN_INDENT = "        "


def encode_column(column: Column) -> str:
    pk = "PK " if column.is_primary_key else ""
    fk = "FK " if column.is_foreign_key else ""
    return f"{pk}{fk}{column.declared_type} {column.name}"


def encode_diagram(tables: Sequence[Table], relationships: Sequence[Relationship]) -> str:
    """Render tables and relationships as an erDiagram block.

    Relationships whose endpoints are not both in `tables` are skipped.
    """
    lines = [DIAGRAM_HEADER]
    known = table_names(tables)

    for table in tables:
        lines.append(f"{TABLE_INDENT}{table.name} {{\n")
        for column in table.columns:
            lines.append(f"{COLUMN_INDENT}{encode_column(column)}\n")
        lines.append(f"{TABLE_INDENT}}}\n")

    for rel in relationships:
        missing = [name for name in (rel.source_table, rel.target_table) if name not in known]
        if missing:
            logger.warning(f"Skipping relationship {rel.id}: missing table {missing[0]}")
            continue
        lines.append(
            f'{TABLE_INDENT}{rel.source_table} ||--o{{ {rel.target_table} : '
            f'"{rel.source_column} -> {rel.target_column}"\n'
        )

    return "".join(lines)
