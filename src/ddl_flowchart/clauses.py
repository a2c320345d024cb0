"""Table body clause parsing.

A table body is split into top-level clauses, and each clause is classified
into one of four variants. Constraint patterns are tried before the
`name type` column fallback:

    PrimaryKeyClause    PRIMARY KEY (a, b)
    ForeignKeyClause    FOREIGN KEY (a) REFERENCES t (x)
    ColumnClause        name TYPE [constraint tail]
    UnrecognizedClause  anything else (dropped)
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Union

from .models import Column, ForeignKeyConstraint, Table
from .scanner import (
    IDENTIFIER,
    QUALIFIED_IDENTIFIER,
    split_identifier_list,
    split_outside_parens,
    unquote_identifier,
    unquote_qualified,
)

logger = logging.getLogger(__name__)

DEFAULT_REF_COLUMN = "id"

_CONSTRAINT_NAME = rf"(?:CONSTRAINT\s+{IDENTIFIER}\s+)?"

_PRIMARY_KEY = re.compile(
    rf"^{_CONSTRAINT_NAME}PRIMARY\s+KEY(?:\s+(?:CLUSTERED|NONCLUSTERED))?\s*\((?P<columns>[^)]*)\)",
    re.IGNORECASE,
)

_FOREIGN_KEY = re.compile(
    rf"^{_CONSTRAINT_NAME}FOREIGN\s+KEY\s*\((?P<columns>[^)]*)\)\s*"
    rf"REFERENCES\s+(?P<ref_table>{QUALIFIED_IDENTIFIER})(?:\s*\((?P<ref_columns>[^)]*)\))?",
    re.IGNORECASE,
)

# Table-level constraints and index definitions that carry no column
_OTHER_CONSTRAINT = re.compile(
    rf"^(?:{_CONSTRAINT_NAME}(?:UNIQUE|CHECK|EXCLUDE)\b|CONSTRAINT\b|"
    r"(?:FULLTEXT|SPATIAL)\s+(?:INDEX|KEY)\b|"
    # `KEY idx (col)` but not a column named key with a sized type: `key VARCHAR(10)`
    rf"(?:UNIQUE\s+)?(?:INDEX|KEY)(?:\s+{IDENTIFIER})?\s*\((?!\s*[\d'])|"
    r"PRIMARY\s+KEY\b|FOREIGN\s+KEY\b)",
    re.IGNORECASE,
)

_COLUMN = re.compile(
    rf"^(?P<name>{IDENTIFIER})\s+(?P<type>[^\s(,]+)(?:\s*\([^)]*\))?(?P<tail>.*)$",
    re.IGNORECASE | re.DOTALL,
)

_INLINE_PRIMARY_KEY = re.compile(r"\bPRIMARY\s+KEY\b", re.IGNORECASE)

_INLINE_REFERENCES = re.compile(
    rf"\bREFERENCES\s+(?P<ref_table>{QUALIFIED_IDENTIFIER})(?:\s*\((?P<ref_columns>[^)]*)\))?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PrimaryKeyClause:
    columns: tuple[str, ...]


@dataclass(frozen=True)
class ForeignKeyClause:
    constraints: tuple[ForeignKeyConstraint, ...]


@dataclass(frozen=True)
class ColumnClause:
    name: str
    declared_type: str
    primary_key: bool = False
    reference: ForeignKeyConstraint | None = None


@dataclass(frozen=True)
class UnrecognizedClause:
    text: str
    reason: str


Clause = Union[PrimaryKeyClause, ForeignKeyClause, ColumnClause, UnrecognizedClause]


def classify_clause(text: str) -> Clause:
    """Classify a single top-level clause of a table body."""
    clause = " ".join(text.split())
    if not clause:
        return UnrecognizedClause(text=text, reason="empty clause")

    pk_match = _PRIMARY_KEY.match(clause)
    if pk_match:
        columns = tuple(split_identifier_list(pk_match.group("columns")))
        if not columns:
            return UnrecognizedClause(text=clause, reason="PRIMARY KEY without columns")
        return PrimaryKeyClause(columns=columns)

    fk_match = _FOREIGN_KEY.match(clause)
    if fk_match:
        return _foreign_key_clause(clause, fk_match)

    if _OTHER_CONSTRAINT.match(clause):
        return UnrecognizedClause(text=clause, reason="unsupported table constraint")

    col_match = _COLUMN.match(clause)
    if not col_match:
        return UnrecognizedClause(text=clause, reason="expected `name type`")

    name = unquote_identifier(col_match.group("name"))
    declared_type = unquote_identifier(col_match.group("type"))
    if not name or not declared_type:
        return UnrecognizedClause(text=clause, reason="empty column name or type")

    tail = col_match.group("tail")
    reference = None
    ref_match = _INLINE_REFERENCES.search(tail)
    if ref_match:
        ref_columns = split_identifier_list(ref_match.group("ref_columns") or "")
        reference = ForeignKeyConstraint(
            column=name,
            ref_table=unquote_qualified(ref_match.group("ref_table")),
            ref_column=ref_columns[0] if ref_columns else DEFAULT_REF_COLUMN,
        )

    return ColumnClause(
        name=name,
        declared_type=declared_type,
        primary_key=bool(_INLINE_PRIMARY_KEY.search(tail)),
        reference=reference,
    )


def _foreign_key_clause(clause: str, match: re.Match) -> Clause:
    columns = split_identifier_list(match.group("columns"))
    if not columns:
        return UnrecognizedClause(text=clause, reason="FOREIGN KEY without columns")

    ref_table = unquote_qualified(match.group("ref_table"))
    ref_columns = split_identifier_list(match.group("ref_columns") or "")

    # Composite keys pair up positionally
    constraints = tuple(
        ForeignKeyConstraint(
            column=column,
            ref_table=ref_table,
            ref_column=ref_columns[i] if i < len(ref_columns) else DEFAULT_REF_COLUMN,
        )
        for i, column in enumerate(columns)
    )
    return ForeignKeyClause(constraints=constraints)


def parse_table_body(table_name: str, body: str) -> Table:
    """Parse a table body into a Table.

    Args:
        table_name: Unquoted table name
        body: Text between the table's outer parentheses

    Returns:
        Table with per-column PK/FK flags reconciled against the
        table-level key lists
    """
    columns: list[Column] = []
    primary_keys: list[str] = []
    foreign_keys: list[ForeignKeyConstraint] = []

    for raw in split_outside_parens(body, ","):
        if not raw.strip():
            continue

        clause = classify_clause(raw)

        if isinstance(clause, PrimaryKeyClause):
            for name in clause.columns:
                if name not in primary_keys:
                    primary_keys.append(name)

        elif isinstance(clause, ForeignKeyClause):
            foreign_keys.extend(clause.constraints)

        elif isinstance(clause, ColumnClause):
            if clause.primary_key and clause.name not in primary_keys:
                primary_keys.append(clause.name)
            column = Column(name=clause.name, declared_type=clause.declared_type)
            if clause.reference:
                foreign_keys.append(clause.reference)
                column = replace(
                    column,
                    is_foreign_key=True,
                    ref_table=clause.reference.ref_table,
                    ref_column=clause.reference.ref_column,
                )
            columns.append(column)

        else:
            logger.debug(f"Dropped clause in {table_name}: {clause.reason}: {clause.text!r}")

    return Table(
        name=table_name,
        columns=tuple(_reconcile(col, primary_keys, foreign_keys) for col in columns),
        primary_keys=tuple(primary_keys),
        foreign_keys=tuple(foreign_keys),
    )


def _reconcile(
    column: Column,
    primary_keys: list[str],
    foreign_keys: list[ForeignKeyConstraint],
) -> Column:
    """Copy table-level key declarations onto a column."""
    if column.name in primary_keys and not column.is_primary_key:
        column = replace(column, is_primary_key=True)

    if not column.is_foreign_key:
        fk = next((fk for fk in foreign_keys if fk.column == column.name), None)
        if fk:
            column = replace(
                column,
                is_foreign_key=True,
                ref_table=fk.ref_table,
                ref_column=fk.ref_column,
            )

    return column
