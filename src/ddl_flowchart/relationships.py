"""Relationship resolution between parsed tables.

Explicit foreign keys are resolved first. Only when none of them resolve to
a known table is the `<table>_id` naming convention used to infer edges.
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, Mapping

from .models import ONE_TO_MANY, Relationship, Table

logger = logging.getLogger(__name__)

_CONVENTION_COLUMN = re.compile(r"^(?P<stem>.+)_id$", re.IGNORECASE)
CONVENTION_TARGET_COLUMN = "id"


def relationship_id(source_table: str, source_column: str, target_table: str, target_column: str) -> str:
    return f"{source_table}_{source_column}_to_{target_table}_{target_column}"


def _claim_id(rel: Relationship, used_ids: set[str]) -> Relationship:
    """Suffix the id when a different edge already produced the same string.

    Underscores are legal inside identifiers, so `a_b.c` and `a.b_c` both
    render as `a_b_c_to_...`. The first edge keeps the plain id.
    """
    rel_id = rel.id
    suffix = 2
    while rel_id in used_ids:
        rel_id = f"{rel.id}_{suffix}"
        suffix += 1
    used_ids.add(rel_id)
    return rel if rel_id == rel.id else replace(rel, id=rel_id)


def _make_relationship(source_table: str, source_column: str, target_table: str, target_column: str) -> Relationship:
    return Relationship(
        id=relationship_id(source_table, source_column, target_table, target_column),
        source_table=source_table,
        source_column=source_column,
        target_table=target_table,
        target_column=target_column,
        kind=ONE_TO_MANY,
    )


def build_relationships(tables: Mapping[str, Table]) -> list[Relationship]:
    """Resolve declared foreign keys against the known tables.

    Args:
        tables: Parsed tables keyed by name, in first-seen order

    Returns:
        Deduplicated relationships in declaration order
    """
    relationships = []
    seen = set()
    used_ids = set()

    for table in tables.values():
        for fk in table.foreign_keys:
            if fk.ref_table not in tables:
                logger.warning(
                    f"Referenced table {fk.ref_table} not found for FK {table.name}.{fk.column}"
                )
                continue

            rel = _make_relationship(table.name, fk.column, fk.ref_table, fk.ref_column)
            if rel.key in seen:
                continue
            seen.add(rel.key)
            relationships.append(_claim_id(rel, used_ids))

    return relationships


def _stem_candidates(stem: str) -> list[str]:
    """Table names a `<stem>_id` column may point at: customer -> customers."""
    candidates = [stem, f"{stem}s", f"{stem}es"]
    if stem.endswith("y"):
        candidates.append(f"{stem[:-1]}ies")
    return candidates


def _convention_target(stem: str, tables: Mapping[str, Table]) -> str | None:
    by_lower = {name.lower(): name for name in tables}
    for candidate in _stem_candidates(stem):
        if candidate in tables:
            return candidate
        if candidate.lower() in by_lower:
            return by_lower[candidate.lower()]
    return None


def infer_convention_relationships(tables: Mapping[str, Table]) -> list[Relationship]:
    """Infer relationships from columns named `<table>_id`.

    `<table>` may be the singular of the table name (customer_id ->
    customers). Columns that already declare a foreign key and self
    references are skipped; the target column is always `id`.
    """
    relationships = []
    seen = set()
    used_ids = set()

    for table in tables.values():
        for column in table.columns:
            if column.is_foreign_key:
                continue
            match = _CONVENTION_COLUMN.match(column.name)
            if not match:
                continue
            target = _convention_target(match.group("stem"), tables)
            if target is None or target == table.name:
                continue

            rel = _make_relationship(table.name, column.name, target, CONVENTION_TARGET_COLUMN)
            if rel.key in seen:
                continue
            seen.add(rel.key)
            logger.info(f"Inferred FK by naming convention: {table.name}.{column.name} -> {target}.id")
            relationships.append(_claim_id(rel, used_ids))

    return relationships


def resolve_relationships(tables: Mapping[str, Table]) -> list[Relationship]:
    """Explicit foreign keys, falling back to the naming convention.

    The fallback runs only when no explicit relationship resolved and more
    than one table was parsed.
    """
    relationships = build_relationships(tables)
    if relationships or len(tables) <= 1:
        return relationships

    logger.debug(f"No explicit relationships among {len(tables)} tables, trying naming convention")
    return infer_convention_relationships(tables)


def table_names(tables: Iterable[Table]) -> set[str]:
    return {table.name for table in tables}
