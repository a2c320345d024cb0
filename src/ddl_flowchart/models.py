"""Schema model produced by the DDL parser.

All values are frozen once built; sequences are held as tuples so a
ParseResult can be shared between callers without copying.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ONE_TO_MANY = "one-to-many"
DIAGRAM_HEADER = "erDiagram\n"


@dataclass(frozen=True)
class ForeignKeyConstraint:
    """Foreign key declared inline (REFERENCES) or as a table constraint."""
    column: str
    ref_table: str
    ref_column: str = "id"


@dataclass(frozen=True)
class Column:
    """Column definition from CREATE TABLE."""
    name: str
    declared_type: str
    is_primary_key: bool = False
    is_foreign_key: bool = False
    ref_table: str | None = None
    ref_column: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.declared_type,
            "primaryKey": self.is_primary_key,
            "foreignKey": self.is_foreign_key,
        }
        if self.is_foreign_key:
            data["refTable"] = self.ref_table
            data["refColumn"] = self.ref_column
        return data


@dataclass(frozen=True)
class Table:
    """Parsed CREATE TABLE statement."""
    name: str
    columns: tuple[Column, ...] = ()
    primary_keys: tuple[str, ...] = ()
    foreign_keys: tuple[ForeignKeyConstraint, ...] = ()

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": [col.to_dict() for col in self.columns],
        }


@dataclass(frozen=True)
class Relationship:
    """Directed edge from a referencing column to the referenced column."""
    id: str
    source_table: str
    source_column: str
    target_table: str
    target_column: str
    kind: str = ONE_TO_MANY

    @property
    def key(self) -> tuple[str, str, str, str]:
        return (self.source_table, self.source_column, self.target_table, self.target_column)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sourceTable": self.source_table,
            "sourceColumn": self.source_column,
            "targetTable": self.target_table,
            "targetColumn": self.target_column,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class ParseResult:
    """Output of a single parse call."""
    tables: tuple[Table, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    diagram_text: str = DIAGRAM_HEADER
    table_index: dict[str, Table] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.table_index and self.tables:
            # frozen dataclass, so bypass __setattr__ for the derived lookup
            object.__setattr__(self, "table_index", {t.name: t for t in self.tables})

    @classmethod
    def empty(cls) -> ParseResult:
        return cls()

    def table(self, name: str) -> Table | None:
        return self.table_index.get(name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tables": [table.to_dict() for table in self.tables],
            "relationships": [rel.to_dict() for rel in self.relationships],
            "diagramText": self.diagram_text,
        }
