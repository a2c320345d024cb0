"""DDL to diagram schema parser.

Converts SQL CREATE TABLE statements into a normalized schema model:
- Tables with ordered columns and primary/foreign key flags
- Relationships from explicit foreign keys, or the `<table>_id` convention
- An erDiagram text rendering and a node/edge graph for display
"""
from __future__ import annotations

from .models import (
    Column,
    ForeignKeyConstraint,
    Table,
    Relationship,
    ParseResult,
)

from .parser import parse_ddl, parse_tables

from .clauses import (
    PrimaryKeyClause,
    ForeignKeyClause,
    ColumnClause,
    UnrecognizedClause,
    classify_clause,
    parse_table_body,
)

from .relationships import (
    build_relationships,
    infer_convention_relationships,
    resolve_relationships,
)

from .diagram import encode_diagram
from .flow import FlowGraph, build_flow_graph

__all__ = [
    # Model types
    "Column",
    "ForeignKeyConstraint",
    "Table",
    "Relationship",
    "ParseResult",
    # Entry points
    "parse_ddl",
    "parse_tables",
    # Clause parsing
    "PrimaryKeyClause",
    "ForeignKeyClause",
    "ColumnClause",
    "UnrecognizedClause",
    "classify_clause",
    "parse_table_body",
    # Relationships
    "build_relationships",
    "infer_convention_relationships",
    "resolve_relationships",
    # Rendering
    "encode_diagram",
    "FlowGraph",
    "build_flow_graph",
]
