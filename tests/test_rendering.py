"""Tests for erDiagram encoding and the flow graph payload."""
import typing

import pytest

from ddl_flowchart.config import LayoutConfig
from ddl_flowchart.diagram import encode_column, encode_diagram
from ddl_flowchart.flow import build_flow_graph, grid_position
from ddl_flowchart.models import DIAGRAM_HEADER, Column, ParseResult, Relationship, Table
from ddl_flowchart.parser import parse_ddl


def _rel(source, target):
    return Relationship(
        id=f"{source}_x_to_{target}_id",
        source_table=source,
        source_column="x",
        target_table=target,
        target_column="id",
    )


class TestEncodeDiagram:
    """Test erDiagram text output."""

    def test_empty(self):
        assert encode_diagram([], []) == DIAGRAM_HEADER == "erDiagram\n"

    def test_end_to_end_text(self, shop_ddl):
        result = parse_ddl(shop_ddl)
        assert result.diagram_text == (
            "erDiagram\n"
            "    customers {\n"
            "        PK INT id\n"
            "        VARCHAR name\n"
            "    }\n"
            "    orders {\n"
            "        PK INT id\n"
            "        FK INT customer_id\n"
            "    }\n"
            '    orders ||--o{ customers : "customer_id -> id"\n'
        )

    def test_pk_and_fk_tags_together(self):
        table = Table(
            name="order_items",
            columns=(Column("order_id", "INT", is_primary_key=True, is_foreign_key=True,
                            ref_table="orders", ref_column="id"),),
        )
        assert "        PK FK INT order_id\n" in encode_diagram([table], [])

    def test_encode_column(self):
        assert encode_column(Column("name", "VARCHAR")) == "VARCHAR name"
        assert typing.get_type_hints(encode_column)["column"] is Column

    def test_skips_relationship_to_unknown_table(self):
        """A hand-built model with a dangling edge is rendered without it."""
        tables = [Table(name="a"), Table(name="b")]
        text = encode_diagram(tables, [_rel("a", "b"), _rel("a", "ghost")])
        assert '    a ||--o{ b : "x -> id"\n' in text
        assert "ghost" not in text


class TestFlowGraph:
    """Test node placement and edge building."""

    def test_grid_positions_default(self):
        layout = LayoutConfig()
        assert grid_position(0, layout) == (50, 50)
        assert grid_position(1, layout) == (350, 50)
        assert grid_position(2, layout) == (650, 50)
        assert grid_position(3, layout) == (50, 450)

    def test_grid_positions_custom(self):
        layout = LayoutConfig(columns=2, x_spacing=100, y_spacing=80, x_offset=0, y_offset=10)
        assert [grid_position(i, layout) for i in range(4)] == [(0, 10), (100, 10), (0, 90), (100, 90)]

    def test_nodes_and_edges(self, shop_ddl):
        graph = build_flow_graph(parse_ddl(shop_ddl)).to_dict()

        assert [n["id"] for n in graph["nodes"]] == ["customers", "orders"]
        orders = graph["nodes"][1]
        assert orders["type"] == "table"
        assert orders["position"] == {"x": 350, "y": 50}
        assert orders["data"]["label"] == "orders"
        assert orders["data"]["columns"][1] == {
            "name": "customer_id",
            "type": "INT",
            "primaryKey": False,
            "foreignKey": True,
            "refTable": "customers",
            "refColumn": "id",
        }

        assert graph["edges"] == [{
            "id": "edge-0",
            "source": "orders",
            "target": "customers",
            "sourceHandle": "right",
            "targetHandle": "left",
            "label": "customer_id -> id",
            "animated": True,
        }]

    def test_edges_skip_missing_nodes(self):
        result = ParseResult(
            tables=(Table(name="a"), Table(name="b")),
            relationships=(_rel("a", "ghost"), _rel("a", "b")),
        )
        graph = build_flow_graph(result)
        assert [(e.id, e.target) for e in graph.edges] == [("edge-1", "b")]

    def test_empty_result(self):
        graph = build_flow_graph(ParseResult.empty())
        assert graph.to_dict() == {"nodes": [], "edges": []}

    def test_layout_validation(self):
        with pytest.raises(ValueError):
            LayoutConfig(columns=0)
