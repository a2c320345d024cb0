"""Node and edge payload for the diagram rendering surface.

Tables become grid-placed nodes; relationships become directed edges from
the referencing table's right handle to the referenced table's left handle.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .config import LayoutConfig
from .models import ParseResult

logger = logging.getLogger(__name__)

NODE_TYPE = "table"
SOURCE_HANDLE = "right"
TARGET_HANDLE = "left"


@dataclass(frozen=True)
class FlowNode:
    id: str
    x: int
    y: int
    data: dict[str, Any] = field(default_factory=dict, compare=False)
    type: str = NODE_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "data": self.data,
            "position": {"x": self.x, "y": self.y},
        }


@dataclass(frozen=True)
class FlowEdge:
    id: str
    source: str
    target: str
    label: str
    source_handle: str = SOURCE_HANDLE
    target_handle: str = TARGET_HANDLE
    animated: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "sourceHandle": self.source_handle,
            "targetHandle": self.target_handle,
            "label": self.label,
            "animated": self.animated,
        }


@dataclass(frozen=True)
class FlowGraph:
    nodes: tuple[FlowNode, ...] = ()
    edges: tuple[FlowEdge, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


def grid_position(index: int, layout: LayoutConfig) -> tuple[int, int]:
    """Position of the index-th node in a row-major grid."""
    x = (index % layout.columns) * layout.x_spacing + layout.x_offset
    y = (index // layout.columns) * layout.y_spacing + layout.y_offset
    return x, y


def build_flow_graph(result: ParseResult, layout: LayoutConfig | None = None) -> FlowGraph:
    """Build the node/edge graph for a parse result.

    Args:
        result: Parse result to lay out
        layout: Grid settings (defaults to a 3-column grid)

    Returns:
        FlowGraph with one node per table and one edge per relationship
        whose endpoints are both nodes
    """
    layout = layout or LayoutConfig()

    nodes = []
    for index, table in enumerate(result.tables):
        x, y = grid_position(index, layout)
        nodes.append(FlowNode(
            id=table.name,
            x=x,
            y=y,
            data={"label": table.name, "columns": [col.to_dict() for col in table.columns]},
        ))

    node_ids = {node.id for node in nodes}
    edges = []
    for index, rel in enumerate(result.relationships):
        if rel.source_table not in node_ids or rel.target_table not in node_ids:
            logger.warning(f"Skipping edge {rel.id}: node not found")
            continue
        edges.append(FlowEdge(
            id=f"edge-{index}",
            source=rel.source_table,
            target=rel.target_table,
            label=f"{rel.source_column} -> {rel.target_column}",
        ))

    return FlowGraph(nodes=tuple(nodes), edges=tuple(edges))
