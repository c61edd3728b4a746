"""In-memory decomposition plan.

Nodes and edges are held in flat lists. A node's outgoing edges are the
contiguous slice edges[edge_start : edge_start + edge_count]; edges refer to
their endpoints by node index only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class PlanNode:
    idx: int
    edge_start: int
    edge_count: int
    vertex_count: int
    is_query: bool


@dataclass(frozen=True)
class Operation:
    """Add one directed edge between two local vertices of the child skeleton.

    forward=True orients it src_key -> dst_key, otherwise dst_key -> src_key.
    """

    src_key: int
    dst_key: int
    forward: bool

    def directed(self) -> Tuple[int, int]:
        if self.forward:
            return (self.src_key, self.dst_key)
        return (self.dst_key, self.src_key)


@dataclass(frozen=True)
class PlanEdge:
    idx: int
    source_node: int
    dest_node: int
    operations: Tuple[Operation, ...] = ()

    def directed_pairs(self) -> List[Tuple[int, int]]:
        return [op.directed() for op in self.operations]

    def extensions(self, parent_vertex_count: int) -> List[Operation]:
        """Operations that attach the vertex appended by this step."""
        return [op for op in self.operations if op.dst_key == parent_vertex_count]

    def intersections(self, parent_vertex_count: int) -> List[Operation]:
        """Operations that close an edge between already existing vertices."""
        return [op for op in self.operations if op.dst_key != parent_vertex_count]


@dataclass(frozen=True)
class Plan:
    root_node_id: int
    nodes: Tuple[PlanNode, ...]
    edges: Tuple[PlanEdge, ...]
    header: Tuple[int, int, int] = field(default=(0, 0, 0))

    def vertex_counts(self) -> List[int]:
        return [node.vertex_count for node in self.nodes]

    def out_edges(self, node_id: int) -> Iterator[PlanEdge]:
        node = self.nodes[node_id]
        for i in range(node.edge_start, node.edge_start + node.edge_count):
            yield self.edges[i]

    def query_node_ids(self) -> List[int]:
        return [node.idx for node in self.nodes if node.is_query]
