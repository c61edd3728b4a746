"""Read and write the whitespace-separated plan description.

Layout (tokens; line breaks are not significant):

    h0 h1 h2                      three header values, ignored
    root_node_id
    num_nodes
    edge_start num_edges num_vertices is_query      (num_nodes times)
    num_edges
    src dst num_ops                                  (num_edges times,
    src_key dst_key is_forward                        each followed by
                                                      num_ops operations)
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Union

from querycount.errors import MalformedPlan
from querycount.plan.model import Operation, Plan, PlanEdge, PlanNode


class _Tokens:
    def __init__(self, text: str) -> None:
        self._it: Iterator[str] = iter(text.split())
        self.pos = 0

    def next_uint(self, what: str) -> int:
        try:
            tok = next(self._it)
        except StopIteration:
            raise MalformedPlan(f"unexpected end of plan while reading {what}") from None
        self.pos += 1
        try:
            val = int(tok)
        except ValueError:
            raise MalformedPlan(f"token {self.pos} ({what}): {tok!r} is not an integer") from None
        if val < 0:
            raise MalformedPlan(f"token {self.pos} ({what}): {val} is negative")
        return val

    def exhausted(self) -> bool:
        for _ in self._it:
            return False
        return True


def parse_plan(text: str) -> Plan:
    """Parse a plan description into a Plan."""
    toks = _Tokens(text)
    header = (
        toks.next_uint("header"),
        toks.next_uint("header"),
        toks.next_uint("header"),
    )
    root = toks.next_uint("root node id")

    nodes: List[PlanNode] = []
    for i in range(toks.next_uint("node count")):
        edge_start = toks.next_uint(f"node {i} edge start")
        edge_count = toks.next_uint(f"node {i} edge count")
        vertex_count = toks.next_uint(f"node {i} vertex count")
        is_query = toks.next_uint(f"node {i} query flag") == 1
        nodes.append(PlanNode(i, edge_start, edge_count, vertex_count, is_query))

    edges: List[PlanEdge] = []
    for i in range(toks.next_uint("edge count")):
        src = toks.next_uint(f"edge {i} source")
        dst = toks.next_uint(f"edge {i} destination")
        for ref in (src, dst):
            if ref >= len(nodes):
                raise MalformedPlan(
                    f"edge {i} references node {ref} (plan has {len(nodes)} nodes)",
                    edge_id=i,
                )
        ops = []
        for j in range(toks.next_uint(f"edge {i} operation count")):
            src_key = toks.next_uint(f"edge {i} op {j} src_key")
            dst_key = toks.next_uint(f"edge {i} op {j} dst_key")
            forward = toks.next_uint(f"edge {i} op {j} direction") == 1
            ops.append(Operation(src_key, dst_key, forward))
        edges.append(PlanEdge(i, src, dst, tuple(ops)))

    if not toks.exhausted():
        raise MalformedPlan(f"trailing data after {toks.pos} plan tokens")

    return Plan(root_node_id=root, nodes=tuple(nodes), edges=tuple(edges), header=header)


def read_plan(path: Union[str, Path]) -> Plan:
    return parse_plan(Path(path).read_text())


def format_plan(plan: Plan) -> str:
    """Inverse of parse_plan, one record per line."""
    lines = [str(h) for h in plan.header]
    lines.append(str(plan.root_node_id))
    lines.append(str(len(plan.nodes)))
    for n in plan.nodes:
        lines.append(f"{n.edge_start} {n.edge_count} {n.vertex_count} {int(n.is_query)}")
    lines.append(str(len(plan.edges)))
    for e in plan.edges:
        lines.append(f"{e.source_node} {e.dest_node} {len(e.operations)}")
        for op in e.operations:
            lines.append(f"{op.src_key} {op.dst_key} {int(op.forward)}")
    return "\n".join(lines) + "\n"
