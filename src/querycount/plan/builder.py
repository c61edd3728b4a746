"""Replay a plan's extension steps into one unlabeled skeleton per node."""
from __future__ import annotations

import logging
from collections import deque
from typing import List, Optional, Sequence

from querycount.errors import InvalidVertex, MalformedPlan, SizeMismatch, UnreachableNode
from querycount.graph.skeleton import Skeleton
from querycount.plan.model import Plan

log = logging.getLogger(__name__)


def seed_skeleton() -> Skeleton:
    """The pattern every plan starts from: two vertices and the edge 0 -> 1."""
    sk = Skeleton()
    sk.add_vertex()
    sk.add_vertex()
    sk.add_edge(0, 1)
    return sk


def _check_indices(plan: Plan) -> None:
    n_nodes = len(plan.nodes)
    n_edges = len(plan.edges)
    if not 0 <= plan.root_node_id < n_nodes:
        raise MalformedPlan(
            f"root node {plan.root_node_id} out of range (plan has {n_nodes} nodes)",
            node_id=plan.root_node_id,
        )
    for node in plan.nodes:
        end = node.edge_start + node.edge_count
        if node.edge_count and not (0 <= node.edge_start and end <= n_edges):
            raise MalformedPlan(
                f"node {node.idx} edge range [{node.edge_start}, {end}) "
                f"out of range (plan has {n_edges} edges)",
                node_id=node.idx,
            )
    for edge in plan.edges:
        for ref in (edge.source_node, edge.dest_node):
            if not 0 <= ref < n_nodes:
                raise MalformedPlan(
                    f"edge {edge.idx} references node {ref} "
                    f"(plan has {n_nodes} nodes)",
                    edge_id=edge.idx,
                )


def build_skeletons(plan: Plan) -> List[Optional[Skeleton]]:
    """Breadth-first reconstruction of every reachable node's skeleton.

    Returns a list indexed by node id; nodes not reachable from the root
    hold None. Each node may be the destination of at most one traversed
    edge, and a child may only keep or grow its parent's vertex count by one.
    """
    _check_indices(plan)

    skeletons: List[Optional[Skeleton]] = [None] * len(plan.nodes)
    root = plan.root_node_id
    if plan.nodes[root].vertex_count != 2:
        raise MalformedPlan(
            f"root node {root} declares {plan.nodes[root].vertex_count} "
            "vertices; the seed pattern has 2",
            node_id=root,
        )
    skeletons[root] = seed_skeleton()

    queue = deque([root])
    while queue:
        cur = queue.popleft()
        cur_node = plan.nodes[cur]
        parent = skeletons[cur]
        assert parent is not None

        for edge in plan.out_edges(cur):
            if edge.source_node != cur:
                raise MalformedPlan(
                    f"edge {edge.idx} is listed under node {cur} but starts at "
                    f"node {edge.source_node}",
                    node_id=cur,
                    edge_id=edge.idx,
                )
            child = edge.dest_node
            child_node = plan.nodes[child]
            if skeletons[child] is not None:
                raise MalformedPlan(
                    f"node {child} reached a second time via edge {edge.idx}",
                    node_id=child,
                    edge_id=edge.idx,
                )
            grow = child_node.vertex_count - cur_node.vertex_count
            if grow < 0 or grow > 1:
                raise MalformedPlan(
                    f"edge {edge.idx} goes from {cur_node.vertex_count} to "
                    f"{child_node.vertex_count} vertices; a step adds at most one",
                    node_id=child,
                    edge_id=edge.idx,
                )

            sk = parent.clone()
            if grow:
                sk.add_vertex()
            for src, dst in edge.directed_pairs():
                try:
                    sk.add_edge(src, dst)
                except InvalidVertex as e:
                    raise InvalidVertex(e.vertex, e.num_vertices, edge_id=edge.idx) from e
            n_ext = len(edge.extensions(cur_node.vertex_count))
            if grow and not n_ext:
                raise MalformedPlan(
                    f"edge {edge.idx} adds vertex {cur_node.vertex_count} but no "
                    "operation attaches it",
                    node_id=child,
                    edge_id=edge.idx,
                )
            log.debug(
                "edge %d: %d -> %d, %d extension and %d intersection ops",
                edge.idx, cur, child, n_ext,
                len(edge.intersections(cur_node.vertex_count)),
            )

            skeletons[child] = sk
            queue.append(child)

    built = sum(1 for sk in skeletons if sk is not None)
    log.info("built %d of %d plan node skeletons", built, len(plan.nodes))
    return skeletons


def labeled_instance(
    skeletons: Sequence[Optional[Skeleton]],
    node_id: int,
    labels: Sequence[int],
) -> Skeleton:
    """Copy a node's skeleton and apply one vertex-label assignment."""
    if not 0 <= node_id < len(skeletons) or skeletons[node_id] is None:
        raise UnreachableNode(node_id)
    base = skeletons[node_id]
    if len(labels) != base.num_vertices:
        raise SizeMismatch(node_id, base.num_vertices, len(labels))
    inst = base.clone()
    inst.set_labels(labels)
    return inst
