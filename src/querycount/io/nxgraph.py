from __future__ import annotations

import networkx as nx

from querycount.graph.skeleton import DEFAULT_EDGE_LABEL, UNLABELED, Skeleton


def skeleton_to_nx(sk: Skeleton) -> nx.MultiDiGraph:
    """
    Convert a skeleton into a MultiDiGraph on nodes 0..n-1.

    Vertex labels are stored in the node attribute 'label', edge labels in
    the edge attribute 'label'. Parallel edges are kept.
    """
    G = nx.MultiDiGraph()
    for v, lab in enumerate(sk.labels):
        G.add_node(v, label=lab)
    for u, v, lab in sk.edges:
        G.add_edge(u, v, label=lab)
    return G


def skeleton_from_nx(G: nx.Graph) -> Skeleton:
    """
    Build a skeleton from a networkx graph whose nodes are 0..n-1.

    Undirected graphs contribute each edge once, oriented as stored.
    """
    n = G.number_of_nodes()
    if sorted(G.nodes()) != list(range(n)):
        raise ValueError("graph nodes must be exactly 0..n-1")
    sk = Skeleton(n)
    for v, data in G.nodes(data=True):
        sk.set_vertex_label(v, data.get("label", UNLABELED))
    for u, v, data in G.edges(data=True):
        sk.add_edge(u, v, data.get("label", DEFAULT_EDGE_LABEL))
    return sk


def nx_are_isomorphic(a: Skeleton, b: Skeleton) -> bool:
    """Label-preserving isomorphism decided by networkx's VF2 matcher."""
    return nx.is_isomorphic(
        skeleton_to_nx(a),
        skeleton_to_nx(b),
        node_match=nx.algorithms.isomorphism.categorical_node_match("label", None),
        edge_match=nx.algorithms.isomorphism.categorical_multiedge_match("label", None),
    )
