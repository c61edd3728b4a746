from __future__ import annotations

import networkx as nx


def pattern_layout(G: nx.Graph, seed: int = 7):
    """
    Layout for a small pattern graph:
      - planar_layout if the underlying simple undirected graph is planar
      - otherwise spring_layout
    """
    U = nx.Graph(G.to_undirected())
    is_planar, _ = nx.check_planarity(U)
    if is_planar:
        return nx.planar_layout(U)
    return nx.spring_layout(U, seed=seed, iterations=300)
