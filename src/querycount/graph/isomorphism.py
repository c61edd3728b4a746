"""Exact label-preserving isomorphism test for directed multigraph skeletons.

This decides *full* isomorphism of two skeletons with the same number of
vertices and edges. Callers only ever compare equal-sized graphs, so the
equal-size check is a hard precondition rather than a heuristic: without it
the search below would be deciding subgraph containment instead.
"""
from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Tuple

from querycount.graph.skeleton import Skeleton

PairTable = Dict[Tuple[int, int], Tuple[int, ...]]


def _pair_table(sk: Skeleton) -> PairTable:
    """Map each ordered vertex pair to the sorted labels of its parallel edges."""
    grouped: Dict[Tuple[int, int], List[int]] = {}
    for u, v, lab in sk.edges:
        grouped.setdefault((u, v), []).append(lab)
    return {k: tuple(sorted(labs)) for k, labs in grouped.items()}


def _vertex_signature(sk: Skeleton, v: int) -> Tuple[int, int, int]:
    return (sk.vertex_label(v), sk.in_degree(v), sk.out_degree(v))


def find_isomorphism(a: Skeleton, b: Skeleton) -> Optional[Dict[int, int]]:
    """Return a label- and structure-preserving bijection a -> b, or None.

    Vertices of *a* are mapped one at a time in order of descending total
    degree. A candidate target must be unused, carry the same vertex label
    and the same in/out degree, and agree with every already-mapped vertex
    on the multiset of edge labels in both directions (self loops included).
    """
    n = a.num_vertices
    if n != b.num_vertices or a.num_edges != b.num_edges:
        return None

    sig_a = [_vertex_signature(a, v) for v in range(n)]
    sig_b = [_vertex_signature(b, v) for v in range(n)]
    if Counter(sig_a) != Counter(sig_b):
        return None

    pairs_a = _pair_table(a)
    pairs_b = _pair_table(b)

    order = sorted(range(n), key=lambda v: (-a.degree(v), v))
    candidates: Dict[Tuple[int, int, int], List[int]] = {}
    for w in range(n):
        candidates.setdefault(sig_b[w], []).append(w)

    p = [-1] * n
    used = [False] * n

    def consistent(u: int, w: int, depth: int) -> bool:
        if pairs_a.get((u, u), ()) != pairs_b.get((w, w), ()):
            return False
        for i in range(depth):
            x = order[i]
            y = p[x]
            if pairs_a.get((u, x), ()) != pairs_b.get((w, y), ()):
                return False
            if pairs_a.get((x, u), ()) != pairs_b.get((y, w), ()):
                return False
        return True

    def backtrack(depth: int) -> bool:
        if depth == n:
            return True
        u = order[depth]
        for w in candidates[sig_a[u]]:
            if used[w] or not consistent(u, w, depth):
                continue
            p[u] = w
            used[w] = True
            if backtrack(depth + 1):
                return True
            p[u] = -1
            used[w] = False
        return False

    if backtrack(0):
        return {u: p[u] for u in range(n)}
    return None


def are_isomorphic(a: Skeleton, b: Skeleton) -> bool:
    """True iff a and b are isomorphic as labeled directed multigraphs."""
    return find_isomorphism(a, b) is not None
