"""Directed, vertex- and edge-labeled multigraph on vertices 0..n-1."""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from querycount.errors import InvalidVertex, SizeMismatch

UNLABELED = -1
DEFAULT_EDGE_LABEL = 0

# (src, dst, label)
Edge = Tuple[int, int, int]


class Skeleton:
    """Growable directed multigraph with explicit vertex identity.

    Vertices are the contiguous range 0..n-1. Parallel edges and self loops
    are kept as given; nothing is ever removed.
    """

    __slots__ = ("_labels", "_edges", "_out_deg", "_in_deg")

    def __init__(self, num_vertices: int = 0) -> None:
        self._labels: List[int] = [UNLABELED] * num_vertices
        self._edges: List[Edge] = []
        self._out_deg: List[int] = [0] * num_vertices
        self._in_deg: List[int] = [0] * num_vertices

    @classmethod
    def from_edges(
        cls,
        num_vertices: int,
        edges: Iterable[Sequence[int]],
        labels: Sequence[int] | None = None,
    ) -> "Skeleton":
        """Build a skeleton from (src, dst) or (src, dst, label) tuples."""
        sk = cls(num_vertices)
        for e in edges:
            if len(e) == 3:
                sk.add_edge(e[0], e[1], e[2])
            else:
                sk.add_edge(e[0], e[1])
        if labels is not None:
            sk.set_labels(labels)
        return sk

    # -- construction -------------------------------------------------------

    def add_vertex(self) -> int:
        self._labels.append(UNLABELED)
        self._out_deg.append(0)
        self._in_deg.append(0)
        return len(self._labels) - 1

    def add_edge(self, src: int, dst: int, label: int = DEFAULT_EDGE_LABEL) -> None:
        n = len(self._labels)
        for v in (src, dst):
            if not 0 <= v < n:
                raise InvalidVertex(v, n)
        self._edges.append((src, dst, label))
        self._out_deg[src] += 1
        self._in_deg[dst] += 1

    def clone(self) -> "Skeleton":
        other = Skeleton.__new__(Skeleton)
        other._labels = list(self._labels)
        other._edges = list(self._edges)
        other._out_deg = list(self._out_deg)
        other._in_deg = list(self._in_deg)
        return other

    def set_vertex_label(self, v: int, label: int) -> None:
        if not 0 <= v < len(self._labels):
            raise InvalidVertex(v, len(self._labels))
        self._labels[v] = label

    def set_labels(self, labels: Sequence[int]) -> None:
        """Overwrite every vertex label with one full assignment."""
        if len(labels) != len(self._labels):
            raise SizeMismatch(None, len(self._labels), len(labels))
        self._labels[:] = labels

    # -- accessors ----------------------------------------------------------

    @property
    def num_vertices(self) -> int:
        return len(self._labels)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    @property
    def labels(self) -> Tuple[int, ...]:
        return tuple(self._labels)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    def vertex_label(self, v: int) -> int:
        if not 0 <= v < len(self._labels):
            raise InvalidVertex(v, len(self._labels))
        return self._labels[v]

    def out_degree(self, v: int) -> int:
        return self._out_deg[v]

    def in_degree(self, v: int) -> int:
        return self._in_deg[v]

    def degree(self, v: int) -> int:
        return self._out_deg[v] + self._in_deg[v]

    def to_dict(self) -> Dict[str, object]:
        """Serializable form used by reports."""
        return {
            "num_vertices": self.num_vertices,
            "num_edges": self.num_edges,
            "labels": list(self._labels),
            "edges": [[u, v] if lab == DEFAULT_EDGE_LABEL else [u, v, lab]
                      for u, v, lab in self._edges],
        }

    def __repr__(self) -> str:
        return (
            f"Skeleton(n={self.num_vertices}, labels={list(self._labels)}, "
            f"edges={[(u, v) for u, v, _ in self._edges]})"
        )
