"""Accumulate counts per isomorphism class of labeled instances."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from querycount.graph.isomorphism import are_isomorphic
from querycount.graph.skeleton import Skeleton

log = logging.getLogger(__name__)

Digest = Tuple[int, int, int, int]


def structural_digest(sk: Skeleton) -> Digest:
    """Cheap isomorphism invariant: (n, m, endpoint-label xor, edge-label xor).

    Equal digests are necessary for isomorphism, not sufficient.
    """
    labels = sk.labels
    vertex_xor = 1
    edge_xor = 1
    for u, v, lab in sk.edges:
        edge_xor ^= lab
        vertex_xor ^= labels[u] ^ labels[v]
    return (sk.num_vertices, sk.num_edges, vertex_xor, edge_xor)


@dataclass
class IsoClass:
    node_id: int
    representative: Skeleton
    count: int


class CanonicalIndex:
    """Map from isomorphism class to accumulated count.

    Classes are bucketed by (node_id, structural_digest); within a bucket the
    exact oracle decides membership. Instances from different plan nodes are
    never merged. Not safe for concurrent add_occurrence calls.
    """

    def __init__(self) -> None:
        self._buckets: Dict[Tuple[int, Digest], List[IsoClass]] = {}
        self._num_classes = 0

    def add_occurrence(self, node_id: int, instance: Skeleton, count: int) -> None:
        """Fold one labeled instance into the index.

        The index takes ownership of *instance* when it starts a new class.
        """
        key = (node_id, structural_digest(instance))
        bucket = self._buckets.setdefault(key, [])
        for cls in bucket:
            if are_isomorphic(cls.representative, instance):
                cls.count += count
                log.debug("node %d: merged %r into existing class", node_id, instance)
                return
        bucket.append(IsoClass(node_id=node_id, representative=instance, count=count))
        self._num_classes += 1
        log.debug("node %d: new class %r", node_id, instance)

    def classes(self) -> Iterator[IsoClass]:
        for bucket in self._buckets.values():
            yield from bucket

    def items(self) -> Iterator[Tuple[Skeleton, int]]:
        for cls in self.classes():
            yield cls.representative, cls.count

    def node_ids(self) -> List[int]:
        return sorted({node_id for node_id, _ in self._buckets})

    def total(self, node_id: Optional[int] = None) -> int:
        return sum(
            cls.count for cls in self.classes()
            if node_id is None or cls.node_id == node_id
        )

    def __len__(self) -> int:
        return self._num_classes

    def __iter__(self) -> Iterator[IsoClass]:
        return self.classes()
