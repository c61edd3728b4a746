"""Turn raw (node, labels, count) records into merged isomorphism-class counts."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional, Tuple

from querycount.config import CountOptions
from querycount.counting.index import CanonicalIndex
from querycount.errors import InvalidVertex, SizeMismatch, UnreachableNode
from querycount.plan.builder import build_skeletons, labeled_instance
from querycount.plan.model import Plan

log = logging.getLogger(__name__)


class RawCountRecord(NamedTuple):
    node_id: int
    labels: Tuple[int, ...]
    count: int
    line: Optional[int] = None


@dataclass
class DroppedRecord:
    position: int
    record: RawCountRecord
    error: Exception


@dataclass
class CountResult:
    index: CanonicalIndex
    dropped: List[DroppedRecord] = field(default_factory=list)
    skipped: List[RawCountRecord] = field(default_factory=list)

    def dropped_total(self, node_id: Optional[int] = None) -> int:
        return sum(
            d.record.count for d in self.dropped
            if node_id is None or d.record.node_id == node_id
        )


def count_labeled_queries(
    plan: Plan,
    records: Iterable[RawCountRecord],
    options: Optional[CountOptions] = None,
    *,
    index: Optional[CanonicalIndex] = None,
) -> CountResult:
    """Merge raw counts of labeled instances per isomorphism class.

    All skeletons are built before the first record is looked at. Records
    that reference an unreachable node or carry the wrong number of labels
    are dropped and listed in the result (or raised when options.strict).
    """
    if options is None:
        options = CountOptions()
    skeletons = build_skeletons(plan)
    result = CountResult(index=index if index is not None else CanonicalIndex())
    n_records = 0

    for pos, rec in enumerate(records):
        n_records += 1
        if options.queries_only and (
            0 <= rec.node_id < len(plan.nodes) and not plan.nodes[rec.node_id].is_query
        ):
            result.skipped.append(rec)
            continue
        try:
            inst = labeled_instance(skeletons, rec.node_id, rec.labels)
        except (UnreachableNode, SizeMismatch, InvalidVertex) as e:
            if options.strict:
                raise
            where = f"line {rec.line}" if rec.line is not None else f"record {pos}"
            log.warning("dropping %s: %s", where, e)
            result.dropped.append(DroppedRecord(position=pos, record=rec, error=e))
            continue
        result.index.add_occurrence(rec.node_id, inst, rec.count)

    log.info(
        "%d records -> %d classes (%d dropped, %d skipped)",
        n_records, len(result.index), len(result.dropped), len(result.skipped),
    )
    return result
