"""
querycount: merge raw counts of labeled query patterns, produced while
evaluating a hierarchical decomposition plan, into per-isomorphism-class totals.
"""

from .errors import (
    QueryCountError,
    MalformedPlan,
    InvalidVertex,
    UnreachableNode,
    SizeMismatch,
    CountFormatError,
)
from .config import CountOptions

# Graphs
from .graph.skeleton import Skeleton, UNLABELED
from .graph.isomorphism import are_isomorphic, find_isomorphism

# Plans
from .plan.model import Plan, PlanNode, PlanEdge, Operation
from .plan.builder import build_skeletons, labeled_instance

# Counting
from .counting.index import CanonicalIndex, IsoClass, structural_digest
from .counting.aggregate import RawCountRecord, CountResult, count_labeled_queries

# IO
from .io.plan_reader import parse_plan, read_plan, format_plan
from .io.count_reader import iter_count_records, dedupe_records, read_counts
from .io.report import report_rows, format_report, write_report
from .io.nxgraph import skeleton_to_nx, skeleton_from_nx

__all__ = [
    # Errors
    "QueryCountError",
    "MalformedPlan",
    "InvalidVertex",
    "UnreachableNode",
    "SizeMismatch",
    "CountFormatError",
    "CountOptions",
    # Graphs
    "Skeleton",
    "UNLABELED",
    "are_isomorphic",
    "find_isomorphism",
    # Plans
    "Plan",
    "PlanNode",
    "PlanEdge",
    "Operation",
    "build_skeletons",
    "labeled_instance",
    # Counting
    "CanonicalIndex",
    "IsoClass",
    "structural_digest",
    "RawCountRecord",
    "CountResult",
    "count_labeled_queries",
    # IO
    "parse_plan",
    "read_plan",
    "format_plan",
    "iter_count_records",
    "dedupe_records",
    "read_counts",
    "report_rows",
    "format_report",
    "write_report",
    "skeleton_to_nx",
    "skeleton_from_nx",
]
