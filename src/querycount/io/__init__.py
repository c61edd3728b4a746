from .plan_reader import parse_plan, read_plan, format_plan
from .count_reader import parse_count_line, iter_count_records, dedupe_records, read_counts
from .report import report_rows, format_report, write_report
from .nxgraph import skeleton_to_nx, skeleton_from_nx, nx_are_isomorphic

__all__ = [
    "parse_plan",
    "read_plan",
    "format_plan",
    "parse_count_line",
    "iter_count_records",
    "dedupe_records",
    "read_counts",
    "report_rows",
    "format_report",
    "write_report",
    "skeleton_to_nx",
    "skeleton_from_nx",
    "nx_are_isomorphic",
]
