"""Render the contents of a CanonicalIndex for output."""
from __future__ import annotations

import json
from typing import IO, Dict, List

from querycount.counting.index import CanonicalIndex, IsoClass


def _sort_key(cls: IsoClass):
    rep = cls.representative
    return (cls.node_id, rep.labels, rep.edges)


def sorted_classes(index: CanonicalIndex) -> List[IsoClass]:
    return sorted(index.classes(), key=_sort_key)


def report_rows(index: CanonicalIndex) -> List[Dict[str, object]]:
    """One serializable dict per isomorphism class, in a stable order."""
    rows = []
    for cls in sorted_classes(index):
        row: Dict[str, object] = {"node_id": cls.node_id, "count": cls.count}
        row.update(cls.representative.to_dict())
        rows.append(row)
    return rows


def format_class(cls: IsoClass) -> str:
    """
    Count:<count>
    <num_vertices> <num_edges>
    <label> <label> ... (each label followed by a space)
    <src> <dst>            (one line per edge)
    """
    rep = cls.representative
    lines = [
        f"Count:{cls.count}",
        f"{rep.num_vertices} {rep.num_edges}",
        "".join(f"{lab} " for lab in rep.labels),
    ]
    lines.extend(f"{u} {v}" for u, v, _ in rep.edges)
    return "\n".join(lines)


def format_report(index: CanonicalIndex) -> str:
    blocks = [format_class(cls) for cls in sorted_classes(index)]
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


def write_report(index: CanonicalIndex, fh: IO[str], fmt: str = "text") -> None:
    if fmt == "text":
        fh.write(format_report(index))
    elif fmt == "json":
        json.dump(report_rows(index), fh, indent=2)
        fh.write("\n")
    else:
        raise ValueError(f"unknown report format {fmt!r} (expected 'text' or 'json')")
