from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple, Union

from querycount.counting.aggregate import RawCountRecord
from querycount.errors import CountFormatError

log = logging.getLogger(__name__)


def parse_count_line(line: str, lineno: int | None = None) -> RawCountRecord:
    """Parse 'node_id label ... label count' into a RawCountRecord."""
    parts = line.split()
    if len(parts) < 2:
        raise CountFormatError(f"expected node id and count, got {line.strip()!r}", line=lineno)
    try:
        vals = [int(p) for p in parts]
    except ValueError:
        raise CountFormatError(f"non-integer token in {line.strip()!r}", line=lineno) from None
    if any(v < 0 for v in vals):
        raise CountFormatError(f"negative value in {line.strip()!r}", line=lineno)
    return RawCountRecord(node_id=vals[0], labels=tuple(vals[1:-1]), count=vals[-1], line=lineno)


def iter_count_records(lines: Iterable[str]) -> Iterator[RawCountRecord]:
    """Yield one record per non-blank, non-comment line."""
    for lineno, line in enumerate(lines, start=1):
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        yield parse_count_line(s, lineno)


def dedupe_records(records: Iterable[RawCountRecord]) -> List[RawCountRecord]:
    """Keep one record per (node_id, labels); the last occurrence wins.

    Identical keys are expected to carry identical counts, so a differing
    count is logged rather than raised.
    """
    latest: Dict[Tuple[int, Tuple[int, ...]], RawCountRecord] = {}
    for rec in records:
        key = (rec.node_id, rec.labels)
        prev = latest.get(key)
        if prev is not None and prev.count != rec.count:
            log.warning(
                "node %d labels %s: count %d (line %s) replaced by %d (line %s)",
                rec.node_id, list(rec.labels), prev.count, prev.line, rec.count, rec.line,
            )
        latest[key] = rec
    return list(latest.values())


def read_counts(path: Union[str, Path], *, dedupe: bool = True) -> List[RawCountRecord]:
    with open(path) as fh:
        records = list(iter_count_records(fh))
    log.info("read %d count records from %s", len(records), path)
    if dedupe:
        records = dedupe_records(records)
    return records
