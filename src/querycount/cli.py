"""Count labeled query patterns from a decomposition plan and a raw count file.

Usage
-----
    querycount PLAN COUNTS
    querycount PLAN COUNTS --format json --output classes.json
    querycount PLAN COUNTS --queries-only --draw figs/pattern
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from querycount.config import QUERYCOUNT_LOG_LEVEL, CountOptions
from querycount.counting.aggregate import count_labeled_queries
from querycount.errors import QueryCountError
from querycount.io.count_reader import read_counts
from querycount.io.plan_reader import read_plan
from querycount.io.report import write_report

log = logging.getLogger("querycount")


def _setup_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.getLevelName(QUERYCOUNT_LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    log.handlers[:] = [ch]
    log.setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="querycount",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("plan", help="plan description file")
    ap.add_argument("counts", help="raw count file: 'node_id label... count' per line")
    ap.add_argument("--format", choices=("text", "json"), default="text")
    ap.add_argument("--output", "-o", default=None, help="write the report here instead of stdout")
    ap.add_argument("--queries-only", action="store_true",
                    help="ignore records for plan nodes not flagged as queries")
    ap.add_argument("--strict", action="store_true",
                    help="fail on the first unresolvable record instead of dropping it")
    ap.add_argument("--no-dedupe", action="store_true",
                    help="sum repeated (node, labels) records instead of keeping the last")
    ap.add_argument("--draw", metavar="PREFIX", default=None,
                    help="save one PNG per isomorphism class as PREFIX_node<id>_<i>.png")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    ap.add_argument("-q", "--quiet", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose, args.quiet)

    options = CountOptions(queries_only=args.queries_only)
    if args.strict:
        options.strict = True

    try:
        plan = read_plan(args.plan)
        log.info("plan: %d nodes, %d edges, root %d",
                 len(plan.nodes), len(plan.edges), plan.root_node_id)
        records = read_counts(args.counts, dedupe=not args.no_dedupe)
        result = count_labeled_queries(plan, records, options)
    except (QueryCountError, OSError) as e:
        log.error("%s", e)
        return 1

    if result.dropped:
        log.warning("%d records dropped (total count %d)",
                    len(result.dropped), result.dropped_total())

    if args.output:
        with open(args.output, "w") as fh:
            write_report(result.index, fh, fmt=args.format)
    else:
        write_report(result.index, sys.stdout, fmt=args.format)

    if args.draw:
        import matplotlib
        matplotlib.use("Agg")
        from querycount.viz.draw import draw_pattern_classes

        paths = draw_pattern_classes(result.index, save_prefix=args.draw)
        log.info("saved %d figures", len(paths))

    return 0


if __name__ == "__main__":
    sys.exit(main())
