"""End-to-end tests: plan + raw counts -> isomorphism-class totals."""
import json
import logging
from collections import Counter, defaultdict

import pytest

from querycount.cli import main
from querycount.config import CountOptions
from querycount.counting.aggregate import RawCountRecord, count_labeled_queries
from querycount.errors import SizeMismatch, UnreachableNode
from querycount.io.plan_reader import parse_plan

ROOT_ONLY = """\
0 0 0
0
1
0 0 2 1
0
"""

# node 1: path 0 -> 1 -> 2; node 2: cycle 0 -> 1 -> 2 -> 0;
# node 3 is never reached
BRANCHING = """\
0 0 0
0
4
0 2 2 0
0 0 3 1
0 0 3 1
0 0 3 1
2
0 1 1
1 2 1
0 2 2
1 2 1
0 2 0
"""


def _records(*rows):
    return [RawCountRecord(n, tuple(labels), c) for n, labels, c in rows]


def _summary(result):
    return Counter(
        (cls.node_id, cls.representative.labels, cls.representative.edges, cls.count)
        for cls in result.index.classes()
    )


# --- scenarios ---

def test_identical_records_merge():
    plan = parse_plan(ROOT_ONLY)
    result = count_labeled_queries(plan, _records((0, [1, 2], 5), (0, [1, 2], 3)))
    assert [c for _, c in result.index.items()] == [8]


def test_swapped_labels_stay_apart():
    plan = parse_plan(ROOT_ONLY)
    result = count_labeled_queries(plan, _records((0, [1, 2], 5), (0, [2, 1], 3)))
    assert sorted(c for _, c in result.index.items()) == [3, 5]


def test_child_merges_by_isomorphism():
    # 1 -> 2 -> 3 and 3 -> 2 -> 1 run in opposite directions
    plan = parse_plan(BRANCHING)
    result = count_labeled_queries(
        plan,
        _records((1, [1, 1, 1], 2), (1, [1, 1, 1], 3), (1, [1, 2, 3], 1), (1, [3, 2, 1], 1)),
    )
    assert sorted(c for _, c in result.index.items()) == [1, 1, 5]


def test_cycle_rotations_merge():
    # node 2 is the directed cycle 0 -> 1 -> 2 -> 0; rotations are isomorphic
    plan = parse_plan(BRANCHING)
    result = count_labeled_queries(
        plan,
        _records((2, [1, 2, 3], 1), (2, [2, 3, 1], 2), (2, [3, 1, 2], 4), (2, [3, 2, 1], 8)),
    )
    assert sorted(c for _, c in result.index.items()) == [7, 8]


# --- drops ---

def test_unreachable_and_size_mismatch_dropped():
    plan = parse_plan(BRANCHING)
    recs = _records((3, [1, 2, 3], 4), (1, [1, 2], 6), (9, [1], 1), (1, [1, 2, 3], 2))
    result = count_labeled_queries(plan, recs)
    assert result.index.total() == 2
    errors = [type(d.error) for d in result.dropped]
    assert errors == [UnreachableNode, SizeMismatch, UnreachableNode]
    assert [d.position for d in result.dropped] == [0, 1, 2]
    assert result.dropped_total() == 11


def test_strict_raises():
    plan = parse_plan(BRANCHING)
    with pytest.raises(UnreachableNode):
        count_labeled_queries(plan, _records((3, [1, 2, 3], 4)), CountOptions(strict=True))


def test_queries_only_skips_non_query_nodes():
    plan = parse_plan(BRANCHING)
    recs = _records((0, [1, 2], 5), (1, [1, 2, 3], 2))
    result = count_labeled_queries(plan, recs, CountOptions(queries_only=True))
    assert result.index.node_ids() == [1]
    assert [r.node_id for r in result.skipped] == [0]


# --- properties ---

def test_count_conservation():
    plan = parse_plan(BRANCHING)
    recs = _records(
        (0, [1, 2], 5), (0, [2, 1], 1), (0, [1, 1], 2),
        (1, [1, 2, 1], 3), (1, [2, 1, 2], 4), (1, [1, 2, 1], 1),
        (2, [5, 5, 6], 2), (2, [6, 5, 5], 9), (2, [1], 3), (3, [1, 1, 1], 2),
    )
    result = count_labeled_queries(plan, recs)
    expected = defaultdict(int)
    for r in recs:
        expected[r.node_id] += r.count
    for node_id, total in expected.items():
        assert result.index.total(node_id) + result.dropped_total(node_id) == total


def test_count_conservation_with_skipped_nodes():
    plan = parse_plan(BRANCHING)
    recs = _records(
        (0, [1, 2], 5), (0, [2, 1], 1),
        (1, [1, 2, 1], 3), (1, [1, 2], 4),
        (2, [5, 5, 6], 2), (3, [1, 1, 1], 2),
    )
    result = count_labeled_queries(plan, recs, CountOptions(queries_only=True))
    expected = defaultdict(int)
    for r in recs:
        expected[r.node_id] += r.count
    skipped = defaultdict(int)
    for r in result.skipped:
        skipped[r.node_id] += r.count
    assert skipped == {0: 6}
    for node_id, total in expected.items():
        got = result.index.total(node_id) + result.dropped_total(node_id) + skipped[node_id]
        assert got == total


def test_deterministic():
    plan = parse_plan(BRANCHING)
    recs = _records(
        (1, [1, 2, 1], 3), (1, [2, 1, 2], 4), (2, [5, 5, 6], 2),
        (2, [6, 5, 5], 9), (2, [5, 6, 5], 1), (0, [7, 8], 2),
    )
    a = count_labeled_queries(plan, recs)
    b = count_labeled_queries(plan, list(recs))
    assert _summary(a) == _summary(b)


def test_skeleton_sizes_match_plan():
    plan = parse_plan(BRANCHING)
    recs = _records((1, [1, 2, 3], 1), (2, [1, 2, 3], 1))
    for cls in count_labeled_queries(plan, recs).index.classes():
        assert cls.representative.num_vertices == plan.nodes[cls.node_id].vertex_count


# --- cli ---

def test_cli_text(tmp_path, capsys):
    plan = tmp_path / "plan.txt"
    counts = tmp_path / "counts.txt"
    plan.write_text(ROOT_ONLY)
    counts.write_text("0 1 2 5\n0 2 1 3\n")
    assert main([str(plan), str(counts)]) == 0
    out = capsys.readouterr().out
    assert "Count:5\n2 1\n1 2 \n0 1\n" in out
    assert "Count:3\n2 1\n2 1 \n0 1\n" in out


def test_cli_json_output_file(tmp_path):
    plan = tmp_path / "plan.txt"
    counts = tmp_path / "counts.txt"
    report = tmp_path / "out.json"
    plan.write_text(ROOT_ONLY)
    counts.write_text("0 1 2 5\n0 1 2 3\n")
    assert main([str(plan), str(counts), "--no-dedupe", "--format", "json", "-o", str(report)]) == 0
    rows = json.loads(report.read_text())
    assert [r["count"] for r in rows] == [8]


def test_cli_malformed_plan(tmp_path, capsys):
    plan = tmp_path / "plan.txt"
    counts = tmp_path / "counts.txt"
    plan.write_text("0 0 0\n0\n1\n0 0 2\n")
    counts.write_text("")
    assert main([str(plan), str(counts)]) == 1
    assert "unexpected end of plan" in capsys.readouterr().err


def _write_inputs(tmp_path, plan_text, counts_text):
    plan = tmp_path / "plan.txt"
    counts = tmp_path / "counts.txt"
    plan.write_text(plan_text)
    counts.write_text(counts_text)
    return str(plan), str(counts)


def test_cli_strict_fails_on_unreachable_record(tmp_path, capsys):
    plan, counts = _write_inputs(tmp_path, BRANCHING, "1 1 2 3 4\n3 1 1 1 2\n")
    assert main([plan, counts]) == 0
    assert main([plan, counts, "--strict"]) == 1
    assert "node 3 was not reached" in capsys.readouterr().err


def test_cli_missing_input_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope"), str(tmp_path / "nope2")]) == 1
    assert "nope" in capsys.readouterr().err


def test_cli_queries_only(tmp_path):
    plan, counts = _write_inputs(tmp_path, BRANCHING, "0 1 2 5\n1 1 2 3 4\n")
    report = tmp_path / "out.json"
    assert main([plan, counts, "--format", "json", "-o", str(report)]) == 0
    assert [r["node_id"] for r in json.loads(report.read_text())] == [0, 1]
    assert main([plan, counts, "--queries-only", "--format", "json", "-o", str(report)]) == 0
    assert [r["node_id"] for r in json.loads(report.read_text())] == [1]


def test_cli_draw(tmp_path):
    plan, counts = _write_inputs(tmp_path, ROOT_ONLY, "0 1 2 5\n")
    prefix = tmp_path / "p"
    assert main([plan, counts, "--draw", str(prefix)]) == 0
    assert (tmp_path / "p_node0_0.png").exists()


def test_cli_log_level_from_environment(tmp_path, monkeypatch):
    plan, counts = _write_inputs(tmp_path, ROOT_ONLY, "0 1 2 5\n")
    monkeypatch.setattr("querycount.cli.QUERYCOUNT_LOG_LEVEL", "info")
    assert main([plan, counts]) == 0
    assert logging.getLogger("querycount").level == logging.INFO
    monkeypatch.setattr("querycount.cli.QUERYCOUNT_LOG_LEVEL", "nonsense")
    assert main([plan, counts]) == 0
    assert logging.getLogger("querycount").level == logging.WARNING
    assert main([plan, counts, "-vv"]) == 0
    assert logging.getLogger("querycount").level == logging.DEBUG
