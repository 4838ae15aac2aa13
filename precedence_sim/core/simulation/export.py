"""
Adjacency-list CSV export.

One row per vertex, in index order: the vertex label followed by the labels
of its successors, e.g.

    before-1,after-2,before-3
    after-2,before-3
    before-3
"""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import TextIO

from precedence_sim.core.advice.models import PrecedenceRule
from precedence_sim.core.graph.precedence_graph import PrecedenceGraph


def export_adjacency_csv(graph: PrecedenceGraph, stream: TextIO, delimiter: str = ",") -> int:
    """Write ``graph`` to ``stream``; returns the number of rows written."""
    writer = csv.writer(stream, delimiter=delimiter, lineterminator="\n")
    rows = 0
    for advice in sorted(graph.vertices(), key=lambda a: (a.index, a.type.value)):
        writer.writerow([str(advice)] + [str(s) for s in graph.successors(advice)])
        rows += 1
    return rows


def export_adjacency_csv_text(graph: PrecedenceGraph, delimiter: str = ",") -> str:
    buf = io.StringIO()
    export_adjacency_csv(graph, buf, delimiter=delimiter)
    return buf.getvalue()


def export_file_name(rule: PrecedenceRule, now_ms: int) -> str:
    return f"{rule.value}-{now_ms}.csv"


def write_export(graph: PrecedenceGraph, directory: Path, rule: PrecedenceRule, now_ms: int) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    out = directory / export_file_name(rule, now_ms)
    with out.open("w", encoding="utf-8", newline="") as fh:
        export_adjacency_csv(graph, fh)
    return out
