"""Demo driver: simulate every precedence rule against every demo aspect and print the log."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

# ---- sys.path bootstrap (Windows-friendly) ----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
# ---------------------------------------------

from precedence_sim.core.advice.models import PrecedenceRule, create_advices  # noqa: E402
from precedence_sim.core.config import SimulationConfig  # noqa: E402
from precedence_sim.core.demo_catalogue import load_demo_aspects  # noqa: E402
from precedence_sim.core.graph.builder import build_precedence_graph  # noqa: E402
from precedence_sim.core.simulation.export import write_export  # noqa: E402
from precedence_sim.core.simulation.simulator import simulate  # noqa: E402

SEPARATOR = "-" * 80


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--rule", action="append", help="Precedence rule (repeatable). Default: all rules")
    ap.add_argument("--advices", help="Comma-separated advice types, e.g. before,after,around")
    ap.add_argument("--demo-file", help="YAML/JSON demo catalogue (overrides PRECEDENCE_DEMO_FILE)")
    ap.add_argument("--export-dir", help="Write the unreduced precedence graph as CSV into this directory")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    cfg = SimulationConfig.from_env()
    try:
        rules = [PrecedenceRule.parse(r) for r in args.rule] if args.rule else list(PrecedenceRule)
        if args.advices:
            types = [t for t in args.advices.split(",") if t.strip()]
            cfg.check_advice_count(len(create_advices(types)))
    except ValueError as e:
        ap.error(str(e))

    if args.advices:
        catalogue = {"cli": types}
    else:
        demo_file = args.demo_file or cfg.demo_file
        catalogue = load_demo_aspects(Path(demo_file) if demo_file else None)

    export_dir = Path(args.export_dir) if args.export_dir else None
    if export_dir is None and cfg.export_graph:
        export_dir = Path(".")

    for rule in rules:
        for types in catalogue.values():
            if export_dir is not None:
                graph = build_precedence_graph(create_advices(types), rule)
                out = write_export(graph, export_dir, rule, int(time.time() * 1000))
                print(f"Exporting graph to file {out}")
            result = simulate(types, rule, config=cfg)
            for line in result.log_lines():
                print(line)
            print(SEPARATOR)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
