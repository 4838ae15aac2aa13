"""
Demo aspect catalogue.

Reads an optional YAML/JSON file describing advice declaration sequences to
simulate, falling back to the built-in demo aspects.

File format (YAML or JSON), either a mapping:
    mixed: [after, around, around, before, before, after]
    short: [before, after, before]
or a plain list of type lists.

Environment variable:
    PRECEDENCE_DEMO_FILE: path to the catalogue (optional).
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from precedence_sim.core.advice.models import AdviceType

_log = logging.getLogger("precedence.demo")

DemoCatalogue = Dict[str, List[AdviceType]]

BUILTIN_DEMO_ASPECTS: DemoCatalogue = {
    "after_first": [
        AdviceType.AFTER,
        AdviceType.AROUND,
        AdviceType.AROUND,
        AdviceType.BEFORE,
        AdviceType.BEFORE,
        AdviceType.AFTER,
    ],
    "around_first": [
        AdviceType.AROUND,
        AdviceType.AFTER,
        AdviceType.AROUND,
        AdviceType.BEFORE,
        AdviceType.BEFORE,
        AdviceType.AFTER,
    ],
    "before_after_before": [
        AdviceType.BEFORE,
        AdviceType.AFTER,
        AdviceType.BEFORE,
    ],
}


def builtin_demo_aspects() -> DemoCatalogue:
    return {name: list(types) for name, types in BUILTIN_DEMO_ASPECTS.items()}


def parse_demo_aspects(data: Any) -> DemoCatalogue:
    """Convert raw file content into a catalogue; raises ValueError if malformed."""
    if isinstance(data, list):
        data = {f"aspect_{i}": item for i, item in enumerate(data, start=1)}
    if not isinstance(data, dict) or not data:
        raise ValueError("demo catalogue must be a non-empty mapping or list")

    out: DemoCatalogue = {}
    for name, types in data.items():
        if not isinstance(types, list) or not types:
            raise ValueError(f"demo aspect {name!r} must be a non-empty list of advice types")
        out[str(name)] = [AdviceType.parse(t) for t in types]
    return out


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = (os.getenv("PRECEDENCE_DEMO_FILE") or "").strip()
    return Path(env_path) if env_path else None


def load_demo_aspects(path: Optional[Path] = None) -> DemoCatalogue:
    """
    Load the demo catalogue from a YAML or JSON file.

    Returns the built-in aspects if no file is configured, or if the file is
    missing, unreadable or malformed.
    """
    resolved = _resolve_path(path)
    if resolved is None:
        return builtin_demo_aspects()
    if not resolved.exists():
        _log.warning("Demo catalogue %s not found, using built-in aspects", resolved)
        return builtin_demo_aspects()

    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read demo catalogue %s: %s", resolved, exc)
        return builtin_demo_aspects()

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse demo catalogue %s as JSON or YAML: %s", resolved, exc)
            return builtin_demo_aspects()

    try:
        catalogue = parse_demo_aspects(data)
    except ValueError as exc:
        _log.warning("Invalid demo catalogue %s: %s", resolved, exc)
        return builtin_demo_aspects()

    _log.info("Loaded %d demo aspects from %s", len(catalogue), resolved)
    return catalogue
