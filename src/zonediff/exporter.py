"""Utilities to serialise reports into YAML or JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .models import DiffSummary, ZoneCount


def summary_to_dict(summary: DiffSummary, origin: str | None = None) -> dict[str, Any]:
    """Create a dictionary describing a diff summary."""
    data: dict[str, Any] = {}
    if origin:
        data["zone"] = origin
    data["types"] = {rrtype.name: counts for rrtype, counts in summary.by_type()}
    data["total"] = summary.totals()
    return data


def count_to_dict(count: ZoneCount, origin: str | None = None) -> dict[str, Any]:
    """Create a dictionary describing zone counts."""
    data: dict[str, Any] = {}
    if origin:
        data["zone"] = origin
    data["rr"] = {rrtype.name: total for rrtype, total in sorted(count.records.items())}
    data["rr"]["total"] = count.record_total
    data["rrset"] = {rrtype.name: total for rrtype, total in sorted(count.record_sets.items())}
    data["rrset"]["total"] = count.record_set_total
    return data


def summary_to_yaml(summary: DiffSummary, origin: str | None = None) -> str:
    """Return YAML representation of a diff summary."""
    return yaml.safe_dump(summary_to_dict(summary, origin), sort_keys=False)


def summary_to_json(summary: DiffSummary, origin: str | None = None) -> str:
    """Return JSON representation of a diff summary."""
    return json.dumps(summary_to_dict(summary, origin), indent=2)


def count_to_yaml(count: ZoneCount, origin: str | None = None) -> str:
    """Return YAML representation of zone counts."""
    return yaml.safe_dump(count_to_dict(count, origin), sort_keys=False)


def count_to_json(count: ZoneCount, origin: str | None = None) -> str:
    """Return JSON representation of zone counts."""
    return json.dumps(count_to_dict(count, origin), indent=2)


def write_report(path: Path, content: str) -> None:
    """Write content to the given path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
