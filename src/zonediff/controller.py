"""High-level orchestration for zonediff."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .config import DiffOptions
from .counting import count_records
from .diffing import Differ
from .models import DiffSummary, ZoneCount
from .parser import ZoneParser, normalize_origin

LOG = logging.getLogger("zonediff")


@dataclass
class DiffReport:
    """Outcome of comparing two zone files."""

    origin: str
    old_path: Path
    new_path: Path
    summary: DiffSummary


@dataclass
class CountReport:
    """Outcome of counting one zone file."""

    origin: str
    path: Path
    count: ZoneCount


def default_origin(path: Path) -> str:
    """Return the origin assumed for a zone file named after its zone."""
    return normalize_origin(path.name)


class ZoneController:
    """Coordinates diff/count operations."""

    def __init__(self, options: DiffOptions | None = None, emit: Callable[[str], None] = print):
        """Store options for subsequent runs."""
        self.options = options or DiffOptions()
        self.emit = emit

    def diff_files(self, old_path: Path, new_path: Path, origin: str | None = None) -> DiffReport:
        """Compare two zone files record set by record set."""
        zone_origin = normalize_origin(origin) if origin else default_origin(old_path)
        LOG.info("Comparing %s with %s (origin %s)", old_path, new_path, zone_origin)
        with old_path.open("rb") as old_file, new_path.open("rb") as new_file:
            differ = Differ(
                ZoneParser(old_file, zone_origin),
                ZoneParser(new_file, zone_origin),
                self.options,
                emit=self.emit,
            )
            summary = differ.compare()
        LOG.info(
            "Comparison complete: %s added, %s deleted, %s changed",
            summary.count("added"),
            summary.count("deleted"),
            summary.count("changed"),
        )
        return DiffReport(origin=zone_origin, old_path=old_path, new_path=new_path, summary=summary)

    def count_file(self, path: Path, origin: str | None = None) -> CountReport:
        """Count records and record sets in a zone file."""
        zone_origin = normalize_origin(origin) if origin else default_origin(path)
        LOG.info("Counting %s (origin %s)", path, zone_origin)
        with path.open("rb") as zone_file:
            count = count_records(ZoneParser(zone_file, zone_origin))
        return CountReport(origin=zone_origin, path=path, count=count)


def configure_logging(level: str) -> None:
    """Configure logging output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
