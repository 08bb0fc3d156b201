"""Per-type record and record set counts for a single zone."""

from __future__ import annotations

from typing import Iterable

from .models import Record, ZoneCount
from .rrtypes import RRType


def count_records(records: Iterable[Record]) -> ZoneCount:
    """Count records and record sets by type.

    A set ends when a record of the same type shows up under another owner,
    so types interleaved under one owner still count one set each.
    """
    count = ZoneCount()
    last_names: dict[RRType, str] = {}
    for record in records:
        last_name = last_names.get(record.rrtype)
        if last_name is not None and last_name != record.name:
            count.record_sets[record.rrtype] += 1
        last_names[record.rrtype] = record.name
        count.records[record.rrtype] += 1

    for rrtype in last_names:
        count.record_sets[rrtype] += 1
    return count
