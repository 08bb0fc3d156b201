"""Core data models used by zonediff."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field, replace
from typing import Iterator

from .rrtypes import RRClass, RRType

RecordData = str

ADDED = "added"
DELETED = "deleted"
CHANGED = "changed"
RECORDS_ADDED = "records_added"
RECORDS_DELETED = "records_deleted"

SOA_SERIAL_INDEX = 2


@dataclass(frozen=True)
class Record:
    """A resource record as read from a master file."""

    name: str
    ttl: int
    rrclass: RRClass
    rrtype: RRType
    data: tuple[RecordData, ...] = ()

    def __str__(self) -> str:
        return " ".join([self.name, str(self.ttl), self.rrclass.name, self.rrtype.name, *self.data])

    def key(self) -> tuple[str, RRType]:
        """Return the (owner, type) pair identifying the record's set."""
        return (self.name, self.rrtype)

    def without_serial(self) -> Record:
        """Return a copy with the SOA serial blanked; other records are returned as-is."""
        if self.rrtype != RRType.SOA or len(self.data) <= SOA_SERIAL_INDEX:
            return self
        data = list(self.data)
        data[SOA_SERIAL_INDEX] = ""
        return replace(self, data=tuple(data))


class RecordSet:
    """A run of adjacent records sharing owner name and type."""

    def __init__(self, first: Record):
        self.records: list[Record] = [first]

    @property
    def name(self) -> str:
        return self.records[0].name

    @property
    def rrtype(self) -> RRType:
        return self.records[0].rrtype

    def key(self) -> tuple[str, RRType]:
        """Return the identity used when matching sets between zones."""
        return self.records[0].key()

    def accepts(self, record: Record) -> bool:
        """Return True when ``record`` belongs to this set."""
        return record.key() == self.key()

    def append(self, record: Record) -> None:
        """Add a record, rejecting one with a different owner or type."""
        if not self.accepts(record):
            raise ValueError(f"Record {record.name} {record.rrtype.name} does not belong to set {self!r}")
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __repr__(self) -> str:
        return f"RecordSet({self.name} {self.rrtype.name}, {len(self.records)} records)"


@dataclass
class DiffSummary:
    """Per-type counters collected while comparing two zones."""

    counts: dict[RRType, Counter] = field(default_factory=lambda: defaultdict(Counter))

    def increment(self, rrtype: RRType, operation: str, amount: int = 1) -> None:
        """Count an operation for a type and for the aggregate bucket."""
        self.counts[rrtype][operation] += amount
        self.counts[RRType.NONE][operation] += amount

    def count(self, operation: str, rrtype: RRType = RRType.NONE) -> int:
        """Return the counter for ``operation``; the total when no type is given."""
        bucket = self.counts.get(rrtype)
        return bucket[operation] if bucket else 0

    def has_changes(self) -> bool:
        """Return True when any record set was added, deleted or changed."""
        return any(self.count(op) for op in (ADDED, DELETED, CHANGED))

    def by_type(self) -> list[tuple[RRType, dict[str, int]]]:
        """Return per-type counters ordered by type value, operations by name."""
        return [
            (rrtype, dict(sorted(counter.items())))
            for rrtype, counter in sorted(self.counts.items(), key=lambda item: item[0])
            if rrtype != RRType.NONE
        ]

    def totals(self) -> dict[str, int]:
        """Return the aggregate counters ordered by operation name."""
        return dict(sorted(self.counts.get(RRType.NONE, Counter()).items()))


@dataclass
class ZoneCount:
    """RR and RRset counts for a single zone."""

    records: Counter = field(default_factory=Counter)
    record_sets: Counter = field(default_factory=Counter)

    @property
    def record_total(self) -> int:
        return sum(self.records.values())

    @property
    def record_set_total(self) -> int:
        return sum(self.record_sets.values())


class ZoneDiffError(Exception):
    """Base exception for zonediff."""


class ZoneParseError(ZoneDiffError):
    """Raised when a master file is malformed."""

    def __init__(self, message: str, line: int | None = None):
        self.message = message
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)


class RingOverflowError(ZoneDiffError):
    """Raised when the comparison window cannot hold the differences."""


class ConfigError(ZoneDiffError):
    """Raised when configuration values are invalid."""
