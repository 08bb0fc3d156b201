"""Bounded buffer of record sets read from one zone."""

from __future__ import annotations

import logging
from typing import Iterable

from .models import Record, RecordSet, RingOverflowError
from .rrtypes import RRType, bitmap_covers, type_bitmap

LOG = logging.getLogger("zonediff.ring")

DNSSEC_TYPES = type_bitmap([RRType.RRSIG, RRType.NSEC, RRType.NSEC3])


class Ring:
    """Fixed-capacity circular store of record sets.

    ``tail`` and ``head`` are logical indices that only grow; the sets in
    ``[tail, head)`` form the window visible to the differ and live in slot
    ``index % buf_size``. The set still being filled is kept in ``last`` so
    it is never split between two calls to :meth:`read_zone_records`.
    """

    def __init__(self, records: Iterable[Record], buf_size: int, skip_dnssec: bool = False):
        if buf_size < 1:
            raise ValueError("Ring buffer size must be at least 1.")
        self._records = iter(records)
        self._slots: list[RecordSet | None] = [None] * buf_size
        self.buf_size = buf_size
        self.skip_dnssec = skip_dnssec
        self.tail = 0
        self.head = 0
        self.at_end = False
        self.last: RecordSet | None = None

    def __len__(self) -> int:
        return self.head - self.tail

    def __getitem__(self, index: int) -> RecordSet:
        if not self.tail <= index < self.head:
            raise IndexError(f"Index {index} outside window [{self.tail}, {self.head})")
        return self._slots[index % self.buf_size]

    def window(self) -> list[RecordSet]:
        """Return the buffered sets in order."""
        return [self[index] for index in range(self.tail, self.head)]

    def is_full(self) -> bool:
        return self.head - self.tail >= self.buf_size

    def push(self, record_set: RecordSet) -> None:
        """Store a completed set at ``head``."""
        if self.is_full():
            raise RingOverflowError(
                f"Ring buffer overflow: {self.buf_size} sets buffered and the tail has not advanced."
            )
        self._slots[self.head % self.buf_size] = record_set
        self.head += 1

    def set_tail(self, tail: int) -> None:
        """Release every set before ``tail``."""
        if not self.tail <= tail <= self.head:
            raise ValueError(f"Tail {tail} outside window [{self.tail}, {self.head}]")
        for index in range(self.tail, tail):
            self._slots[index % self.buf_size] = None
        self.tail = tail

    def read_zone_records(self) -> None:
        """Fill the ring from the parser until it is full or the zone ends."""
        while not self.at_end and not self.is_full():
            record = next(self._records, None)
            if record is None:
                if self.last is not None:
                    self.push(self.last)
                    self.last = None
                self.at_end = True
                LOG.debug("Zone exhausted after %s record sets", self.head)
                break

            if self.skip_dnssec and bitmap_covers(DNSSEC_TYPES, record.rrtype):
                continue

            if self.last is not None and self.last.accepts(record):
                self.last.append(record)
                continue

            if self.last is not None:
                self.push(self.last)
            self.last = RecordSet(record)
