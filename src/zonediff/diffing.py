"""Streaming diff of two zones by record set."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from .config import DiffOptions
from .editscript import Span, Tag, edit_script
from .models import (
    ADDED,
    CHANGED,
    DELETED,
    RECORDS_ADDED,
    RECORDS_DELETED,
    DiffSummary,
    Record,
    RecordSet,
    RingOverflowError,
)
from .ring import Ring

LOG = logging.getLogger("zonediff.diffing")

ADDED_PREFIX = "++"
DELETED_PREFIX = "--"
RECORD_ADDED_PREFIX = "~+"
RECORD_DELETED_PREFIX = "~-"


def diff_windows(old: Ring, new: Ring) -> list[Span]:
    """Match the buffered sets of both rings by owner name and type."""
    spans = edit_script(old.window(), new.window(), key=RecordSet.key)
    return [span.shifted(old.tail, new.tail) for span in spans]


def truncate_spans(spans: list[Span], old_at_end: bool, new_at_end: bool) -> list[Span]:
    """Drop trailing spans that may only be artifacts of the window edge.

    Spans are removed from the end until an EQUAL span closes the list. An
    INSERT right after an EQUAL (or opening the window) is final once the
    old zone is exhausted, as is such a DELETE once the new zone is
    exhausted. Without any remaining span the window holds no point where
    both zones agree, which is an overflow.
    """
    if old_at_end and new_at_end:
        return spans
    kept = list(spans)
    while kept:
        last = kept[-1]
        if last.tag is Tag.EQUAL:
            return kept
        if len(kept) == 1 or kept[-2].tag is Tag.EQUAL:
            if (last.tag is Tag.INSERT and old_at_end) or (last.tag is Tag.DELETE and new_at_end):
                return kept
        kept.pop()
    raise RingOverflowError(
        "Too many differences: no matching record set within the buffer window. "
        "Increase the buffer size."
    )


def diff_record_sets(old_set: RecordSet, new_set: RecordSet, ignore_serial: bool = False) -> list[Span]:
    """Return the non-equal spans between the records of two matched sets."""
    if ignore_serial:
        old_records = [record.without_serial() for record in old_set]
        new_records = [record.without_serial() for record in new_set]
    else:
        old_records, new_records = old_set.records, new_set.records
    return [span for span in edit_script(old_records, new_records) if span.tag is not Tag.EQUAL]


class Differ:
    """Compare two record streams inside a bounded window."""

    def __init__(
        self,
        old_records: Iterable[Record],
        new_records: Iterable[Record],
        options: DiffOptions | None = None,
        emit: Callable[[str], None] = print,
    ):
        self.options = options or DiffOptions()
        self.old = Ring(old_records, self.options.buffer_size, skip_dnssec=self.options.skip_dnssec)
        self.new = Ring(new_records, self.options.buffer_size, skip_dnssec=self.options.skip_dnssec)
        self.summary = DiffSummary()
        self._emit = emit

    def compare(self) -> DiffSummary:
        """Run the comparison to the end of both zones."""
        while True:
            self.old.read_zone_records()
            self.new.read_zone_records()
            finished = self.old.at_end and self.new.at_end

            spans = diff_windows(self.old, self.new)
            if not finished:
                spans = truncate_spans(spans, self.old.at_end, self.new.at_end)
            LOG.debug(
                "Window old [%s, %s) new [%s, %s): %s spans kept",
                self.old.tail,
                self.old.head,
                self.new.tail,
                self.new.head,
                len(spans),
            )

            for span in spans:
                self._check_span(span)

            if spans:
                self.old.set_tail(spans[-1].old_end)
                self.new.set_tail(spans[-1].new_end)
            if finished:
                return self.summary

    def _check_span(self, span: Span) -> None:
        """Count one resolved span."""
        if span.tag is Tag.EQUAL:
            for offset in range(span.old_len):
                self._compare_sets(self.old[span.old + offset], self.new[span.new + offset])
            return
        for index in range(span.old, span.old_end):
            self._report_set(self.old[index], DELETED, DELETED_PREFIX)
        for index in range(span.new, span.new_end):
            self._report_set(self.new[index], ADDED, ADDED_PREFIX)

    def _report_set(self, record_set: RecordSet, operation: str, prefix: str) -> None:
        """Count an added or deleted set."""
        if self.options.verbose:
            for record in record_set:
                self._emit(f"{prefix} {record}")
        self.summary.increment(record_set.rrtype, operation)

    def _compare_sets(self, old_set: RecordSet, new_set: RecordSet) -> None:
        """Count a matched set whose records differ."""
        spans = diff_record_sets(old_set, new_set, ignore_serial=self.options.ignore_serial)
        if not spans:
            return
        self.summary.increment(old_set.rrtype, CHANGED)
        for span in spans:
            for index in range(span.old, span.old_end):
                self._report_record(old_set.records[index], RECORDS_DELETED, RECORD_DELETED_PREFIX)
            for index in range(span.new, span.new_end):
                self._report_record(new_set.records[index], RECORDS_ADDED, RECORD_ADDED_PREFIX)

    def _report_record(self, record: Record, operation: str, prefix: str) -> None:
        if self.options.verbose:
            self._emit(f"{prefix} {record}")
        self.summary.increment(record.rrtype, operation)
