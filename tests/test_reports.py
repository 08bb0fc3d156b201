"""Tests for report rendering and serialisation."""

import json

import yaml

from zonediff.exporter import (
    count_to_dict,
    count_to_json,
    count_to_yaml,
    summary_to_dict,
    summary_to_json,
    summary_to_yaml,
    write_report,
)
from zonediff.models import ZoneCount, DiffSummary
from zonediff.renderer import render_count, render_summary
from zonediff.rrtypes import RRType


def make_summary():
    summary = DiffSummary()
    summary.increment(RRType.MX, "deleted")
    summary.increment(RRType.A, "added")
    summary.increment(RRType.A, "changed")
    summary.increment(RRType(65280), "added")
    return summary


def test_summary_aggregates_per_type_and_total():
    summary = make_summary()
    assert summary.count("added") == 2
    assert summary.count("added", RRType.A) == 1
    assert summary.count("deleted", RRType.A) == 0
    assert summary.count("added", RRType.TXT) == 0
    assert summary.has_changes()
    assert [rrtype for rrtype, _ in summary.by_type()] == [RRType.A, RRType.MX, 65280]


def test_render_summary():
    assert render_summary(make_summary()) == (
        "A:\n"
        "  added: 1\n"
        "  changed: 1\n"
        "MX:\n"
        "  deleted: 1\n"
        "TYPE65280:\n"
        "  added: 1\n"
        "total:\n"
        "  added: 2\n"
        "  changed: 1\n"
        "  deleted: 1\n"
    )


def test_render_empty_summary():
    assert render_summary(DiffSummary()).strip() == "No changes detected."


def test_summary_serialisation():
    summary = make_summary()
    expected = {
        "zone": "example.com.",
        "types": {"A": {"added": 1, "changed": 1}, "MX": {"deleted": 1}, "TYPE65280": {"added": 1}},
        "total": {"added": 2, "changed": 1, "deleted": 1},
    }
    assert summary_to_dict(summary, "example.com.") == expected
    assert json.loads(summary_to_json(summary, "example.com.")) == expected
    assert yaml.safe_load(summary_to_yaml(summary, "example.com.")) == expected


def make_count():
    count = ZoneCount()
    count.records.update({RRType.NS: 2, RRType.SOA: 1})
    count.record_sets.update({RRType.NS: 1, RRType.SOA: 1})
    return count


def test_render_count():
    text = render_count(make_count())
    assert text.splitlines() == [
        "RR:",
        "  SOA: 1",
        "  NS: 2",
        "  total: 3",
        "",
        "RRSet:",
        "  SOA: 1",
        "  NS: 1",
        "  total: 2",
    ]


def test_count_serialisation():
    expected = {"rr": {"SOA": 1, "NS": 2, "total": 3}, "rrset": {"SOA": 1, "NS": 1, "total": 2}}
    assert count_to_dict(make_count()) == expected
    assert json.loads(count_to_json(make_count())) == expected
    assert yaml.safe_load(count_to_yaml(make_count())) == expected


def test_write_report_creates_directories(tmp_path):
    target = tmp_path / "reports" / "zone.txt"
    write_report(target, "total:\n")
    assert target.read_text(encoding="utf-8") == "total:\n"
