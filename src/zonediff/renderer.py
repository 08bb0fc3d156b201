"""Render text reports via Jinja2 templates."""

from __future__ import annotations

from jinja2 import DictLoader, Environment, StrictUndefined

from .models import DiffSummary, ZoneCount

SUMMARY_TEMPLATE = """\
{% for type_name, counts in types %}
{{ type_name }}:
{% for operation, value in counts.items() %}
  {{ operation }}: {{ value }}
{% endfor %}
{% endfor %}
{% if total %}
total:
{% for operation, value in total.items() %}
  {{ operation }}: {{ value }}
{% endfor %}
{% else %}
No changes detected.
{% endif %}
"""

COUNT_TEMPLATE = """\
RR:
{% for type_name, value in records %}
  {{ type_name }}: {{ value }}
{% endfor %}
  total: {{ record_total }}

RRSet:
{% for type_name, value in record_sets %}
  {{ type_name }}: {{ value }}
{% endfor %}
  total: {{ record_set_total }}
"""

_ENV = Environment(
    loader=DictLoader({"summary.j2": SUMMARY_TEMPLATE, "count.j2": COUNT_TEMPLATE}),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def render_summary(summary: DiffSummary) -> str:
    """Render per-type diff counters followed by the totals."""
    template = _ENV.get_template("summary.j2")
    types = [(rrtype.name, counts) for rrtype, counts in summary.by_type()]
    return template.render(types=types, total=summary.totals())


def render_count(count: ZoneCount) -> str:
    """Render RR and RRset counts per type."""
    template = _ENV.get_template("count.j2")
    return template.render(
        records=[(rrtype.name, value) for rrtype, value in sorted(count.records.items())],
        record_total=count.record_total,
        record_sets=[(rrtype.name, value) for rrtype, value in sorted(count.record_sets.items())],
        record_set_total=count.record_set_total,
    )
