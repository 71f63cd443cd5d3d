"""
analytics.py
------------
Aggregates recorded spin outcomes of one wheel:
      1. distribution: spins per segment label, with that segment's current color.
      2. timeline: spins per calendar day, oldest day first.
Pure functions over plain lists; no store or engine access.
"""
from collections import OrderedDict

from spinwheel.utils.config import FALLBACK_COLOR


def _outcomes_for(wheel, outcomes):
    return [o for o in outcomes if o.wheel_id == wheel.id]


def distribution(wheel, outcomes):
    """[{label, count, color}] in order of first appearance."""
    counts = OrderedDict()
    for outcome in _outcomes_for(wheel, outcomes):
        counts[outcome.segment_label] = counts.get(outcome.segment_label, 0) + 1

    result = []
    for label, count in counts.items():
        segment = wheel.segment_by_label(label)
        result.append({
            "label": label,
            "count": count,
            "color": segment.color if segment is not None else FALLBACK_COLOR,
        })
    return result


def timeline(outcomes):
    """[{date, count}] grouped by the outcome timestamp's calendar day, ascending."""
    counts = {}
    for outcome in outcomes:
        day = outcome.timestamp.date()
        counts[day] = counts.get(day, 0) + 1
    return [{"date": day.isoformat(), "count": counts[day]} for day in sorted(counts)]


def build_analytics(wheel, outcomes):
    own = _outcomes_for(wheel, outcomes)
    return {
        "total_spins": len(own),
        "distribution": distribution(wheel, own),
        "timeline": timeline(own),
    }


def format_summary(wheel, analytics):
    """Plain-text report shown by the operator console."""
    lines = [f"{wheel.title or 'Untitled wheel'}", f"Total spins: {analytics['total_spins']}", ""]
    if analytics["distribution"]:
        lines.append("Result distribution:")
        for row in analytics["distribution"]:
            lines.append(f"  {row['label']}: {row['count']}")
        lines.append("")
        lines.append("Spins over time:")
        for row in analytics["timeline"]:
            lines.append(f"  {row['date']}: {row['count']}")
    else:
        lines.append("No spins recorded yet.")
    return "\n".join(lines)
