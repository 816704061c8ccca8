"""
Dashboard aggregations over serialized entries.

All functions are pure: they take lists of entry dicts (as produced by
``Entry.to_dict``) and return chart-ready structures. Nothing here touches
the database.
"""

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from datetime import date, datetime, timedelta
from itertools import chain

from models import MOODS

NO_DATA = "No data"
TIME_SLOTS = ("morning", "afternoon", "evening")

# The dashboard always assumes a one-week window
DAYS_IN_WEEK = 7
SUNDAY = 6


def mood_distribution(entries):
    """Counts per mood, always in happy/neutral/sad order (drives chart colors)."""
    counts = Counter(e["mood"] for e in entries)
    return [{"name": mood.capitalize(), "value": counts.get(mood, 0)} for mood in MOODS]


def week_days(now=None, week_starts_on=SUNDAY):
    today = (now or datetime.now()).date()
    start = today - timedelta(days=(today.weekday() - week_starts_on) % DAYS_IN_WEEK)
    return [start + timedelta(days=i) for i in range(DAYS_IN_WEEK)]


def _entry_day(entry):
    try:
        return date.fromisoformat(entry["date"])
    except (TypeError, ValueError):
        return None


def weekly_trends(entries, now=None, week_starts_on=SUNDAY):
    """One bucket per day of the week containing ``now``.

    Entries are matched on their calendar ``date`` string, not on when
    they were stored.
    """
    by_day = {}
    for e in entries:
        by_day.setdefault(_entry_day(e), []).append(e)

    trends = []
    for day in week_days(now, week_starts_on):
        day_entries = by_day.get(day, [])
        bucket = {
            "date": day.strftime("%a"),
            "day": day.isoformat(),
            "count": len(day_entries),
        }
        for mood in MOODS:
            bucket[mood] = sum(1 for e in day_entries if e["mood"] == mood)
        trends.append(bucket)
    return trends


def time_slot(time_str):
    try:
        hour = int(str(time_str).split(":")[0])
    except ValueError:
        # Unparseable hours fail both comparisons and land in the evening
        return "evening"
    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    return "evening"


def time_distribution(entries):
    if not entries:
        return []
    counts = Counter(time_slot(e["time"]) for e in entries)
    return [{"name": slot.capitalize(), "value": counts.get(slot, 0)} for slot in TIME_SLOTS]


def entry_stats(entries):
    total = len(entries)
    stats = {"total": total}
    for mood in MOODS:
        stats[mood] = sum(1 for e in entries if e["mood"] == mood)
    stats["avg_per_day"] = total / DAYS_IN_WEEK
    return stats


def round_half_up(value, step="1"):
    """Halves round away from zero, unlike the builtin round()."""
    return Decimal(str(value)).quantize(Decimal(step), rounding=ROUND_HALF_UP)


def happiness_rate(thought_stats, activity_stats):
    total = thought_stats["total"] + activity_stats["total"]
    if total == 0:
        return 0
    happy = thought_stats["happy"] + activity_stats["happy"]
    return int(round_half_up(happy / total * 100))


def daily_average(thought_stats, activity_stats):
    return float(round_half_up(thought_stats["avg_per_day"] + activity_stats["avg_per_day"], "0.1"))


def most_active_time(*distributions):
    best = {"name": NO_DATA, "value": 0}
    for slot in chain(*distributions):
        if slot["value"] > best["value"]:
            best = slot
    return best


def _type_summary(entries, now, week_starts_on):
    return {
        "stats": entry_stats(entries),
        "moods": mood_distribution(entries),
        "weekly": weekly_trends(entries, now, week_starts_on),
        "time_of_day": time_distribution(entries),
    }


def overview(thoughts, activities, now=None, week_starts_on=SUNDAY):
    """Everything the overview page renders, in one payload."""
    thoughts_summary = _type_summary(thoughts, now, week_starts_on)
    activities_summary = _type_summary(activities, now, week_starts_on)
    thought_stats = thoughts_summary["stats"]
    activity_stats = activities_summary["stats"]

    return {
        "thoughts": thoughts_summary,
        "activities": activities_summary,
        "total_entries": thought_stats["total"] + activity_stats["total"],
        "happiness_rate": happiness_rate(thought_stats, activity_stats),
        "daily_average": daily_average(thought_stats, activity_stats),
        "most_active_time": most_active_time(
            thoughts_summary["time_of_day"], activities_summary["time_of_day"]
        ),
    }
