"""Aggregate organization wellness metrics for manager dashboards. Individual scores are never exposed."""

from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime, timedelta

from mindfulme.core.constants import MOOD_THRESHOLD_HIGH, MOOD_THRESHOLD_LOW
from mindfulme.models import Employee, MoodEntry

METRICS_WINDOW_DAYS = 30
SESSIONS_WINDOW_DAYS = 7
UNASSIGNED_DEPARTMENT = "Unassigned"


def _status(average: float | None) -> str:
    if average is None:
        return "no-data"
    if average >= MOOD_THRESHOLD_HIGH:
        return "good"
    if average >= MOOD_THRESHOLD_LOW:
        return "fair"
    return "needs-attention"


def _mean(values: list[int]) -> float | None:
    return round(sum(values) / len(values), 1) if values else None


def compute_org_metrics(
    employees: Sequence[Employee],
    entries: Sequence[MoodEntry],
    now: datetime,
) -> dict:
    """
    Summarize mood entries (already limited to the metrics window) for the
    given employees: team mean, participation, at-risk headcount, recent
    check-ins and a per-department breakdown.
    """
    by_user: dict[str, list[int]] = defaultdict(list)
    week_start = now - timedelta(days=SESSIONS_WINDOW_DAYS)
    sessions_this_week = 0
    for entry in entries:
        by_user[entry.user_id].append(entry.mood_score)
        if entry.created_at >= week_start:
            sessions_this_week += 1

    employee_count = len(employees)
    participants = [e for e in employees if by_user.get(e.user_id)]
    at_risk = sum(
        1 for e in participants if _mean(by_user[e.user_id]) < MOOD_THRESHOLD_LOW
    )

    dept_scores: dict[str, list[int]] = defaultdict(list)
    for e in employees:
        dept_scores[e.department or UNASSIGNED_DEPARTMENT].extend(by_user.get(e.user_id, []))

    departments = []
    for name in sorted(dept_scores):
        average = _mean(dept_scores[name])
        departments.append({"name": name, "average": average, "status": _status(average)})

    all_scores = [s for e in employees for s in by_user.get(e.user_id, [])]
    return {
        "team_wellness": _mean(all_scores),
        "participation_rate": round(len(participants) / employee_count, 2) if employee_count else 0.0,
        "at_risk_count": at_risk,
        "sessions_this_week": sessions_this_week,
        "employee_count": employee_count,
        "window_days": METRICS_WINDOW_DAYS,
        "departments": departments,
    }
