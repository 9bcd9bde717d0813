"""Mood statistics over a window of entries: average, trend, best and worst."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Protocol

Trend = Literal["improving", "declining", "neutral"]

# Later-half mean must differ from earlier-half mean by more than this to count as a trend.
TREND_THRESHOLD = 0.5


class _Scored(Protocol):
    mood_score: int


@dataclass(frozen=True)
class MoodStats:
    average: float | None
    trend: Trend
    best_mood: int | None
    worst_mood: int | None
    total_entries: int
    days_tracked: int


def _mean(values: Sequence[int]) -> float:
    return sum(values) / len(values)


def compute_mood_stats(entries_oldest_first: Sequence[_Scored], days: int) -> MoodStats:
    """
    Summarize mood entries given in chronological order.

    Trend compares the mean of the later half against the earlier half. With a
    single entry there is nothing to compare and the trend is neutral.
    """
    scores = [e.mood_score for e in entries_oldest_first]
    if not scores:
        return MoodStats(None, "neutral", None, None, 0, days)

    trend: Trend = "neutral"
    midpoint = len(scores) // 2
    if midpoint > 0:
        earlier = _mean(scores[:midpoint])
        later = _mean(scores[midpoint:])
        if later > earlier + TREND_THRESHOLD:
            trend = "improving"
        elif later < earlier - TREND_THRESHOLD:
            trend = "declining"

    return MoodStats(
        average=round(_mean(scores), 1),
        trend=trend,
        best_mood=max(scores),
        worst_mood=min(scores),
        total_entries=len(scores),
        days_tracked=days,
    )
