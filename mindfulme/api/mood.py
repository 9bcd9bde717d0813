"""Mood check-ins and per-user statistics."""

from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import APIRouter, Query, status

from mindfulme.api.auth import CurrentUser
from mindfulme.api.deps import StorageDep
from mindfulme.core.constants import MOOD_DAYS_DEFAULT, MOOD_DAYS_MAX
from mindfulme.models import MoodEntry
from mindfulme.schemas.journal import MoodEntryCreate, MoodEntryResponse, MoodStatsResponse
from mindfulme.services.mood_stats import compute_mood_stats

router = APIRouter()

DaysQuery = Annotated[int, Query(ge=1, le=MOOD_DAYS_MAX)]


def _since(days: int) -> datetime:
    return datetime.now(UTC) - timedelta(days=days)


@router.get("", response_model=list[MoodEntryResponse])
def list_mood_entries(
    user: CurrentUser,
    storage: StorageDep,
    days: DaysQuery = MOOD_DAYS_DEFAULT,
) -> list[MoodEntry]:
    """The caller's entries from the last `days` days, newest first."""
    return storage.list_mood_entries(user.id, since=_since(days))


@router.post("", response_model=MoodEntryResponse, status_code=status.HTTP_201_CREATED)
def create_mood_entry(body: MoodEntryCreate, user: CurrentUser, storage: StorageDep) -> MoodEntry:
    return storage.create_mood_entry(user.id, body.mood_score, notes=body.notes)


@router.get("/stats", response_model=MoodStatsResponse)
def mood_stats(
    user: CurrentUser,
    storage: StorageDep,
    days: DaysQuery = MOOD_DAYS_DEFAULT,
) -> MoodStatsResponse:
    entries = storage.list_mood_entries(user.id, since=_since(days))
    stats = compute_mood_stats(list(reversed(entries)), days)
    return MoodStatsResponse.model_validate(stats)
