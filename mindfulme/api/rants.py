"""Anonymous rants. Public endpoints; nothing links a rant to its author."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from mindfulme.api.deps import StorageDep
from mindfulme.models import AnonymousRant
from mindfulme.schemas.rant import RantCreate, RantResponse
from mindfulme.services.sentiment import mood_label, score_content

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(rant: AnonymousRant) -> RantResponse:
    return RantResponse(
        id=rant.id,
        content=rant.content,
        sentiment_score=rant.sentiment_score,
        mood_label=mood_label(rant.sentiment_score),
        support_count=rant.support_count,
        created_at=rant.created_at,
    )


@router.get("", response_model=list[RantResponse])
def list_rants(
    storage: StorageDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
) -> list[RantResponse]:
    """Most recent rants first."""
    return [_to_response(r) for r in storage.list_rants(limit=limit)]


@router.post("", response_model=RantResponse, status_code=status.HTTP_201_CREATED)
def create_rant(body: RantCreate, storage: StorageDep) -> RantResponse:
    """Score the text and store it. Identity is never recorded, even for signed-in callers."""
    score = score_content(body.content)
    rant = storage.create_rant(body.content, score)
    logger.info("Rant posted", extra={"rant_id": rant.id, "sentiment_score": score})
    return _to_response(rant)


@router.post("/{rant_id}/support", response_model=RantResponse)
def support_rant(rant_id: str, storage: StorageDep) -> RantResponse:
    return _to_response(storage.support_rant(rant_id))
