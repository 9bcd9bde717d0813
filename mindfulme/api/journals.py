"""Private journals. Entries are only visible to their author."""

from fastapi import APIRouter, status

from mindfulme.api.auth import CurrentUser
from mindfulme.api.deps import StorageDep
from mindfulme.core.errors import NotFoundError
from mindfulme.models import Journal, User
from mindfulme.schemas.base import MessageResponse
from mindfulme.schemas.journal import JournalCreate, JournalResponse
from mindfulme.storage import Storage

router = APIRouter()


def _owned_journal(storage: Storage, journal_id: str, user: User) -> Journal:
    # Someone else's journal is reported as missing, not forbidden.
    journal = storage.get_journal(journal_id)
    if journal.user_id != user.id:
        raise NotFoundError("Journal not found")
    return journal


@router.get("", response_model=list[JournalResponse])
def list_journals(user: CurrentUser, storage: StorageDep) -> list[Journal]:
    """The caller's journals, newest first."""
    return storage.list_journals(user.id)


@router.post("", response_model=JournalResponse, status_code=status.HTTP_201_CREATED)
def create_journal(body: JournalCreate, user: CurrentUser, storage: StorageDep) -> Journal:
    return storage.create_journal(
        user_id=user.id,
        content=body.content,
        mood_score=body.mood_score,
        tags=body.tags,
        is_private=body.is_private,
    )


@router.get("/{journal_id}", response_model=JournalResponse)
def get_journal(journal_id: str, user: CurrentUser, storage: StorageDep) -> Journal:
    return _owned_journal(storage, journal_id, user)


@router.delete("/{journal_id}", response_model=MessageResponse)
def delete_journal(journal_id: str, user: CurrentUser, storage: StorageDep) -> MessageResponse:
    _owned_journal(storage, journal_id, user)
    storage.delete_journal(journal_id)
    return MessageResponse(message="Journal deleted")
