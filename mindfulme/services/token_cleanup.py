"""Session hygiene: delete refresh tokens whose expiry has passed."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mindfulme.storage import Storage

logger = logging.getLogger(__name__)


def run_token_cleanup(storage: "Storage", now: datetime | None = None) -> int:
    """
    Delete refresh tokens that expired at or before `now`.

    Returns the number deleted. Idempotent: safe to run repeatedly.
    """
    cutoff = now or datetime.now(UTC)
    deleted_count = storage.delete_expired_refresh_tokens(cutoff)
    if deleted_count > 0:
        logger.info(
            "Token cleanup run: cutoff=%s, tokens_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
