"""
CLI entrypoint for the refresh-token cleanup job. Run from cron, e.g.:

  python -m mindfulme.token_cleanup

Or hourly: 0 * * * * cd /path/to/mindfulme && .venv/bin/python -m mindfulme.token_cleanup
"""

import logging
import sys

from dotenv import load_dotenv

from mindfulme.core.config import load_settings
from mindfulme.services.token_cleanup import run_token_cleanup
from mindfulme.storage import create_storage

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete refresh tokens past their expiry. Exit 0 on success, 1 on failure."""
    load_dotenv()
    settings = load_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    storage = create_storage(settings)
    try:
        deleted = run_token_cleanup(storage)
        logger.info("Token cleanup completed: tokens_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Token cleanup job failed: %s", e)
        return 1
    finally:
        storage.close()


if __name__ == "__main__":
    sys.exit(main())
