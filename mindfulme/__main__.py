"""
Run the API server:

  python -m mindfulme

Equivalent to: uvicorn mindfulme.main:create_app --factory --host $HOST --port $PORT
"""

import logging
import sys

import uvicorn
from dotenv import load_dotenv

from mindfulme.core.config import load_settings


def main() -> int:
    load_dotenv()
    settings = load_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    uvicorn.run(
        "mindfulme.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
