"""Run the Dine Genius API with uvicorn.

Usage:
    python -m dinegenius.main
"""
from __future__ import annotations

import logging
import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get("LOG_LEVEL", "INFO"),
)
logger = logging.getLogger(__name__)


def main() -> None:  # pragma: no cover - manual run path
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "3000"))
    logger.info("Starting Dine Genius API on %s:%d", host, port)
    uvicorn.run("dinegenius.app:app", host=host, port=port)


if __name__ == "__main__":  # pragma: no cover
    main()
