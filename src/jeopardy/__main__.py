"""Entry point for running the Jeopardy board via ``python -m jeopardy``."""

from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    """Start the FastAPI-powered Jeopardy web server."""

    level = os.environ.get("JEOPARDY_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    host = os.environ.get("JEOPARDY_HOST", "0.0.0.0")
    port = int(os.environ.get("JEOPARDY_PORT", "8000"))
    uvicorn.run("jeopardy.ui:app", host=host, port=port, reload=False, log_level=level.lower())


if __name__ == "__main__":
    main()
