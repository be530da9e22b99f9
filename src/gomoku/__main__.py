"""Entry point for running Gomoku via ``python -m gomoku``."""

from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    """Start the FastAPI-powered Gomoku web server."""

    logging.basicConfig(
        level=os.environ.get("GOMOKU_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    host = os.environ.get("GOMOKU_HOST", "0.0.0.0")
    port = int(os.environ.get("GOMOKU_PORT", "8000"))
    uvicorn.run("gomoku.ui:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
