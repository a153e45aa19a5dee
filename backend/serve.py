"""Launch script that starts Uvicorn with the chat backend."""

from __future__ import annotations

import importlib
import logging
import os

import uvicorn

logger = logging.getLogger("harry.launcher")


def main() -> None:
    app_module = importlib.import_module("backend.main")
    app = app_module.app  # type: ignore[attr-defined]

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    logger.debug("Starting %s on %s:%d", app.title, host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
