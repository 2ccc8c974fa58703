#!/usr/bin/env python
"""Script to run the task management API server."""
import os
from pathlib import Path

import uvicorn

from app.config import HOST, LOG_LEVEL, PORT, RELOAD

if __name__ == "__main__":
    # Run from the project root so "app.main:app" and .env resolve
    os.chdir(Path(__file__).resolve().parent)

    uvicorn.run(
        "app.main:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,
        log_level=LOG_LEVEL.lower(),
    )
