#!/usr/bin/env python
"""Docker entrypoint script to run the application."""

import uvicorn

from app.config import config

if __name__ == "__main__":
    uvicorn.run("app.main:app", host=config.server.host, port=config.server.port)
