#!/usr/bin/env python3
"""
Launch the Taskflow API under uvicorn.

HOST, PORT, RELOAD and WORKERS come from the environment (.env is honoured);
the log level follows LOG_LEVEL from the application settings.
"""

import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from taskflow.config.settings import settings


def server_options() -> dict:
    reload = os.getenv("RELOAD", "false").lower() == "true"
    options = {
        "host": os.getenv("HOST", "127.0.0.1"),
        "port": int(os.getenv("PORT", "8000")),
        "reload": reload,
        "log_level": settings.LOG_LEVEL.lower(),
        "proxy_headers": True,
    }
    # uvicorn ignores workers when reloading
    if not reload:
        options["workers"] = int(os.getenv("WORKERS", "1"))
    return options


def main():
    options = server_options()

    print(f"Starting {settings.APP_NAME} {settings.APP_VERSION}")
    print(f"Listening on http://{options['host']}:{options['port']} (reload={options['reload']})")
    print(f"Database: {settings.DATABASE_URL.split('@')[-1]}")
    print("=" * 50)

    uvicorn.run("main:app", **options)


if __name__ == "__main__":
    main()
