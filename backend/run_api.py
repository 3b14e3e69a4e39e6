#!/usr/bin/env python
"""
Run the Shipmates API server.

Usage:
    python run_api.py
    python run_api.py --reload          # Development mode
    python run_api.py --memory-store    # No Supabase needed (accounts kept in memory)
"""

import argparse
import os

import uvicorn

from api.config import get_settings
from shared.config import get_settings as get_app_settings


def main():
    parser = argparse.ArgumentParser(description="Run Shipmates API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument(
        "--memory-store",
        action="store_true",
        help="Keep accounts in process memory instead of Supabase",
    )
    args = parser.parse_args()

    if args.memory_store:
        # Read by the app process (and by the reloader's worker)
        os.environ["ACCOUNT_STORE_BACKEND"] = "memory"

    settings = get_settings()

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=get_app_settings().log_level.lower(),
    )


if __name__ == "__main__":
    main()
