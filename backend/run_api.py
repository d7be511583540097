#!/usr/bin/env python
"""
Serve the Celestia profile, credits and persona API with uvicorn.

    celestia-api
    celestia-api --reload --port 8080
"""

import argparse
import uvicorn

from shared.config import get_settings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Celestia backend API")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--host", type=str, help="Bind address (default: HOST setting)")
    parser.add_argument("--port", type=int, help="Bind port (default: PORT setting)")
    parser.add_argument("--log-level", type=str, help="Overrides LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = get_settings()

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=(args.log_level or settings.log_level).lower(),
    )


if __name__ == "__main__":
    main()
