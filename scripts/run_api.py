#!/usr/bin/env python
"""
Run the movie reviews API with uvicorn.

Usage:
    python scripts/run_api.py
    python scripts/run_api.py --port 9000 --reload
"""

import sys
import argparse
from pathlib import Path

import uvicorn

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from moviereviews.api.config import Settings


def main():
    settings = Settings()

    parser = argparse.ArgumentParser(description="Run the movie reviews API")
    parser.add_argument('--host', type=str, default=settings.api_host, help='Bind address')
    parser.add_argument('--port', type=int, default=settings.api_port, help='Bind port')
    parser.add_argument('--reload', action='store_true', help='Reload on code changes')
    args = parser.parse_args()

    uvicorn.run(
        "moviereviews.api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
