#!/usr/bin/env python3
"""
Causes of Death Chart: launch the web app.

Usage:
    python main.py                              # http://localhost:8000
    python main.py --port 9000                  # http://localhost:9000
    python main.py --data /path/to/deaths.csv
    python main.py --data https://example.org/deaths.csv
    python main.py --reload                     # auto-reload on code changes
"""

from __future__ import annotations

import argparse
import os
import sys
import webbrowser
from pathlib import Path

from utils.http import is_url


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Launch the causes-of-death bar chart web app.",
    )
    parser.add_argument(
        "--host", default="127.0.0.1",
        help="Bind address (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port", type=int, default=int(os.getenv("APP_PORT", "8000")),
        help="Port to listen on (default: 8000 or APP_PORT env var)",
    )
    parser.add_argument(
        "--data", default=None,
        help="Path or URL of the export (default: data.csv or APP_DATA_SOURCE env var)",
    )
    parser.add_argument(
        "--reload", action="store_true",
        help="Enable auto-reload on file changes (development mode)",
    )
    parser.add_argument(
        "--no-browser", action="store_true",
        help="Don't open a browser window automatically",
    )
    args = parser.parse_args(argv)

    # The app reads its data source from the environment at import time
    if args.data is not None:
        os.environ["APP_DATA_SOURCE"] = str(args.data)

    source = os.getenv("APP_DATA_SOURCE", "data.csv")
    if not is_url(source) and not Path(source).exists():
        print(f"Error: Data file not found at {source}")
        print("  Pass --data /path/to/export.csv or set APP_DATA_SOURCE")
        sys.exit(1)

    import uvicorn

    url = f"http://{'localhost' if args.host == '0.0.0.0' else args.host}:{args.port}"
    print(f"Starting Causes of Death Chart at {url}")
    print(f"Data: {source}")
    print()

    if not args.no_browser:
        # Open browser after a short delay to let the server start
        import threading
        threading.Timer(1.5, webbrowser.open, args=(url,)).start()

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
