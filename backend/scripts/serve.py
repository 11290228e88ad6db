#!/usr/bin/env python3
"""Run the Notekeeper API with uvicorn."""
from __future__ import annotations

import argparse

from uvicorn import run


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Notekeeper API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()
    run("notekeeper.main:app", host=args.host, port=args.port, reload=args.reload, log_level="info")


if __name__ == "__main__":
    main()
