#!/usr/bin/env python3
"""
Run the App Registry API with uvicorn.

Usage:
  python scripts/serve.py [--reload]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import uvicorn

# Make the appregistry package importable when run as a plain script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appregistry.core.config import get_settings
from appregistry.core.logging_setup import setup_logging


def main() -> None:
    ap = argparse.ArgumentParser(description="Run the App Registry API")
    ap.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = ap.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        "appregistry.app_factory:app",
        host=settings.host,
        port=settings.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
