#!/usr/bin/env python3
"""
Seed the configured storage with application records from a JSON file.

Usage:
  python scripts/seed_apps.py path/to/apps.json [--allow-duplicates]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Make the appregistry package importable when run as a plain script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appregistry.core.config import get_settings
from appregistry.core.logging_setup import setup_logging
from appregistry.domain.records import ValidationError, find_duplicate_names, validate_collection
from appregistry.repositories import build_storage

logger = logging.getLogger("seed_apps")


def load_seed(path: Path) -> list[dict]:
    if not path.exists():
        raise SystemExit(f"Seed file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        records = json.load(f)
    try:
        validate_collection(records)
    except ValidationError as exc:
        raise SystemExit(f"Invalid seed file: {exc}") from exc
    return records


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed application records")
    ap.add_argument("seed", help="JSON file holding an array of records")
    ap.add_argument("--allow-duplicates", action="store_true", help="Accept repeated appName values")
    args = ap.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level)
    records = load_seed(Path(args.seed))
    duplicates = find_duplicate_names(records)
    if duplicates and not args.allow_duplicates:
        raise SystemExit(f"Duplicate appName values: {', '.join(duplicates)}")

    storage = build_storage(settings)
    storage.save(records)
    logger.info("Seeded %d records into %s storage", len(records), settings.storage_backend)


if __name__ == "__main__":
    main()
