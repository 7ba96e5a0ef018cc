#!/usr/bin/env python3
"""
Load JSON records into one of the dashboard collections.

Transactions and expenses are normally written by the booking/checkout
process.  This script stands in for it when running the dashboard
locally: it inserts every record of a JSON file (a list of objects, or
a single object) into the chosen collection.

Usage:
    python seed_records.py --collection transactions --file ./transactions.json
    python seed_records.py --db /tmp/dashboard.db --collection expenses --file ./expenses.json

Example transaction: {"price": 100, "finishedAt": "2024-01-01T10:30:00Z"}
Example expense:     {"amount": 400}
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from service_dashboard_api.app.core.config import settings
from service_dashboard_api.app.core.db import init_db
from service_dashboard_api.app.services.record_service import COLLECTIONS, RecordService


async def seed(collection: str, records: list) -> int:
    for record in records:
        await RecordService.add_record(collection, record)
    return len(records)


def main():
    ap = argparse.ArgumentParser(description="Insert JSON records into a dashboard collection.")
    ap.add_argument("--db", help="Path to the SQLite file (defaults to DATABASE_URL)")
    ap.add_argument("--collection", required=True, choices=COLLECTIONS)
    ap.add_argument("--file", required=True, help="JSON file with an object or a list of objects")
    args = ap.parse_args()

    path = Path(args.file)
    if not path.exists():
        print(f"[!] File not found: {path}", file=sys.stderr)
        sys.exit(1)

    data = json.loads(path.read_text(encoding="utf-8"))
    records = data if isinstance(data, list) else [data]
    if not all(isinstance(r, dict) for r in records):
        print("[!] Every record must be a JSON object.", file=sys.stderr)
        sys.exit(1)

    if args.db:
        settings.database_url = str(Path(args.db).resolve())
    init_db()

    count = asyncio.run(seed(args.collection, records))
    print(f"[+] Inserted {count} record(s) into {args.collection}")


if __name__ == "__main__":
    main()
