#!/usr/bin/env python3
"""Script to export demo message logs, suppressions or audit history as CSV."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sms_admin.services.export import (
    AUDIT_COLUMNS,
    LOG_COLUMNS,
    SUPPRESSION_COLUMNS,
    generate_csv,
)
from sms_admin.storage.base import LogFilters
from sms_admin.storage.memory import InMemoryStorage


async def load_rows(storage: InMemoryStorage, kind: str, org_id: str | None) -> tuple[list, list]:
    """Fetch the records and column set for one export kind."""
    if kind == "logs":
        return await storage.list_logs(LogFilters(org_id=org_id)), LOG_COLUMNS
    if kind == "suppressions":
        return await storage.list_suppressions(org_id), SUPPRESSION_COLUMNS

    # Audit entries reference the edited entity, not its organization
    if org_id:
        raise ValueError("--org is not supported for audit exports")
    return await storage.list_audit_entries(), AUDIT_COLUMNS


async def main():
    parser = argparse.ArgumentParser(description="Export demo data as CSV")
    parser.add_argument("kind", choices=["logs", "suppressions", "audit"], help="What to export")
    parser.add_argument("--org", dest="org_id", help="Only export records for this organization (logs and suppressions)")
    parser.add_argument("--output", "-o", help="Output file (defaults to stdout)")

    args = parser.parse_args()

    storage = InMemoryStorage(latency_scale=0)
    await storage.seed_demo_data()

    try:
        records, columns = await load_rows(storage, args.kind, args.org_id)
    except ValueError as e:
        parser.error(str(e))
    content = generate_csv(records, columns)

    if args.output:
        Path(args.output).write_text(content + "\n", encoding="utf-8")
        print(f"Wrote {len(records)} rows to {args.output}", file=sys.stderr)
    else:
        print(content)


if __name__ == "__main__":
    asyncio.run(main())
