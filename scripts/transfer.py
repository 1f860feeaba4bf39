#!/usr/bin/env python3
"""
Export or import the tracker's data from the command line.

Works directly on the configured database (DATABASE_URL), so the web app
should be stopped while importing.

Usage:
    python scripts/transfer.py export [--output FILE]
    python scripts/transfer.py import FILE [--dry-run]
    python scripts/transfer.py usage

Options:
    --output     Write the export to FILE instead of customer-database-export.json
    --dry-run    Validate the import file without writing anything
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracker.core.config import settings
from tracker.core.database import create_db_and_tables, engine
from tracker.core.exceptions import ImportValidationError
from tracker.services import transfer
from tracker.services.workspace import Workspace
from tracker.store import SQLKeyValueStore


def export_command(workspace: Workspace, output: str) -> int:
    payload = workspace.export_payload()
    Path(output).write_text(transfer.export_json(payload), encoding="utf-8")
    print(f"Exported {len(payload['customers'])} customers to {output}")
    return 0


def import_command(workspace: Workspace, path: str, dry_run: bool) -> int:
    raw = Path(path).read_bytes()
    try:
        if dry_run:
            decoded = transfer.parse_import(raw)
            print(f"[DRY RUN] {path} is valid: {', '.join(decoded)}")
            return 0
        counts = workspace.import_data(raw)
    except ImportValidationError as e:
        print(f"Error: {e}")
        return 1

    for key, count in counts.items():
        print(f"  {key}: {count}")
    print("Import complete")
    return 0


def usage_command(workspace: Workspace) -> int:
    usage = transfer.storage_usage(workspace.export_payload())
    print(f"Storage used: {usage['used']} of {usage['total']} bytes ({usage['percent']}%)")
    for key, size in usage["collections"].items():
        print(f"  {key}: {size} bytes")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Export or import customer tracker data")
    commands = parser.add_subparsers(dest="command", required=True)

    export_parser = commands.add_parser("export", help="Write all data to a JSON file")
    export_parser.add_argument("--output", default=settings.export_filename)

    import_parser = commands.add_parser("import", help="Replace all data from a JSON file")
    import_parser.add_argument("file")
    import_parser.add_argument("--dry-run", action="store_true", help="Validate only")

    commands.add_parser("usage", help="Show storage usage")

    args = parser.parse_args()

    create_db_and_tables()
    workspace = Workspace(SQLKeyValueStore(engine))

    if args.command == "export":
        return export_command(workspace, args.output)
    if args.command == "import":
        return import_command(workspace, args.file, args.dry_run)
    return usage_command(workspace)


if __name__ == "__main__":
    sys.exit(main())
