"""
Command-line interface for data migration.

Exports a snapshot to a JSON file, or imports one, directly against the
configured database. The acting user must hold the admin role.

Usage:
    council-portal-migrate export --user-id USER_ID --output snapshot.json
    council-portal-migrate import --user-id USER_ID --input snapshot.json
    council-portal-migrate import --user-id USER_ID --input snapshot.json --clear
    python -m council_portal.cli.migration_cli --help
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from ..config import settings
from ..db.session import Database
from ..exceptions import AuthorizationError
from ..services.migration_service import DataMigrationService, ImportOptions, summarize_stats


logger = logging.getLogger(__name__)


async def run_export(user_id: str, output_file: str, database_url: Optional[str]) -> int:
    """
    Write a snapshot of every table to ``output_file``.

    Returns:
        Process exit code
    """
    database = Database(database_url)
    await database.initialize()

    try:
        async with database.session() as session:
            payload = await DataMigrationService(session).export_all_data(user_id)

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

        counts = ", ".join(f"{table}={len(rows)}" for table, rows in payload["data"].items())
        print(f"Exported to {output_path.absolute()} ({counts})")
        return 0

    except AuthorizationError as e:
        print(f"Export refused: {e.message}")
        return 2

    finally:
        await database.close()


async def run_import(
    user_id: str,
    input_file: str,
    database_url: Optional[str],
    clear_existing_data: bool,
    skip_duplicates: bool,
) -> int:
    """Import ``input_file`` and print per-table stats."""
    json_data = Path(input_file).read_text(encoding="utf-8")

    database = Database(database_url)
    await database.initialize()

    try:
        async with database.session() as session:
            result = await DataMigrationService(session).import_all_data(
                user_id,
                json_data,
                ImportOptions(
                    clear_existing_data=clear_existing_data,
                    skip_duplicates=skip_duplicates,
                ),
            )

        print(result.message)
        if result.stats:
            for line in summarize_stats(result.stats):
                print(f"  {line}")
        return 0 if result.success else 1

    except AuthorizationError as e:
        print(f"Import refused: {e.message}")
        return 2

    finally:
        await database.close()


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Export or import Council Portal data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--database-url",
        type=str,
        help="Database URL (defaults to the configured database)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    export_parser = commands.add_parser("export", help="Write a snapshot to a JSON file")
    export_parser.add_argument("--user-id", required=True, help="Acting admin user id")
    export_parser.add_argument("--output", required=True, help="Output JSON file")

    import_parser = commands.add_parser("import", help="Import a snapshot JSON file")
    import_parser.add_argument("--user-id", required=True, help="Acting admin user id")
    import_parser.add_argument("--input", required=True, help="Snapshot JSON file")
    import_parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete all existing data before importing"
    )
    import_parser.add_argument(
        "--no-skip-duplicates",
        action="store_true",
        help="Insert records even when a matching record exists"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.app.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.command == "export":
        exit_code = asyncio.run(run_export(args.user_id, args.output, args.database_url))
    else:
        exit_code = asyncio.run(
            run_import(
                args.user_id,
                args.input,
                args.database_url,
                clear_existing_data=args.clear,
                skip_duplicates=not args.no_skip_duplicates,
            )
        )

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
