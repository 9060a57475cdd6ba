"""
Bulk Import CLI Utility

Command-line front end for the employee, SIM card and asset imports.
Reads a JSON array of already-decoded spreadsheet rows and prints the
import summary (or the JSON result with --json).

Usage Examples:
    # Import employees
    python -m src.utils.import_cli employees employees.json

    # Import SIM cards into a project, recording the importing user
    python -m src.utils.import_cli sim-cards sims.json --project-id 3f2c... --actor hr.admin

    # Machine-readable result
    python -m src.utils.import_cli assets assets.json --json

Exit codes:
    0  every row imported
    1  some rows were rejected (see errors), or the input file is unusable
    2  the import was aborted (master data, entity or assignment save
       failed, or a code could not be generated)
"""

import sys
import json
import logging
import argparse
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.services.asset_import_service import import_assets
from src.services.database import initialize_app_database
from src.services.employee_import_service import import_employees
from src.services.exceptions import AssociationCommitError, BatchFatalError, SystemicError
from src.services.logging_utils import configure_logging
from src.services.sim_card_import_service import import_sim_cards
from src.utils.config import get_config

EXIT_OK = 0
EXIT_ROW_ERRORS = 1
EXIT_FATAL = 2


def load_rows(path: str):
    """
    Load a JSON array of row objects.

    Raises:
        ValueError: If the document is not a list of objects
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise ValueError(f"{path} must contain a JSON array of objects")
    return data


def run_import(command: str, rows, project_id=None, actor=None):
    """Dispatch to the import flow for a CLI command."""
    if command == "employees":
        return import_employees(rows, actor=actor)
    if command == "sim-cards":
        return import_sim_cards(rows, project_id=project_id, actor=actor)
    if command == "assets":
        return import_assets(rows, project_id=project_id, actor=actor)
    raise ValueError(f"Unknown command: {command}")


def _report(result, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.get_summary())


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Bulk import of employees, SIM cards and assets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Import employees:
    python -m src.utils.import_cli employees employees.json

  Import SIM cards into a project:
    python -m src.utils.import_cli sim-cards sims.json --project-id <id>

  Print the result as JSON:
    python -m src.utils.import_cli assets assets.json --json
""",
    )

    config = get_config()
    parser.add_argument("--version", action="version", version=f"{config.app_name} {config.app_version}")

    subparsers = parser.add_subparsers(dest="command", help="Import to run")

    for command, help_text in [
        ("employees", "Import employee rows"),
        ("sim-cards", "Import SIM card rows"),
        ("assets", "Import asset rows"),
    ]:
        command_parser = subparsers.add_parser(command, help=help_text)
        command_parser.add_argument("file", help="JSON file with an array of rows")
        command_parser.add_argument("--actor", help="Name recorded as creator/updater")
        command_parser.add_argument("--json", dest="as_json", action="store_true", help="Print the result as JSON")
        command_parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline phases")
        if command != "employees":
            command_parser.add_argument("--project-id", dest="project_id", help="Target project id")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_ROW_ERRORS

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        rows = load_rows(args.file)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}")
        return EXIT_ROW_ERRORS

    initialize_app_database()

    try:
        result = run_import(
            args.command,
            rows,
            project_id=getattr(args, "project_id", None),
            actor=args.actor,
        )
    except AssociationCommitError as e:
        print(f"ERROR: {e}")
        if e.result is not None:
            _report(e.result, args.as_json)
        return EXIT_FATAL
    except (BatchFatalError, SystemicError) as e:
        print(f"ERROR: {e}")
        return EXIT_FATAL

    _report(result, args.as_json)
    return EXIT_OK if result.success else EXIT_ROW_ERRORS


if __name__ == "__main__":
    sys.exit(main())
