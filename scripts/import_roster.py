"""Import a spreadsheet into an attendance list from the command line.

Usage:
    python scripts/import_roster.py students.xlsx --list "Grade 5 A"
    python scripts/import_roster.py students.csv --list-id 1718000000000 --cross-roster
"""

from __future__ import annotations

import argparse
import importlib
import mimetypes
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.roll_call.roll_call.common.logging_setup import setup_logging
from src.roll_call.roll_call.container import build_container
from src.roll_call.roll_call.core.exceptions import DomainError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import students from .xlsx/.xls/.csv into a list")
    parser.add_argument("file", type=Path)
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--list", dest="list_name", help="create a new list with this name")
    target.add_argument("--list-id", help="append to an existing list")
    parser.add_argument("--cross-roster", action="store_true", help="also skip students already on the list")
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = importlib.import_module(get_settings_module())
    setup_logging(debug=args.debug, log_file=getattr(settings, "LOG_FILE", None))

    container = build_container(
        db_config={"url": settings.DATABASE_URL, "max_upload_bytes": settings.MAX_UPLOAD_BYTES}
    )
    session = container.session

    if args.list_name:
        if session.create_list(args.list_name) is None:
            print("ERROR: could not create the list", file=sys.stderr)
            return 1
    elif not session.select_list(args.list_id):
        print(f"ERROR: list {args.list_id} not found", file=sys.stderr)
        return 1

    media_type, _ = mimetypes.guess_type(args.file.name)
    try:
        result = session.import_file(
            args.file.read_bytes(),
            file_name=args.file.name,
            media_type=media_type,
            cross_roster=args.cross_roster,
        )
    except (OSError, DomainError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if session.has_unsaved_changes and not session.manual_save():
        print("ERROR: the list could not be saved", file=sys.stderr)
        return 1

    summary = session.summary()
    print(
        f"OK: {len(result.students)} imported, {result.duplicates_found} duplicates removed "
        f"-> list {session.current.roster_id} total={summary.total} "
        f"present={summary.present} absent={summary.absent}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
