#!/usr/bin/env python3
"""
Visitor Entry System – command-line runner.

Drives the same `VisitorManager` as the Streamlit page:

    visitor-entry list
    visitor-entry add --name Ada --email ada@example.com --phone 555-0100 --purpose Meeting
    visitor-entry update 3 --check-out 2024-05-01T17:30
    visitor-entry delete 3
    visitor-entry ui            # launches `streamlit run ui/app.py`

Settings resolve from `visitor_entry.yaml`, then VISITOR_* environment
variables, then `--api-url` / `--timeout` / `--debug`.
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from typing import Dict, List, Optional

from src.config import load_settings
from src.errors import ConfigError
from src.io_paths import UI_APP_PATH
from src.ui_logic import VisitorManager
from src.utils_logging import configure_logging
from src.visitor_model import use_user_locale
from ui.state import build_manager
from ui.utils.helpers import visitors_to_dataframe


# argparse dest -> draft input name
_FIELD_OPTIONS: Dict[str, str] = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "purpose": "purpose",
    "check_in": "checkInTime",
    "check_out": "checkOutTime",
}


def _add_field_options(p: argparse.ArgumentParser, *, required: bool) -> None:
    p.add_argument("--name", required=required)
    p.add_argument("--email", required=required)
    p.add_argument("--phone", required=required)
    p.add_argument("--purpose", required=required)
    p.add_argument("--check-in", dest="check_in", help="Check-in time, e.g. 2024-05-01T09:00")
    p.add_argument("--check-out", dest="check_out", help="Check-out time, e.g. 2024-05-01T17:30")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    `--debug` defaults to None so an unset flag does not mask VISITOR_DEBUG.
    """
    p = argparse.ArgumentParser(description="Visitor Entry System – record visitor check-ins and check-outs")
    p.add_argument("--api-url", type=str, help="API root, e.g. http://localhost:8083/api")
    p.add_argument("--timeout", type=float, help="Request timeout in seconds")
    p.add_argument("--debug", action="store_true", default=None)
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Print all visitors")

    add = sub.add_parser("add", help="Record a new visitor")
    _add_field_options(add, required=True)

    update = sub.add_parser("update", help="Change fields of an existing visitor")
    update.add_argument("id", help="Visitor id")
    _add_field_options(update, required=False)

    delete = sub.add_parser("delete", help="Remove a visitor")
    delete.add_argument("id", help="Visitor id")

    sub.add_parser("ui", help="Launch the Streamlit page")
    return p.parse_args(argv)


def _apply_fields(manager: VisitorManager, args: argparse.Namespace) -> None:
    for dest, input_name in _FIELD_OPTIONS.items():
        value = getattr(args, dest, None)
        if value is not None:
            manager.set_field(input_name, value)


def _report_error(manager: VisitorManager) -> int:
    print(f"Error: {manager.get_state().error}", file=sys.stderr)
    return 1


def run_command(manager: VisitorManager, args: argparse.Namespace) -> int:
    """Execute one subcommand against the manager and return an exit code."""
    if not manager.fetch_visitors():
        return _report_error(manager)

    if args.command == "list":
        visitors = manager.get_state().visitors
        if not visitors:
            print("No visitors found.")
        else:
            print(visitors_to_dataframe(visitors).to_string())
        return 0

    if args.command == "add":
        _apply_fields(manager, args)
        if not manager.submit():
            return _report_error(manager)
        print("Visitor added.")
        return 0

    visitor = manager.find_visitor(args.id)
    if visitor is None:
        print(f"Error: no visitor with id {args.id}", file=sys.stderr)
        return 1

    if args.command == "update":
        manager.start_edit(visitor)
        _apply_fields(manager, args)
        if not manager.submit():
            return _report_error(manager)
        print(f"Visitor {visitor.id} updated.")
        return 0

    if args.command == "delete":
        if not manager.delete_visitor(visitor.id):
            return _report_error(manager)
        print(f"Visitor {visitor.id} deleted.")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(api_url=args.api_url, timeout=args.timeout, debug=args.debug)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.log_dir, debug=settings.debug)
    use_user_locale()
    log = logging.getLogger("visitor_entry")
    log.debug("Using API at %s", settings.api_url)

    if args.command == "ui":
        env = dict(os.environ, VISITOR_API_URL=settings.api_url, VISITOR_DEBUG=str(settings.debug))
        if settings.timeout is not None:
            env["VISITOR_API_TIMEOUT"] = str(settings.timeout)
        return subprocess.call([sys.executable, "-m", "streamlit", "run", str(UI_APP_PATH)], env=env)

    manager = build_manager(settings)
    return run_command(manager, args)


if __name__ == "__main__":
    sys.exit(main())
