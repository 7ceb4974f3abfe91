#!/usr/bin/env python3
"""Project timeline CLI entrypoint."""

import sys
import argparse
import logging
from datetime import date
from pathlib import Path

from timeline.lib.config import load_settings
from timeline.lib.dates import is_valid_date, parse_iso_date
from timeline.lib.validate import PRIORITIES, PROJECT_STATUSES
from timeline.lib.constants import FILTER_ALL
from timeline.commands import validate as cmd_validate_module
from timeline.commands import import_project as cmd_import_module
from timeline.commands import remove as cmd_remove_module
from timeline.commands import list as cmd_list_module
from timeline.commands import show as cmd_show_module
from timeline.commands import hours as cmd_hours_module
from timeline.commands import fetch as cmd_fetch_module

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def iso_date(value: str) -> date:
    """argparse type for YYYY-MM-DD."""
    if not is_valid_date(value):
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")
    return parse_iso_date(value)


def add_filter_arguments(parser):
    parser.add_argument('--status', choices=[FILTER_ALL] + PROJECT_STATUSES, default=FILTER_ALL,
                        help='Only projects with this status')
    parser.add_argument('--priority', choices=[FILTER_ALL] + PRIORITIES, default=FILTER_ALL,
                        help='Only projects with this priority')
    parser.add_argument('--search', '-s', default='', help='Case-insensitive match on name or description')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='timeline', description='Project timeline dashboard CLI')
    parser.add_argument('--dir', '-C', type=Path, default=None,
                        help='Base directory holding timeline.env, repos.yaml and data/ (default: cwd)')
    parser.add_argument('--today', type=iso_date, default=None, help='Pin "today" (YYYY-MM-DD)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # timeline validate
    p_validate = subparsers.add_parser('validate', help='Validate a timeline document')
    p_validate.add_argument('file', type=Path, help='Path to timeline.yaml (or JSON)')
    p_validate.set_defaults(func=cmd_validate_module.cmd_validate)

    # timeline import
    p_import = subparsers.add_parser('import', help='Import a timeline document into the store')
    p_import.add_argument('file', type=Path, help='Path to timeline.yaml (or JSON)')
    p_import.add_argument('--update', '-u', action='store_true', help='Replace an existing project with the same id')
    p_import.set_defaults(func=cmd_import_module.cmd_import)

    # timeline remove
    p_remove = subparsers.add_parser('remove', help='Remove an imported project')
    p_remove.add_argument('id', help='Project ID')
    p_remove.set_defaults(func=cmd_remove_module.cmd_remove)

    # timeline list
    p_list = subparsers.add_parser('list', help='List projects')
    add_filter_arguments(p_list)
    p_list.set_defaults(func=cmd_list_module.cmd_list)

    # timeline show
    p_show = subparsers.add_parser('show', help='Show project details and metrics')
    p_show.add_argument('id', help='Project ID')
    p_show.set_defaults(func=cmd_show_module.cmd_show)

    # timeline hours
    p_hours = subparsers.add_parser('hours', help='Monthly hours across projects')
    add_filter_arguments(p_hours)
    p_hours.set_defaults(func=cmd_hours_module.cmd_hours)

    # timeline fetch
    p_fetch = subparsers.add_parser('fetch', help='Fetch timeline documents from tracked repositories')
    p_fetch.add_argument('--repos', type=Path, help='Repository list (default: repos.yaml)')
    p_fetch.add_argument('--output', '-o', type=Path, help='Aggregate output file (default: data/projects.json)')
    p_fetch.set_defaults(func=cmd_fetch_module.cmd_fetch)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    base_dir = args.dir or Path.cwd()
    try:
        settings = load_settings(base_dir)
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 2

    return args.func(args, settings)


if __name__ == '__main__':
    sys.exit(main())
