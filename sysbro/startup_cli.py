"""Command line front end for managing start-up applications."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .autostart import AutoStartManager

EMPTY_MESSAGE = "No boot application found"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysbro-startup-apps", description="App start-up management"
    )
    parser.add_argument("--dir", help="autostart directory to manage")
    parser.add_argument("--locale", help="locale used for localized names")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("list", help="list start-up applications")

    add = commands.add_parser("add", help="add a new start-up application")
    add.add_argument("name")
    add.add_argument("exec")

    edit = commands.add_parser("edit", help="modify a start-up application")
    edit.add_argument("path")
    edit.add_argument("--name")
    edit.add_argument("--icon")
    edit.add_argument("--exec", dest="app_exec")

    remove = commands.add_parser("remove", help="delete a start-up application")
    remove.add_argument("path")

    commands.add_parser("clear", help="delete all start-up applications")

    imp = commands.add_parser("import", help="copy .desktop files into autostart")
    imp.add_argument("files", nargs="+")
    return parser


def _resolve(manager: AutoStartManager, path: str) -> str:
    candidate = Path(path)
    if not candidate.is_absolute() and not candidate.exists():
        candidate = manager.path / candidate
    return str(candidate.absolute())


def _list(manager: AutoStartManager) -> int:
    apps = manager.apps
    if not apps:
        print(EMPTY_MESSAGE)
        return 0
    for app in apps:
        print(f"{app.name}\t{app.exec}\t{app.file_path}")
    return 0


def _edit(manager: AutoStartManager, args: argparse.Namespace) -> int:
    file_path = _resolve(manager, args.path)
    app = next((entry for entry in manager.apps if entry.file_path == file_path), None)
    if app is None:
        print(f"error: no start-up application at {file_path}", file=sys.stderr)
        return 1
    name = app.name if args.name is None else args.name
    icon = app.icon_name if args.icon is None else args.icon
    app_exec = app.exec if args.app_exec is None else args.app_exec
    if not name or not app_exec:
        print("error: application name and exec must not be empty", file=sys.stderr)
        return 1
    manager.edit_app(file_path, name, icon, app_exec)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the start-up application manager; return the exit status."""
    args = _build_parser().parse_args(argv)
    manager = AutoStartManager(args.dir, args.locale)
    command = args.command or "list"

    if command == "list":
        return _list(manager)
    if command == "add":
        if not args.name or not args.exec:
            print("error: application name and exec must not be empty", file=sys.stderr)
            return 1
        print(manager.add_new_app(args.name, args.exec))
        return 0
    if command == "edit":
        return _edit(manager, args)
    if command == "remove":
        manager.remove_app(_resolve(manager, args.path))
        return 0
    if command == "clear":
        manager.delete_all_apps()
        return 0
    if command == "import":
        for path in manager.import_files(args.files):
            print(path)
        return 0
    return 1


if __name__ == "__main__":
    sys.exit(main())