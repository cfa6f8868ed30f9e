"""Command line entry point for inspecting and changing stored preferences."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import IdentityMeta, PreferencesClient, PreferencesHost, SessionState
from .channel import LoopbackHub, RemoteError


def parse_value(raw: str) -> Any:
    """Interpret ``raw`` as JSON, keeping it as plain text when that fails."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Application preferences")
    parser.add_argument(
        "--user-data-dir",
        type=Path,
        help="Directory holding the settings files. Defaults to the platform location.",
    )
    parser.add_argument(
        "--settings-file",
        help="Explicit path of the preferences file (a leading ~ is expanded).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("show", help="Print every stored preference.")
    get_cmd = commands.add_parser("get", help="Print a single preference.")
    get_cmd.add_argument("name")
    set_cmd = commands.add_parser("set", help="Change a preference.")
    set_cmd.add_argument("name")
    set_cmd.add_argument("value", help="JSON value; anything else is stored as text.")
    commands.add_parser("meta", help="Print the application identifiers.")
    session_cmd = commands.add_parser("session", help="Print a window session.")
    session_cmd.add_argument("--window", type=int, default=0, help="Window index.")
    return parser


async def _run(args: argparse.Namespace) -> Any:
    if args.command == "meta":
        meta = IdentityMeta(user_data_dir=args.user_data_dir)
        return {"appId": await meta.get_app_id(), "aid": await meta.get_anonymized_id()}

    if args.command == "session":
        session = SessionState(args.window, user_data_dir=args.user_data_dir)
        return await session.load()

    options: dict[str, Any] = {}
    if args.settings_file:
        options["file"] = args.settings_file
    host = PreferencesHost(user_data_dir=args.user_data_dir, **options)
    hub = LoopbackHub()
    host.observe(hub)
    connection = hub.connect()
    client = PreferencesClient(connection)
    try:
        if args.command == "set":
            value = parse_value(args.value)
            await client.store(args.name, value)
            return {"name": args.name, "value": value}
        document = await client.load()
        if args.command == "get":
            return document.get(args.name)
        return document
    finally:
        connection.close()
        host.unobserve()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        output = asyncio.run(_run(args))
    except (RemoteError, ValueError) as exc:
        parser.exit(1, f"error: {exc}\n")

    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()
