"""CLI entry point: parse args, register plugin modules, report the result."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cerus.core.config import load_config
from cerus.core.fallbacks import print_error, warn_best_effort
from cerus.core.output import colorize, display_entries
from cerus.host import Cerus
from cerus.plugins.discovery import register_modules
from cerus.plugins.errors import PluginError
from cerus.plugins.policy import HOST_BUILTINS

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cerus",
        description="Register plugin modules on a fresh host and inspect the result.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="path to a JSON config file (default: $CERUS_CONFIG)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("list", "list registered plugins"),
        ("capabilities", "list namespace keys and the plugin owning each"),
    ):
        p = sub.add_parser(command, help=help_text)
        p.add_argument(
            "modules",
            nargs="+",
            metavar="MODULE",
            help="importable module exporting PLUGIN or plugin(); added in order",
        )
        p.add_argument("--json", action="store_true", help="print JSON instead of a table")
    return parser


def cmd_list(args, host: Cerus) -> None:
    descriptors = list(host.plugins())
    display_entries(
        args,
        [d.to_dict() for d in descriptors],
        label="Plugins",
        empty_msg="No plugins registered.",
        columns=("Name", "Version", "Depends on", "Capabilities"),
        row_fn=lambda e: [
            e["name"],
            e["version"] or "-",
            ", ".join(e["dependencies"]) or "-",
            ", ".join(e["capabilities"]) or "-",
        ],
    )


def cmd_capabilities(args, host: Cerus) -> None:
    registry = host.plugins()
    entries = []
    for key in host.namespace:
        owner = registry.owner_of(key)
        if owner is not None:
            entries.append({"key": key, "owner": owner.name})
        elif key in HOST_BUILTINS:
            entries.append({"key": key, "owner": "host"})
    display_entries(
        args,
        entries,
        label="Capabilities",
        empty_msg="No capabilities bound.",
        columns=("Key", "Owner"),
        row_fn=lambda e: [e["key"], e["owner"]],
    )


COMMAND_HANDLERS = {
    "list": cmd_list,
    "capabilities": cmd_capabilities,
}


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.config is not None and not Path(args.config).exists():
        warn_best_effort(f"config file {args.config} not found; using defaults")
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print_error(str(exc))
        return 1

    host = Cerus(config=config)
    try:
        descriptors = register_modules(host.plugins(), args.modules)
    except (PluginError, ImportError) as exc:
        print_error(str(exc))
        return 1
    logger.debug("Registered %d plugin(s)", len(descriptors))

    handler = COMMAND_HANDLERS[args.command]
    try:
        handler(args, host)
    except KeyboardInterrupt:
        print(colorize("\nInterrupted.", "dim"))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
