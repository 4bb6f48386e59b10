#!/usr/bin/env python3
"""
CLI for sfdx config inspection and editing.

Usage:
    sfdx-config list                       # List every resolved property
    sfdx-config get <key>...               # Show value, location and path
    sfdx-config set <key>=<value>...       # Set in the project config
    sfdx-config set -g <key>=<value>...    # Set in the global config
    sfdx-config unset [-g] <key>...        # Remove from a config file
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from sfdx_config.config.aggregator import ConfigAggregator
from sfdx_config.config.errors import ConfigError
from sfdx_config.config.models import ConfigInfo
from sfdx_config.config.settings import Settings, get_settings
from sfdx_config.config.store import ConfigStore
from sfdx_config.utils.logging import configure_logging


# ANSI color codes
class Colors:
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def print_error(message: str) -> None:
    print(f"{Colors.RED}Error: {message}{Colors.RESET}", file=sys.stderr)


def print_info_table(infos: List[ConfigInfo]) -> None:
    """Print key, value, location and path columns."""
    if not infos:
        print("No config properties are set.")
        return

    key_width = max(len("KEY"), *(len(i.key) for i in infos))
    value_width = max(len("VALUE"), *(len(str(i.value)) for i in infos))

    print(f"{Colors.BOLD}{'KEY':{key_width}}  {'VALUE':{value_width}}  {'LOCATION':12}  PATH{Colors.RESET}")
    for info in infos:
        location = info.location.value if info.location else ""
        value = "" if info.value is None else str(info.value)
        print(
            f"{info.key:{key_width}}  {Colors.CYAN}{value:{value_width}}{Colors.RESET}  "
            f"{location:12}  {Colors.GRAY}{info.path or ''}{Colors.RESET}"
        )


def emit(infos: List[ConfigInfo], as_json: bool) -> None:
    if as_json:
        print(json.dumps([i.to_dict() for i in infos], indent=2))
    else:
        print_info_table(infos)


async def cmd_list(args, settings: Settings) -> int:
    """List all resolved properties."""
    aggregator = await ConfigAggregator.create(settings=settings)
    emit(aggregator.list_config_info(), args.json)
    return 0


async def cmd_get(args, settings: Settings) -> int:
    """Show the resolved info for the given keys."""
    aggregator = await ConfigAggregator.create(settings=settings)
    infos = [aggregator.get_info(key) for key in args.keys]
    emit(infos, args.json)
    return 0


def parse_assignment(text: str) -> tuple:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected <key>=<value>, got '{text}'")
    return key, value


async def cmd_set(args, settings: Settings) -> int:
    """Write properties to the project or global config."""
    store = await ConfigStore.create(ConfigStore.get_default_options(args.is_global), settings)
    await store.read()
    for key, value in args.assignments:
        store.set(key, value)
    await store.write()

    for key, value in args.assignments:
        print(f"{Colors.GREEN}Set {key}={value}{Colors.RESET} in {store.get_path()}")
    return 0


async def cmd_unset(args, settings: Settings) -> int:
    """Remove properties from the project or global config."""
    store = await ConfigStore.create(ConfigStore.get_default_options(args.is_global), settings)
    await store.read()
    removed = [key for key in args.keys if store.unset(key)]
    if removed:
        await store.write()

    for key in args.keys:
        if key in removed:
            print(f"{Colors.GREEN}Unset {key}{Colors.RESET} in {store.get_path()}")
        else:
            print(f"{Colors.YELLOW}{key} was not set{Colors.RESET} in {store.get_path()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfdx-config",
        description="Inspect and edit sfdx config properties",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list                          List resolved properties
  %(prog)s get defaultusername           Show where defaultusername comes from
  %(prog)s set defaultusername=me@my.org Set it in the project config
  %(prog)s set -g logLevel=debug         Set it in the global config
  %(prog)s unset -g logLevel             Remove it from the global config
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list
    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List resolved properties")
    list_parser.add_argument("--json", action="store_true", help="Print JSON")
    list_parser.set_defaults(func=cmd_list)

    # get
    get_parser = subparsers.add_parser("get", help="Show resolved properties")
    get_parser.add_argument("keys", nargs="+", help="Property keys")
    get_parser.add_argument("--json", action="store_true", help="Print JSON")
    get_parser.set_defaults(func=cmd_get)

    # set
    set_parser = subparsers.add_parser("set", help="Set properties")
    set_parser.add_argument("assignments", nargs="+", type=parse_assignment, help="<key>=<value> pairs")
    set_parser.add_argument("-g", "--global", dest="is_global", action="store_true", help="Use the global config")
    set_parser.set_defaults(func=cmd_set)

    # unset
    unset_parser = subparsers.add_parser("unset", help="Remove properties")
    unset_parser.add_argument("keys", nargs="+", help="Property keys")
    unset_parser.add_argument("-g", "--global", dest="is_global", action="store_true", help="Use the global config")
    unset_parser.set_defaults(func=cmd_unset)

    return parser


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    try:
        return asyncio.run(args.func(args, settings))
    except ConfigError as e:
        print_error(str(e))
        return 1
    except UnicodeDecodeError as e:
        print_error(f"Config file is not valid UTF-8: {e}")
        return 1
    except OSError as e:
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
