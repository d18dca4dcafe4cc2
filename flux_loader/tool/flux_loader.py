"""Command line tool for inspecting the resources in local manifests."""

import argparse
import asyncio
import logging
import sys
import traceback

from flux_loader.exceptions import LoaderException
from . import get, values

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for loading local kubernetes manifests.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    get.GetAction.register(subparsers)
    values.ValuesAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Flux-loader command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        asyncio.run(action.run(**vars(args)))
    except LoaderException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("flux-loader error:", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
