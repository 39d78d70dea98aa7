#!/usr/bin/env python3
"""List the tests of one suite file and print them as JSON."""

import argparse
import asyncio
import json
import logging
import sys

from suitelist.config import defaults
from suitelist.listing import ListTestError, list_tests_of_file


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="suitelist", description="List the tests of a suite file without running them."
    )
    parser.add_argument("suite_file", help="Suite file to list")
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=defaults.LIST_TIMEOUT_MS,
        help="Listing budget in milliseconds, 0 for none (default: %(default)s)",
    )
    parser.add_argument(
        "--interface",
        default=defaults.DEFAULT_INTERFACE,
        help="Interface module name or path (default: %(default)s)",
    )
    parser.add_argument("--param", default="", help="Parameter forwarded to the interface")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.timeout_ms < 0:
        parser.error("--timeout-ms must be >= 0")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        tests = asyncio.run(
            list_tests_of_file(args.timeout_ms, args.interface, args.param, args.suite_file)
        )
    except ListTestError as e:
        print(e.stack, file=sys.stderr)
        return 2 if e.timeout else 1

    json.dump([t.to_dict() for t in tests], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
