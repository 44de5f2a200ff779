#!/usr/bin/env python3
import argparse
import logging
import sys

import requests

from cf_memory_usage import __version__
from cf_memory_usage.client import CloudFoundryClient
from cf_memory_usage.config import load_settings
from cf_memory_usage.errors import ConfigurationError, MalformedResourceError
from cf_memory_usage.report import report_memory_usage


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="cf-report-memory-usage",
        description="Report memory usage and quota for every org, space, app and instance.",
    )
    parser.add_argument(
        "--output-json",
        action="store_true",
        help="if set sends JSON to stdout instead of a rendered table",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="if set suppresses printing of progress messages to stderr",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def log_level(args) -> int:
    if args.debug:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    return logging.INFO


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=log_level(args), format="%(asctime)s %(message)s")

    try:
        settings = load_settings()
        with CloudFoundryClient(settings, quiet=args.quiet) as client:
            output = report_memory_usage(client, output_json=args.output_json)
    except (ConfigurationError, requests.RequestException, MalformedResourceError) as e:
        logging.error("%s", e)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
