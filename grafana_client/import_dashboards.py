#!/usr/bin/env python3
"""
Import every dashboard JSON file of the current directory into Grafana.

Files are sent as-is with ``set_raw_dashboard`` so they must already be
import requests (``{"dashboard": {...}, "overwrite": true}``). Dashboards
with the same name on the server are silently overwritten when the file
says so.

Usage:
    import-dashboards http://grafana.host:3000 api-key-string-here
    import-dashboards http://grafana.host:3000 admin:admin

The API key needs Admin rights.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .api_client import GrafanaClient
from .context import Context
from .exceptions import GrafanaError, ParseError

LOGGER = logging.getLogger("import_dashboards")

USAGE = "Usage: import-dashboards http://grafana.host:3000 api-key-string-here\n"

VERBOSE_FLAGS = ("-v", "--verbose")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse ``<server-url> <credentials> [-v]``.

    Anything but exactly two positionals prints the usage line and exits 0.
    Positionals may start with "-" (API keys, basic auth users).
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    flags = [a for a in argv if a in VERBOSE_FLAGS]
    positionals = [a for a in argv if a not in VERBOSE_FLAGS]
    if len(positionals) != 2:
        sys.stderr.write(USAGE)
        sys.exit(0)

    parser = argparse.ArgumentParser(prog="import-dashboards", description="Import dashboards from the current directory")
    parser.add_argument("server_url", help="Grafana base URL, e.g. http://grafana.host:3000")
    parser.add_argument("credentials", help="API key, or user:password for basic auth")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every request")
    return parser.parse_args(flags + ["--"] + positionals)


def dashboard_files(directory: str = ".") -> List[str]:
    """Sorted ``*.json`` regular files of ``directory``, not recursive."""
    return sorted(
        entry.name
        for entry in os.scandir(directory)
        if entry.name.endswith(".json") and entry.is_file()
    )


def import_directory(client: GrafanaClient, directory: str = ".", ctx: Optional[Context] = None) -> int:
    """
    Send every dashboard file of ``directory`` to the server.

    A file that cannot be read or imported is logged and skipped.

    Returns:
        Number of dashboards imported successfully
    """
    imported = 0
    for name in dashboard_files(directory):
        path = os.path.join(directory, name)
        try:
            with open(path, "rb") as f:
                raw_board = f.read()
        except OSError as e:
            LOGGER.error("Cannot read %s: %s", path, e)
            continue
        try:
            status = client.set_raw_dashboard(raw_board, ctx=ctx)
        except GrafanaError as e:
            LOGGER.error("error on importing dashboard from %s: %s", name, e)
            continue
        LOGGER.info("Imported %s (uid=%s, version=%s)", name, status.uid, status.version)
        imported += 1
    return imported


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        client = GrafanaClient(args.server_url, args.credentials)
    except ParseError as e:
        sys.stderr.write(f"Failed to create a client: {e}\n")
        return 1

    with client:
        imported = import_directory(client, ".", Context.background())
    LOGGER.info("Imported %d dashboard(s)", imported)
    return 0


if __name__ == "__main__":
    sys.exit(main())
