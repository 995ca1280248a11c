"""Fetch the facility topology and write it as nested JSON."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import httpx

from facility_topology.config.settings import Settings
from facility_topology.core.logging import configure_logging
from facility_topology.errors import TopologyError
from facility_topology.services import TopologyClient
from facility_topology.spaces import iter_spaces
from facility_topology.storage import JsonStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch the Digital Twins space hierarchy")
    parser.add_argument("--api-url", help="Management API base URL (overrides TOPOLOGY_MANAGEMENT_API_URL)")
    parser.add_argument("--token", help="Bearer token (overrides TOPOLOGY_ACCESS_TOKEN)")
    parser.add_argument("--output-dir", type=Path, help="Directory for the JSON output")
    parser.add_argument(
        "--output-name",
        help="Output filename; defaults to a timestamped topology-<UTC>.json",
    )
    parser.add_argument("--log-level", help="Logging level (overrides TOPOLOGY_LOG_LEVEL)")
    parser.add_argument(
        "--print-tree",
        action="store_true",
        help="Log the resulting hierarchy as an indented tree",
    )
    return parser


def _default_filename() -> str:
    return f"topology-{datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%SZ')}.json"


async def run(settings: Settings, *, output_name: Optional[str], print_tree: bool) -> Path:
    client = TopologyClient(**settings.client_kwargs())
    spaces = await client.get_spaces()

    if print_tree:
        for depth, space in iter_spaces(spaces):
            logger.info("%s%s [%s] %s", "  " * depth, space.friendly_name or space.name, space.type, space.id)

    store = JsonStore(settings.output_dir)
    path = await store.write(spaces, filename=output_name or _default_filename())
    logger.info("Wrote %s root spaces to %s", len(spaces), path)
    return path


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    settings = Settings()

    if args.api_url:
        settings.management_api_url = args.api_url if args.api_url.endswith("/") else f"{args.api_url}/"
    if args.token:
        settings.access_token = args.token
    if args.output_dir:
        settings.output_dir = args.output_dir.expanduser()
    if args.log_level:
        settings.log_level = args.log_level

    configure_logging(settings.log_level, settings.log_dir)
    settings.ensure_directories()

    try:
        asyncio.run(run(settings, output_name=args.output_name, print_tree=args.print_tree))
    except (TopologyError, httpx.HTTPError):
        logger.exception("Topology fetch failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
