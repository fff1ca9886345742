"""Run the purge service: ``python -m cachepurge``."""

import argparse
import asyncio
import logging
import sys

from cachepurge.app import build_service
from cachepurge.core.entities.purge_config import PurgeConfig
from cachepurge.core.exceptions import ConfigurationError

logger = logging.getLogger("cachepurge")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cachepurge",
        description="Purge reverse-proxy caches on storage change events.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="TOML config file (default: read from environment variables)",
    )
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser.parse_args(argv)


async def serve(config: PurgeConfig) -> None:
    async with build_service(config) as service:
        await service.run()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        if args.config:
            config = PurgeConfig.from_file(args.config)
        else:
            config = PurgeConfig.from_env()
    except ConfigurationError as e:
        print(f"cachepurge: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
