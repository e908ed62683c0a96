#!/usr/bin/env python
"""
Delete click-ad grants whose cooldown window has passed.

Stale grants are also removed lazily when a user touches them; this sweep
keeps the shared grant table small. Run it from cron or a scheduler.

Usage:
    uv run python run_reaper.py
    uv run python run_reaper.py --log-level DEBUG
"""

import argparse
import asyncio
import logging

from api.dependencies import get_container

logger = logging.getLogger("reaper")


async def sweep() -> int:
    return await get_container().cooldowns.sweep_expired()


def main():
    parser = argparse.ArgumentParser(description="Sweep expired click-ad grants")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    removed = asyncio.run(sweep())
    logger.info("Removed %d expired grant(s)", removed)


if __name__ == "__main__":
    main()
