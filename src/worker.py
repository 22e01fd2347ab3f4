from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Sequence

from src.adapters.factory import build_map_seed_service, build_pipeline
from src.app.config import PipelineConfig
from src.domain.exceptions import (
    AlreadyRunning,
    CacheCorrupt,
    CacheWriteFailed,
    FetchFailed,
    GuardReleaseFailed,
    PublishFailed,
)

logger = logging.getLogger("src.worker")

EXIT_OK = 0
EXIT_ALREADY_RUNNING = 1
EXIT_CACHE_CORRUPT = 2
EXIT_GUARD_RELEASE_FAILED = 3
EXIT_MAP_SEED_FAILED = 4
EXIT_PUBLISH_FAILED = 5
EXIT_CONFIG_INVALID = 6


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile VVR bus stops with OpenStreetMap bus stop elements."
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="debug output (implies --verbose)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose mode")
    parser.add_argument(
        "--seed-map",
        action="store_true",
        help="fetch fresh Overpass data into the map cache instead of reconciling",
    )
    parser.add_argument(
        "--no-output",
        action="store_true",
        help="do not write the matches JSON file",
    )
    return parser.parse_args(argv)


def _configure_logging(*, verbose: bool, debug: bool) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        stream=sys.stdout,
        level=level,
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d %(message)s",
    )


def _seed_map(config: PipelineConfig) -> int:
    try:
        build_map_seed_service(config).seed()
    except (FetchFailed, CacheWriteFailed) as exc:
        logger.error("Map cache not updated: %s", exc)
        return EXIT_MAP_SEED_FAILED
    return EXIT_OK


def _reconcile(config: PipelineConfig, *, write_output: bool) -> int:
    result = build_pipeline(config, write_output=write_output).run()
    logger.info(
        "Run finished: %d localities cached, %d groups",
        len(result.dataset),
        len(result.reconciliation.groups),
    )
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    start = time.monotonic()
    args = _parse_args(argv)
    _configure_logging(verbose=args.verbose or args.debug, debug=args.debug)

    try:
        config = PipelineConfig.from_env()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG_INVALID
    logger.debug("Configured localities: %s", ", ".join(config.localities))

    try:
        if args.seed_map:
            return _seed_map(config)
        return _reconcile(config, write_output=not args.no_output)
    except AlreadyRunning as exc:
        print(f"abort: {exc}", file=sys.stderr)
        return EXIT_ALREADY_RUNNING
    except CacheCorrupt as exc:
        logger.error("%s", exc)
        return EXIT_CACHE_CORRUPT
    except PublishFailed as exc:
        logger.error("%s", exc)
        return EXIT_PUBLISH_FAILED
    except GuardReleaseFailed as exc:
        logger.critical("%s", exc)
        return EXIT_GUARD_RELEASE_FAILED
    finally:
        logger.debug("Elapsed time %.2fs", time.monotonic() - start)


if __name__ == "__main__":
    sys.exit(main())
