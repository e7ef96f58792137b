"""
Command-line interface for pemon.

This module provides the main CLI entry point: it parses arguments, loads
the configuration, runs one sampling session until SIGINT/SIGTERM (or an
error) and prints the aggregate report.
"""

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional

from ..analysis import format_report, summarize
from ..collectors import CollectorFactory
from ..config import get_config, get_config_info, set_config_path, validate_interval
from ..config.validators import LOG_LEVELS
from ..errors import PemonError
from ..monitoring import SamplingLoop
from ..orchestration import SignalHandler
from ..validation import ValidationError, describe_error, handle_cli_error, validate_positive_integer

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pemon",
        description="A simple utility to collect CPU frequencies, utilization and temperatures.",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=str,
        help="Seconds delayed before next collection. Defaults to the configured "
             "sampling.interval_seconds (3 seconds).",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to a config.toml file.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level. Defaults to the configured logging.level.",
    )
    parser.add_argument(
        "--max-ticks",
        type=str,
        help="Stop after collecting this many samples.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one sampling session.

    Returns:
        Process exit status: 1 when setup fails, 0 otherwise.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or "INFO")

    try:
        if args.config is not None:
            set_config_path(args.config)
        app_config = get_config()
    except (OSError, ValueError, ValidationError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    if args.log_level is None:
        configure_logging(app_config.logging.level)

    try:
        interval = app_config.sampling.interval_seconds
        if args.interval is not None:
            interval = validate_interval(args.interval, field_name="--interval argument")
        max_ticks = None
        if args.max_ticks is not None:
            max_ticks = validate_positive_integer(
                args.max_ticks, min_value=1, field_name="--max-ticks argument"
            )
    except ValidationError as e:
        handle_cli_error(error=e, context="argument validation", exit_code=1, logger=logger)

    config_info = get_config_info()
    logger.info("pemon starts running...")
    logger.info(
        f"Configuration: {config_info['config_path']} "
        f"(explicit: {config_info['config_path_explicit']}), sampling every {interval}s"
    )

    factory = CollectorFactory(app_config.sensors, app_config.storage)
    cancel_event = threading.Event()
    loop = SamplingLoop(
        interval_seconds=interval,
        sensor_reader=factory.create_sensor_reader(),
        storage_reader=factory.create_storage_reader(),
        cancel_event=cancel_event,
        stat_path=app_config.sampling.stat_path,
        cpuinfo_path=app_config.sampling.cpuinfo_path,
        max_ticks=max_ticks,
    )

    with SignalHandler(cancel_event):
        try:
            loop.setup()
        except PemonError as e:
            handle_cli_error(error=e, context="sampler setup", exit_code=1, logger=logger)

        outcome = loop.run()

    if outcome.errored:
        logger.warning(
            f"Sampling ended early after {len(outcome.log)} samples: {describe_error(outcome.error)}"
        )

    try:
        report = summarize(outcome.log, app_config.aggregation.buckets)
    except PemonError as e:
        logger.error(f"No report produced: {describe_error(e)}")
    else:
        print(format_report(report))

    loop.terminate()
    logger.info("pemon terminated")
    return 0


def main_cli() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_cli()
