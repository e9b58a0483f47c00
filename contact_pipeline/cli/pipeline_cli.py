"""
Command-line interface for the contact pipeline.

Usage:
    contact-pipeline start [--config <path>] [options]
    contact-pipeline resume [--config <path>] [options]
"""

import argparse
import sys

from contact_pipeline.config import ConfigError, load_config
from contact_pipeline.observability import metrics
from contact_pipeline.observability.logger import configure_logging, get_logger
from contact_pipeline.pipeline import create_pipeline
from contact_pipeline.resume import APSchedulerScheduler
from contact_pipeline.stores.connection import DatabaseConnectionPool

logger = get_logger(__name__)


def run_command(args) -> int:
    """
    Execute a start or resume command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    configure_logging(level=config.log_level, format_type=config.log_format)
    logger.info(f"Running {args.command} with backend {config.backend}")

    pool = None
    scheduler = APSchedulerScheduler()
    try:
        if config.backend == "postgres":
            pool = DatabaseConnectionPool()
            pool.open()

        pipeline = create_pipeline(config, scheduler, pool=pool)
        outcome = pipeline.resume() if args.command == "resume" else pipeline.start()

        logger.info("=" * 60)
        logger.info(f"RUN {outcome.status.upper()}")
        logger.info("=" * 60)
        logger.info(f"Records processed: {outcome.counters.processed_count}")
        logger.info(f"Errors encountered: {outcome.counters.error_count}")
        logger.info(f"Elapsed: {outcome.elapsed_seconds:.3f}s")
        if outcome.checkpoint is not None:
            logger.info(
                f"Checkpoint at offset {outcome.checkpoint.next_offset} of "
                f"{outcome.checkpoint.total_length}, resumption {outcome.checkpoint.trigger_id}"
            )
        logger.info("=" * 60)

        if outcome.status == "suspended":
            if args.no_wait:
                logger.info("Not waiting for the scheduled resumption; run 'resume' to continue")
            else:
                logger.info("Waiting for scheduled resumptions to finish...")
                scheduler.wait_until_idle()

        return 1 if outcome.status == "failed" else 0

    except Exception as e:
        logger.error(f"Error during {args.command}: {e}", exc_info=True)
        return 1
    finally:
        scheduler.shutdown(wait=not args.no_wait)
        if pool is not None:
            pool.close()
        if args.metrics_file:
            metrics.write_metrics(args.metrics_file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contact-pipeline",
        description="Validate, clean and reformat contact records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fresh run with settings from config/pipeline.yaml
  contact-pipeline start --config config/pipeline.yaml

  # Continue from the saved checkpoint (normally done by the scheduler)
  contact-pipeline resume --config config/pipeline.yaml

  # Exit right after checkpointing and export metrics
  contact-pipeline start --no-wait --metrics-file /var/lib/node_exporter/contacts.prom
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in (
        ("start", "Fresh run from the first record"),
        ("resume", "Continue from the saved checkpoint"),
    ):
        command_parser = subparsers.add_parser(name, help=help_text)
        command_parser.add_argument(
            "--config",
            default=None,
            help="Path to pipeline YAML configuration (defaults apply when omitted)"
        )
        command_parser.add_argument(
            "--no-wait",
            action="store_true",
            help="Exit after checkpointing instead of waiting for the scheduled resumption"
        )
        command_parser.add_argument(
            "--metrics-file",
            default=None,
            help="Write Prometheus metrics to this file on exit"
        )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(run_command(args))


if __name__ == "__main__":
    main()
