import time
import json
import logging
import signal
import argparse
import functools
from dataclasses import asdict

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import RecommendationError
from database.database import create_db_engine, create_session_factory
from database.init_db import init_db
from database.uow import refresh_uow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Global flag for graceful shutdown
running = True


def signal_handler(sig, frame):
    global running
    logger.info("Shutdown signal received")
    running = False


def parse_partition(value):
    """argparse type for --partition: an int or 'auto'."""
    if value == 'auto':
        return value
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"partition must be an integer or 'auto', got '{value}'")


def run_recalculate(ctx: AppContext, profile_id: str, mode: str) -> int:
    """Recompute one profile and print the result as JSON."""
    try:
        result = ctx.orchestrator.recalculate(profile_id, mode)
    except RecommendationError as e:
        logger.error(f"Recalculation failed: {e}")
        print(json.dumps({"error": str(e)}))
        return 1

    payload = asdict(result)
    payload['mode'] = result.mode.value
    print(json.dumps(payload))
    return 0


def run_refresh(ctx: AppContext, partition) -> int:
    """Run one cron batch and print the result as JSON."""
    result = ctx.cron_driver.run(partition)
    print(json.dumps({
        "success": True,
        "profiles_processed": result.profiles_processed,
        "partition": result.partition_label,
        "total_partitions": result.total_partitions,
        "results": {
            "success": result.success,
            "failed": result.failed,
            "errors": result.errors,
        },
        "processing_time_ms": result.processing_time_ms,
    }))
    return 0


def run_schedule(ctx: AppContext) -> int:
    """Run the cron batch every schedule.interval_seconds until a shutdown signal."""
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    interval = ctx.config.schedule.interval_seconds
    partition = ctx.config.schedule.partition

    cycle_count = 0
    while running:
        cycle_count += 1
        cycle_start = time.time()
        logger.info(f"=== Starting Cycle #{cycle_count} (partition {partition if partition is not None else 'all'}) ===")
        try:
            result = ctx.cron_driver.run(partition)
            logger.info(f"Cycle #{cycle_count}: {result.success} succeeded, {result.failed} failed")
        except Exception as e:
            logger.error(f"Error in main loop: {e}", exc_info=True)

        cycle_elapsed = time.time() - cycle_start
        if running:
            logger.info(f"=== Cycle #{cycle_count} completed in {cycle_elapsed:.2f}s. Sleeping for {interval} seconds... ===")
            # Sleep in chunks to allow responsive shutdown
            for _ in range(max(1, interval // 5)):
                if not running:
                    break
                time.sleep(5)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SubsidyScout recommendation driver")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    subparsers = parser.add_subparsers(dest='command', required=True)

    recalc = subparsers.add_parser('recalculate', help='Recompute recommendations of one profile')
    recalc.add_argument('--profile-id', required=True, help='Company profile id')
    recalc.add_argument('--mode', choices=['full', 'incremental'], default='full',
                        help='full (default) or incremental')

    refresh = subparsers.add_parser('refresh', help='Refresh stale profiles once')
    refresh.add_argument('--partition', type=parse_partition, default=None,
                         help="Partition 0-6 or 'auto'; all profiles when omitted")

    subparsers.add_parser('schedule', help='Run the refresh on a fixed interval')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)

    engine = create_db_engine(config.database.url)

    # Initialize DB (with retry logic)
    init_db(engine)
    uow_factory = functools.partial(refresh_uow, create_session_factory(engine))
    ctx = AppContext.build(config, uow_factory=uow_factory)

    if args.command == 'recalculate':
        return run_recalculate(ctx, args.profile_id, args.mode)

    if args.command == 'refresh':
        try:
            return run_refresh(ctx, args.partition)
        except ValueError as e:
            parser.error(str(e))

    return run_schedule(ctx)


if __name__ == "__main__":
    raise SystemExit(main())
