import time
import logging
import signal
import argparse

from core.config_loader import load_config
from core.alerts import AlertEvaluator
from database.database import db_session_scope
from database.init_db import init_db
from database.repositories import ScheduleRepository, SqlKeyValueStore
from notification import AlertTracker, build_strategy

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Attendance warnings logged here do not count as shown in the app
WORKER_CHANNEL = "worker"

# Global flag for graceful shutdown
running = True

def signal_handler(sig, frame):
    global running
    logger.info("Shutdown signal received")
    running = False

signal.signal(signal.SIGINT, signal_handler)
signal.signal(signal.SIGTERM, signal_handler)


def run_alert_cycle(config, session, user_ids=None):
    """
    Evaluate alerts for each user and log the ones not delivered recently.

    Args:
        config: AppConfig
        session: Open database session (committed by the caller)
        user_ids: Users to evaluate; defaults to everyone with a timetable

    Returns:
        Number of alerts delivered this cycle
    """
    schedule_repo = ScheduleRepository(session)
    store = SqlKeyValueStore(session)
    evaluator = AlertEvaluator(store, config=config.alerts, channel=WORKER_CHANNEL)
    tracker = AlertTracker(
        store,
        strategy=build_strategy(
            config.notifications.strategy,
            config.notifications.resend_interval_hours
        ),
        enabled=config.notifications.deduplication_enabled,
        dismiss_expiry_hours=config.notifications.dismiss_expiry_hours
    )

    users = user_ids or schedule_repo.get_user_ids()
    logger.info(f"Evaluating alerts for {len(users)} users")

    delivered = 0
    for user_id in users:
        if not running:
            break

        timetable = [schedule_repo.to_timetable_entry(r) for r in schedule_repo.get_entries(user_id)]
        alerts = evaluator.evaluate(user_id, timetable)

        for alert in tracker.select_new(user_id, alerts):
            logger.info(f"[{alert.priority.value.upper()}] {user_id}: {alert.title} - {alert.message}")
            delivered += 1

    return delivered


def main():
    parser = argparse.ArgumentParser(description="Campus OS alert worker")
    parser.add_argument('--user-id', action='append', dest='user_ids',
                        help='Only evaluate this user (repeatable)')
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml')
    parser.add_argument('--once', action='store_true',
                        help='Run a single cycle and exit')
    args = parser.parse_args()

    # Initialize DB (with retry logic)
    init_db()

    config = load_config(args.config)
    interval = config.alerts.poll_interval_seconds
    cycle_count = 0

    while running:
        cycle_count += 1
        cycle_start = time.time()
        logger.info(f"=== Starting Alert Cycle #{cycle_count} ===")

        try:
            with db_session_scope() as session:
                delivered = run_alert_cycle(config, session, args.user_ids)
            logger.info(f"Delivered {delivered} alerts")
        except Exception as e:
            logger.error(f"Error in alert loop: {e}", exc_info=True)

        if args.once:
            break

        cycle_elapsed = time.time() - cycle_start
        if running:
            logger.info(f"=== Cycle #{cycle_count} completed in {cycle_elapsed:.2f}s. Sleeping for {interval} seconds... ===")
            # Sleep in chunks to allow responsive shutdown
            for _ in range(max(1, interval // 5)):
                if not running: break
                time.sleep(5)


if __name__ == "__main__":
    main()
