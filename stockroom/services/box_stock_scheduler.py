from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.orm import Session

from stockroom.core import config
from stockroom.core.db import SessionLocal
from stockroom.core.record_store import SqlRecordStore
from stockroom.services.box_stock import sync_box_stock


logger = logging.getLogger(__name__)


class BoxStockSyncScheduler:
    """Background scheduler that periodically refreshes the box-stock snapshot.

    Runs inside the API process and is controlled from FastAPI
    startup/shutdown events. Each run recomputes the snapshot from scratch,
    so overlapping or repeated runs are harmless.
    """

    def __init__(self, interval_minutes: int = 15, enabled: bool = True) -> None:
        self._interval_minutes = interval_minutes
        self._enabled = enabled
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        """Start the APScheduler instance if not already running."""
        if not self._enabled:
            logger.warning("BoxStockSyncScheduler disabled via BOX_STOCK_SYNC_ENABLED")
            return

        if self.running:
            logger.warning("BoxStockSyncScheduler already running, skipping start")
            return

        scheduler = BackgroundScheduler(timezone="UTC")
        scheduler.add_job(
            self._run_sync_job,
            trigger=IntervalTrigger(minutes=self._interval_minutes),
            id="box_stock_sync_job",
            replace_existing=True,
            max_instances=1,
            next_run_time=datetime.now(timezone.utc),
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.warning(
            "BoxStockSyncScheduler started with interval %s minutes", self._interval_minutes
        )

    def shutdown(self) -> None:
        if self._scheduler is not None:
            try:
                self._scheduler.shutdown(wait=False)
                logger.warning("BoxStockSyncScheduler stopped")
            finally:
                self._scheduler = None

    @staticmethod
    def _run_sync_job() -> None:
        """Job function; failures are logged so they never reach the scheduler thread."""
        db: Session = SessionLocal()
        try:
            items = sync_box_stock(SqlRecordStore(db))
            logger.info("Box stock sync job completed (%s skus)", len(items))
        except Exception:
            logger.exception("Error while running box stock sync job")
        finally:
            db.close()


def build_scheduler_from_config() -> BoxStockSyncScheduler:
    return BoxStockSyncScheduler(
        interval_minutes=config.BOX_STOCK_SYNC_INTERVAL_MINUTES,
        enabled=config.BOX_STOCK_SYNC_ENABLED,
    )
