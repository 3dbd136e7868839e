"""
Health gate.

The database is pinged with ``SELECT 1``; the result is cached for
``HEALTH_CHECK_TTL_SECONDS`` so gated routes do not pay a round-trip on every
request. One lock guards the cached value: a single probe runs at a time and
concurrent readers wait for it instead of starting their own.
"""

import logging
import time
from threading import Lock
from typing import Callable

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from assignments_api.core.config import HEALTH_CHECK_TTL_SECONDS
from assignments_api.core.errors import ServiceUnavailable
from assignments_api.db.session import engine

logger = logging.getLogger(__name__)


def ping_database() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database ping failed")
        return False
    return True


class HealthMonitor:
    def __init__(self, ping: Callable[[], bool], ttl_seconds: float):
        self.ping = ping
        self.ttl_seconds = ttl_seconds
        self._lock = Lock()
        self._healthy: bool | None = None
        self._checked_at = 0.0

    def _probe(self) -> bool:
        healthy = bool(self.ping())
        self._healthy = healthy
        self._checked_at = time.monotonic()
        if healthy:
            logger.debug("Health check succeeded")
        else:
            logger.error("Health check failed")
        return healthy

    def is_healthy(self) -> bool:
        with self._lock:
            stale = time.monotonic() - self._checked_at >= self.ttl_seconds
            if self._healthy is None or stale:
                return self._probe()
            return self._healthy

    def refresh(self) -> bool:
        with self._lock:
            return self._probe()

    def invalidate(self) -> None:
        with self._lock:
            self._healthy = None


health_monitor = HealthMonitor(ping_database, HEALTH_CHECK_TTL_SECONDS)


def require_healthy() -> None:
    if not health_monitor.is_healthy():
        logger.error("Health check failed. Rejecting request.")
        raise ServiceUnavailable()
