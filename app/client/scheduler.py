"""
Keeps a client's admin session alive by refreshing it before it expires
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from app.client.api_client import AdminApiClient
from app.client.session_cache import SessionCache, SessionRecord
from app.core.db import utcnow
from app.core.errors import WheelAppError

logger = logging.getLogger(__name__)

REFRESH_BUFFER = timedelta(hours=24)
MIN_SESSION_HEADROOM = timedelta(minutes=5)
MIN_REFRESH_INTERVAL = timedelta(minutes=5)

_ZERO = timedelta(0)


def compute_refresh_delay(expires_at: datetime, now: datetime) -> timedelta:
    """How long to wait before refreshing a session that expires at ``expires_at``.

    Far from expiry the refresh lands one ``REFRESH_BUFFER`` ahead of it.
    Inside the buffer it waits at least ``MIN_REFRESH_INTERVAL``, but never
    past ``MIN_SESSION_HEADROOM`` before the deadline.
    """
    time_until_expiry = expires_at - now

    if time_until_expiry > REFRESH_BUFFER:
        delay = time_until_expiry - REFRESH_BUFFER
    else:
        delay = max(time_until_expiry - MIN_SESSION_HEADROOM, MIN_REFRESH_INTERVAL, _ZERO)

    latest_allowed = max(time_until_expiry - MIN_SESSION_HEADROOM, _ZERO)
    return min(delay, latest_allowed)


def daemon_timer(interval: float, function: Callable, *args) -> threading.Timer:
    timer = threading.Timer(interval, function, args=args)
    timer.daemon = True
    return timer


class AdminSessionScheduler:
    """Holds one admin session and refreshes it on a one-shot timer.

    Every successful refresh replaces the held record (and the cache) and arms
    a new timer against the new expiry. Replacing, clearing or shutting down
    cancels the pending timer first. Each held record gets a generation number
    so a refresh that finishes after its session was replaced is dropped.

    A failed refresh is never retried: the session is discarded and
    ``on_signed_out`` is called.
    """

    def __init__(
        self,
        api: AdminApiClient,
        cache: SessionCache,
        clock: Callable[[], datetime] = utcnow,
        timer_factory: Callable[..., threading.Timer] = daemon_timer,
        on_signed_out: Optional[Callable[[], None]] = None
    ):
        self.api = api
        self.cache = cache
        self.clock = clock
        self.timer_factory = timer_factory
        self.on_signed_out = on_signed_out

        self._lock = threading.RLock()
        self._session: Optional[SessionRecord] = None
        self._timer = None
        self._generation = 0

        if api.on_auth_failure is None:
            api.on_auth_failure = self._handle_auth_failure

    @property
    def session(self) -> Optional[SessionRecord]:
        with self._lock:
            return self._session

    @property
    def is_signed_in(self) -> bool:
        return self.session is not None

    # -------- lifecycle --------

    def start(self) -> Optional[SessionRecord]:
        """Restore the cached session, validating it with the server first"""
        record = self.cache.load()
        if record is None:
            return None
        if record.is_expired(self.clock()):
            logger.info("Cached admin session already expired")
            self.cache.clear()
            return None

        with self._lock:
            generation = self._generation
        try:
            refreshed = self.api.refresh(record.session_id)
        except WheelAppError as e:
            logger.warning(f"Cached admin session rejected on startup: {e}")
            self._discard(generation)
            return None

        self._hold(refreshed, expected_generation=generation)
        return self.session

    def sign_in(self, token: str) -> SessionRecord:
        record = self.api.login(token)
        self.replace(record)
        return record

    def sign_out(self) -> None:
        """Revoke on the server (best effort) and forget the session locally"""
        record = self.session
        self.clear()
        if record is None:
            return
        try:
            self.api.logout(record.session_id)
        except WheelAppError as e:
            logger.warning(f"Server-side admin logout failed: {e}")

    def replace(self, record: SessionRecord) -> None:
        self._hold(record)

    def clear(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._session = None
            self.cache.clear()

    def shutdown(self) -> None:
        """Stop refreshing; the cache is kept for the next ``start``"""
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._session = None

    # -------- internals --------

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _hold(self, record: SessionRecord, expected_generation: Optional[int] = None, renewed: bool = False) -> None:
        with self._lock:
            if expected_generation is not None and expected_generation != self._generation:
                logger.debug("Ignoring refreshed admin session for a replaced session")
                return
            self._cancel_timer()
            self._generation += 1
            self._session = record
            self.cache.save(record)
            generation = self._generation
        self._schedule(record, generation, renewed)

    def _schedule(self, record: SessionRecord, generation: int, renewed: bool) -> None:
        now = self.clock()
        if record.is_expired(now):
            logger.info("Held admin session has expired")
            self._discard(generation)
            return

        delay = compute_refresh_delay(record.expires_at, now)
        if delay <= _ZERO:
            if not renewed:
                self._renew(generation)
                return
            # Only reachable when the server TTL is MIN_SESSION_HEADROOM (5 min)
            # or less: the session we just got is already due. Renewing again
            # would loop, so wait out half of what is left instead.
            delay = (record.expires_at - now) / 2
            logger.warning(f"Admin session TTL too short for refresh headroom; retrying in {delay}")

        with self._lock:
            if generation != self._generation:
                return
            self._cancel_timer()
            self._timer = self.timer_factory(delay.total_seconds(), self._renew, generation)
            self._timer.start()
        logger.debug(f"Admin session refresh scheduled in {delay}")

    def _renew(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._session is None:
                return
            self._timer = None
            session_id = self._session.session_id

        try:
            record = self.api.refresh(session_id)
        except WheelAppError as e:
            logger.warning(f"Failed to refresh admin session automatically: {e}")
            self._discard(generation)
            return

        self._hold(record, expected_generation=generation, renewed=True)

    def _discard(self, generation: Optional[int]) -> None:
        with self._lock:
            if generation is not None and generation != self._generation:
                return
            self._cancel_timer()
            self._generation += 1
            self._session = None
            self.cache.clear()
        logger.info("Admin session discarded; signed out")
        if self.on_signed_out is not None:
            self.on_signed_out()

    def _handle_auth_failure(self) -> None:
        self._discard(None)
