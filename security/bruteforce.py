import math
import threading
import time
from collections.abc import Callable
from datetime import datetime, timezone

from models.rate_counters import LoginAttemptCounter


class LoginAttemptLimiter:
    """
    Failed-login counter per identifier (brute-force lockout).

    Checking never increments; only record_failed_attempt does. A counter
    whose window has passed counts as zero and is replaced on next use.

    reserve_attempt is the gate used by the login flow: it checks and
    takes an in-flight slot in one locked step, so concurrent requests
    cannot all slip past the limit while their passwords are being
    checked. The slot is settled by record_failed_attempt(reserved=True),
    clear_attempts or release_attempt.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: int = 300,
        clock: Callable[[], float] = time.time,
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.clock = clock
        self._counters: dict[str, LoginAttemptCounter] = {}
        self._lock = threading.Lock()

    def _live_counter(self, identifier: str, now: float) -> LoginAttemptCounter | None:
        # Caller holds the lock
        row = self._counters.get(identifier)
        if row is not None and now >= row.window_reset_at:
            del self._counters[identifier]
            return None
        return row

    def _blocked(self, row: LoginAttemptCounter, now: float) -> tuple[bool, int, datetime]:
        retry_after = max(math.ceil(row.window_reset_at - now), 1)
        reset_at = datetime.fromtimestamp(row.window_reset_at, tz=timezone.utc)
        return False, retry_after, reset_at

    def check_identifier_limit(self, identifier: str) -> tuple[bool, int, datetime | None]:
        """
        Returns (allowed, retry_after_seconds, reset_at).
        reset_at is the UTC time the lockout lifts, or None when allowed.
        """
        if not identifier:
            # Nothing named yet, nothing to throttle
            return True, 0, None

        with self._lock:
            now = self.clock()
            row = self._live_counter(identifier, now)
            if row is None or row.count < self.max_attempts:
                return True, 0, None
            return self._blocked(row, now)

    def reserve_attempt(self, identifier: str) -> tuple[bool, int, datetime | None]:
        """
        Same answer as check_identifier_limit, counting in-flight attempts
        against the limit. When allowed, one slot is held for the caller.
        """
        if not identifier:
            return True, 0, None

        with self._lock:
            now = self.clock()
            row = self._live_counter(identifier, now)
            if row is None:
                row = LoginAttemptCounter(count=0, window_reset_at=now + self.window_seconds)
                self._counters[identifier] = row

            if row.count + row.pending >= self.max_attempts:
                if row.count >= self.max_attempts:
                    return self._blocked(row, now)
                # Remaining attempts are all in flight
                return False, 1, datetime.fromtimestamp(now + 1, tz=timezone.utc)

            row.pending += 1
            return True, 0, None

    def record_failed_attempt(self, identifier: str, reserved: bool = False) -> int:
        """
        Increments the failure counter. Returns the new count.
        """
        if not identifier:
            return 0

        with self._lock:
            now = self.clock()
            row = self._live_counter(identifier, now)
            if row is None:
                row = LoginAttemptCounter(count=0, window_reset_at=now + self.window_seconds)
                self._counters[identifier] = row
            elif reserved and row.pending:
                row.pending -= 1
            row.count += 1
            return row.count

    def release_attempt(self, identifier: str) -> None:
        """
        Gives back a reserved slot whose attempt ended without an outcome.
        """
        if not identifier:
            return
        with self._lock:
            row = self._live_counter(identifier, self.clock())
            if row is None:
                return
            if row.pending:
                row.pending -= 1
            if row.count == 0 and row.pending == 0:
                del self._counters[identifier]

    def clear_attempts(self, identifier: str) -> None:
        """
        Drops the counter after a successful login.
        """
        if not identifier:
            return
        with self._lock:
            self._counters.pop(identifier, None)

    def attempts(self, identifier: str) -> int:
        with self._lock:
            row = self._live_counter(identifier, self.clock())
            return row.count if row else 0

    def in_flight(self, identifier: str) -> int:
        with self._lock:
            row = self._live_counter(identifier, self.clock())
            return row.pending if row else 0
