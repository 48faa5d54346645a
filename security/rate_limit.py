import logging
import math
import threading
import time
from collections.abc import Callable

from models.rate_counters import IpRequestCounter

logger = logging.getLogger(__name__)


def client_ip(req) -> str:
    """
    First X-Forwarded-For entry (the proxy in front is trusted), else the
    socket address, else "unknown".
    """
    forwarded = req.headers.get("X-Forwarded-For", "")
    first = forwarded.split(",")[0].strip()
    return first or req.remote_addr or "unknown"


class IpRateLimiter:
    """
    Fixed-window request counter per client IP (coarse flood control).
    Windows roll over lazily on the next request from the same IP.
    """

    def __init__(
        self,
        max_requests: int = 20,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._counters: dict[str, IpRequestCounter] = {}
        self._lock = threading.Lock()

    def check_ip_limit(self, ip: str) -> tuple[bool, int]:
        """
        Counts one request for *ip*.
        Returns (allowed, retry_after_seconds); retry_after is 0 when allowed.
        """
        with self._lock:
            now = self.clock()
            row = self._counters.get(ip)

            # Reset window if expired
            if row is None or now >= row.window_reset_at:
                row = IpRequestCounter(count=0, window_reset_at=now + self.window_seconds)
                self._counters[ip] = row

            row.count += 1

            if row.count <= self.max_requests:
                return True, 0

            # One warning per window; later blocked requests stay silent
            if not row.warned:
                row.warned = True
                logger.warning("Rate limit exceeded for IP: %s - blocking further requests", ip)

            retry_after = math.ceil(row.window_reset_at - now)
            return False, max(retry_after, 1)
