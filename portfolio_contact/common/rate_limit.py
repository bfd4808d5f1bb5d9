# portfolio_contact/common/rate_limit.py

import logging
import math
import threading
import time

from fastapi import Request
from limits import parse
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter
from slowapi.util import get_remote_address

from portfolio_contact.common.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Fixed-window request limiter keyed by client address.

    The counters live in whatever storage the URI points at: "memory://" keeps
    them in this process (reset on restart), while a shared store such as
    "redis://localhost:6379" lets several workers enforce one limit.
    """

    def __init__(self, limit: str, storage_uri: str = "memory://", scope: str = "contact"):
        self.item = parse(limit)
        self.scope = scope
        self.storage = storage_from_string(storage_uri)
        self.strategy = FixedWindowRateLimiter(self.storage)
        self._lock = threading.Lock()

    def check(self, key: str) -> bool:
        """Return True if one more request from ``key`` would be allowed. Does not count it."""
        return self.strategy.test(self.item, self.scope, key)

    def record(self, key: str) -> bool:
        """
        Count a request from ``key`` and report whether it is within the limit.

        Counting and checking happen in a single increment on the storage
        backend, so two simultaneous requests can never both see a stale count.
        Within one process the hits are also serialized, so the in-memory store
        grants exactly the configured number of requests per window.
        """
        with self._lock:
            return self.strategy.hit(self.item, self.scope, key)

    def retry_after(self, key: str) -> int:
        """Seconds until the current window for ``key`` resets."""
        stats = self.strategy.get_window_stats(self.item, self.scope, key)
        return max(0, math.ceil(stats.reset_time - time.time()))

    def reset(self) -> None:
        self.storage.reset()


def enforce_rate_limit(request: Request) -> None:
    """Route dependency counting the request against the app's rate limiter."""
    rate_limiter: RateLimiter = request.app.state.rate_limiter
    key = get_remote_address(request)
    if not rate_limiter.record(key):
        logger.warning(f"Rate limit exceeded for {key} on {request.url.path}")
        raise RateLimitExceededError(str(rate_limiter.item), retry_after=rate_limiter.retry_after(key))
