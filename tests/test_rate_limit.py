"""
Tests for the fixed-window rate limiter.
"""
import time
from concurrent.futures import ThreadPoolExecutor

from portfolio_contact.common.rate_limit import RateLimiter


class TestRateLimiter:
    """Tests for RateLimiter."""

    def test_sixth_request_in_window_is_denied(self):
        limiter = RateLimiter("5/15 minutes")

        results = [limiter.record("203.0.113.7") for _ in range(6)]

        assert results == [True, True, True, True, True, False]

    def test_clients_are_limited_independently(self):
        limiter = RateLimiter("1/15 minutes")

        assert limiter.record("203.0.113.7") is True
        assert limiter.record("203.0.113.7") is False
        assert limiter.record("198.51.100.2") is True

    def test_check_does_not_count_the_request(self):
        limiter = RateLimiter("1/15 minutes")

        assert limiter.check("203.0.113.7") is True
        assert limiter.check("203.0.113.7") is True
        assert limiter.record("203.0.113.7") is True
        assert limiter.check("203.0.113.7") is False

    def test_window_expiry_allows_requests_again(self):
        limiter = RateLimiter("2/1 second")

        assert limiter.record("203.0.113.7") is True
        assert limiter.record("203.0.113.7") is True
        assert limiter.record("203.0.113.7") is False

        time.sleep(1.2)

        assert limiter.record("203.0.113.7") is True

    def test_concurrent_requests_cannot_overshoot_the_limit(self):
        limiter = RateLimiter("5/15 minutes")

        with ThreadPoolExecutor(max_workers=10) as pool:
            results = list(pool.map(lambda _: limiter.record("203.0.113.7"), range(40)))

        assert results.count(True) == 5

    def test_retry_after_is_within_the_window(self):
        limiter = RateLimiter("1/15 minutes")
        limiter.record("203.0.113.7")

        assert 0 < limiter.retry_after("203.0.113.7") <= 15 * 60

    def test_reset_clears_all_counters(self):
        limiter = RateLimiter("1/15 minutes")
        limiter.record("203.0.113.7")

        limiter.reset()

        assert limiter.record("203.0.113.7") is True

    def test_limit_is_described_for_responses(self):
        assert str(RateLimiter("5/15 minutes").item) == "5 per 15 minute"
