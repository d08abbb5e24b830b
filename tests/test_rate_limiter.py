"""
Tests for the outbound rate limiter
"""
import threading
import time

import pytest

from finbuddy.application.services.rate_limiter import RateLimiter


class ManualClock:
    def __init__(self):
        self.t = 1000.0

    def __call__(self):
        return self.t

    def sleep(self, seconds):
        self.t += seconds


def test_interval_from_hourly_budget():
    assert RateLimiter(200).min_interval == pytest.approx(18.0)


def test_first_call_does_not_wait():
    clock = ManualClock()
    limiter = RateLimiter(3600, clock=clock, sleep=clock.sleep)
    assert limiter.await_turn() == 0.0


def test_waits_for_remaining_interval():
    clock = ManualClock()
    limiter = RateLimiter(3600, clock=clock, sleep=clock.sleep)
    limiter.await_turn()

    clock.t += 0.25
    assert limiter.await_turn() == pytest.approx(0.75)

    clock.t += 5
    assert limiter.await_turn() == 0.0


@pytest.mark.parametrize("budget", [0, -5])
def test_budget_must_be_positive(budget):
    with pytest.raises(ValueError):
        RateLimiter(budget)


def test_unlimited_never_sleeps():
    limiter = RateLimiter.unlimited()
    assert limiter.await_turn() == 0.0
    assert limiter.await_turn() == 0.0


def test_concurrent_callers_are_serialized():
    limiter = RateLimiter(requests_per_hour=3600 * 20)  # 50ms interval
    threads = [threading.Thread(target=limiter.await_turn) for _ in range(4)]

    started = time.monotonic()
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # Four turns need at least three full intervals between them.
    assert time.monotonic() - started >= 0.14
