import threading

from todo_auth.app.services.rate_limiter import RateLimiter
from todo_auth.domain.constants import RATE_LIMIT_MAX_ATTEMPTS, RATE_LIMIT_WINDOW


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allows_max_attempts_then_denies():
    limiter = RateLimiter(max_attempts=10, window_seconds=900, clock=FakeClock())

    results = [limiter.check_rate_limit("ann@acme.com") for _ in range(12)]

    assert results == [True] * 10 + [False] * 2


def test_keys_are_independent():
    limiter = RateLimiter(max_attempts=2, window_seconds=900, clock=FakeClock())

    assert limiter.check_rate_limit("a@x.com")
    assert limiter.check_rate_limit("a@x.com")
    assert not limiter.check_rate_limit("a@x.com")

    assert limiter.check_rate_limit("b@x.com")


def test_clear_resets_budget():
    limiter = RateLimiter(max_attempts=3, window_seconds=900, clock=FakeClock())
    for _ in range(5):
        limiter.check_rate_limit("ann@acme.com")
    assert not limiter.check_rate_limit("ann@acme.com")

    limiter.clear_rate_limit("ann@acme.com")

    assert limiter.check_rate_limit("ann@acme.com")


def test_clear_unknown_key_is_noop():
    limiter = RateLimiter()
    limiter.clear_rate_limit("nobody@acme.com")


def test_window_expiry_resets_count():
    clock = FakeClock()
    limiter = RateLimiter(max_attempts=2, window_seconds=900, clock=clock)
    for _ in range(3):
        limiter.check_rate_limit("ann@acme.com")
    assert not limiter.check_rate_limit("ann@acme.com")

    # Still inside the window (window is anchored at the first attempt)
    clock.now += 900
    assert not limiter.check_rate_limit("ann@acme.com")

    clock.now += 1
    assert limiter.check_rate_limit("ann@acme.com")
    assert limiter.check_rate_limit("ann@acme.com")
    assert not limiter.check_rate_limit("ann@acme.com")


def test_concurrent_checks_count_exactly():
    limiter = RateLimiter(max_attempts=50, window_seconds=900, clock=FakeClock())
    allowed = []
    lock = threading.Lock()

    def worker():
        for _ in range(20):
            result = limiter.check_rate_limit("ann@acme.com")
            with lock:
                allowed.append(result)

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert allowed.count(True) == 50
    assert allowed.count(False) == 150


def test_expired_entries_are_swept():
    """Emails that are never retried do not stay in memory"""
    clock = FakeClock()
    limiter = RateLimiter(max_attempts=10, window_seconds=900, clock=clock)
    for i in range(100):
        limiter.check_rate_limit(f"user{i}@acme.com")
    assert limiter.tracked_keys() == 100

    clock.now += 901
    limiter.check_rate_limit("ann@acme.com")

    assert limiter.tracked_keys() == 1


def test_sweep_keeps_entries_inside_their_window():
    clock = FakeClock()
    limiter = RateLimiter(max_attempts=2, window_seconds=900, clock=clock)
    limiter.check_rate_limit("old@acme.com")
    clock.now += 600
    for _ in range(3):
        limiter.check_rate_limit("recent@acme.com")

    clock.now += 301
    limiter.check_rate_limit("ann@acme.com")

    assert limiter.tracked_keys() == 2
    assert not limiter.check_rate_limit("recent@acme.com")


def test_defaults_follow_domain_constants():
    limiter = RateLimiter()

    assert limiter.max_attempts == RATE_LIMIT_MAX_ATTEMPTS == 10
    assert limiter.window_seconds == RATE_LIMIT_WINDOW.total_seconds() == 900
