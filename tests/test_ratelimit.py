from ito.utils.ratelimit import RateLimiter


def test_first_action_allowed_then_throttled_within_interval():
    limiter = RateLimiter(interval=1.0)
    assert limiter.allow("sid-1", now=100.0)
    assert not limiter.allow("sid-1", now=100.5)
    assert not limiter.allow("sid-1", now=100.999)
    assert limiter.allow("sid-1", now=101.0)


def test_dropped_action_does_not_extend_window():
    limiter = RateLimiter(interval=1.0)
    assert limiter.allow("sid-1", now=10.0)
    assert not limiter.allow("sid-1", now=10.9)
    assert limiter.allow("sid-1", now=11.0)


def test_keys_are_independent():
    limiter = RateLimiter(interval=1.0)
    assert limiter.allow("a", now=5.0)
    assert limiter.allow("b", now=5.1)


def test_uses_clock_when_now_omitted():
    ticks = iter([0.0, 0.2, 1.5])
    limiter = RateLimiter(interval=1.0, clock=lambda: next(ticks))
    assert limiter.allow("a")
    assert not limiter.allow("a")
    assert limiter.allow("a")


def test_forget_resets_key():
    limiter = RateLimiter(interval=1.0)
    limiter.allow("a", now=1.0)
    limiter.forget("a")
    assert limiter.allow("a", now=1.1)
