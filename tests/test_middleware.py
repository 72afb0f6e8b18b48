from quizgrader.core.middleware import SlidingWindowLimiter


def test_limiter_blocks_after_limit_within_window():
    limiter = SlidingWindowLimiter(limit=2, window=60)

    assert limiter.allow("1.2.3.4", now=0.0)
    assert limiter.allow("1.2.3.4", now=1.0)
    assert not limiter.allow("1.2.3.4", now=2.0)
    assert limiter.allow("5.6.7.8", now=2.0)


def test_limiter_frees_slots_as_window_slides():
    limiter = SlidingWindowLimiter(limit=1, window=60)

    assert limiter.allow("ip", now=0.0)
    assert not limiter.allow("ip", now=59.9)
    assert limiter.allow("ip", now=60.0)


def test_rejected_hits_do_not_extend_window():
    limiter = SlidingWindowLimiter(limit=1, window=10)

    assert limiter.allow("ip", now=0.0)
    for t in range(1, 10):
        assert not limiter.allow("ip", now=float(t))
    assert limiter.allow("ip", now=10.0)


def test_limiter_forgets_idle_clients():
    limiter = SlidingWindowLimiter(limit=5, window=60)
    for n in range(100):
        limiter.allow(f"10.0.0.{n}", now=1.0)
    assert limiter.tracked_clients() == 100

    assert limiter.allow("10.0.0.200", now=120.0)
    assert limiter.tracked_clients() == 1


def test_limiter_keeps_active_clients_on_sweep():
    limiter = SlidingWindowLimiter(limit=5, window=60)
    limiter.allow("idle", now=1.0)
    limiter.allow("busy", now=1.0)
    limiter.allow("busy", now=100.0)

    limiter.allow("new", now=130.0)
    assert limiter.tracked_clients() == 2
