import logging
from types import SimpleNamespace

from security.rate_limit import IpRateLimiter, client_ip


def _limiter(clock, **kwargs):
    return IpRateLimiter(clock=clock, **kwargs)


def test_allows_up_to_max_then_blocks(clock):
    limiter = _limiter(clock, max_requests=20, window_seconds=60)
    for _ in range(20):
        assert limiter.check_ip_limit("1.2.3.4") == (True, 0)

    allowed, retry_after = limiter.check_ip_limit("1.2.3.4")
    assert allowed is False
    assert 1 <= retry_after <= 60


def test_retry_after_counts_down(clock):
    limiter = _limiter(clock, max_requests=1, window_seconds=60)
    limiter.check_ip_limit("ip")
    clock.advance(45.5)
    assert limiter.check_ip_limit("ip") == (False, 15)


def test_ips_are_counted_independently(clock):
    limiter = _limiter(clock, max_requests=1, window_seconds=60)
    assert limiter.check_ip_limit("a")[0] is True
    assert limiter.check_ip_limit("a")[0] is False
    assert limiter.check_ip_limit("b")[0] is True


def test_window_rolls_over(clock):
    limiter = _limiter(clock, max_requests=2, window_seconds=60)
    for _ in range(5):
        limiter.check_ip_limit("ip")
    clock.advance(60)
    assert limiter.check_ip_limit("ip") == (True, 0)


def test_single_warning_per_window(clock, caplog):
    limiter = _limiter(clock, max_requests=20, window_seconds=60)
    with caplog.at_level(logging.WARNING, logger="security.rate_limit"):
        for _ in range(50):
            limiter.check_ip_limit("9.9.9.9")

    warnings = [r for r in caplog.records if r.name == "security.rate_limit"]
    assert len(warnings) == 1
    assert "9.9.9.9" in warnings[0].getMessage()


def test_warning_repeats_in_next_window(clock, caplog):
    limiter = _limiter(clock, max_requests=1, window_seconds=60)
    with caplog.at_level(logging.WARNING, logger="security.rate_limit"):
        for _ in range(3):
            limiter.check_ip_limit("ip")
        clock.advance(61)
        for _ in range(3):
            limiter.check_ip_limit("ip")

    assert len([r for r in caplog.records if r.name == "security.rate_limit"]) == 2


def _request(headers=None, remote_addr=None):
    return SimpleNamespace(headers=headers or {}, remote_addr=remote_addr)


def test_client_ip_prefers_first_forwarded_entry():
    req = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.2"}, "10.0.0.2")
    assert client_ip(req) == "203.0.113.7"


def test_client_ip_falls_back_to_socket_then_unknown():
    assert client_ip(_request(remote_addr="192.168.1.5")) == "192.168.1.5"
    assert client_ip(_request()) == "unknown"
