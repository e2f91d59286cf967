"""Unit tests for the in-memory rate limiter."""

from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from pet_registry.middleware.rate_limiter import RateLimiter, get_client_ip


def _request(path: str = "/v1/auth/jwt/login", headers=None, client=("10.0.0.1", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": path,
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
        "query_string": b"",
        "server": ("test", 80),
        "scheme": "http",
    }
    return Request(scope)


@pytest.mark.asyncio
async def test_requests_within_limit_pass():
    limiter = RateLimiter(max_requests=3, window_seconds=60)

    for _ in range(3):
        assert await limiter.check_rate_limit("ip") is True


@pytest.mark.asyncio
async def test_request_over_limit_raises_429():
    limiter = RateLimiter(max_requests=2, window_seconds=60)
    for _ in range(2):
        await limiter.check_rate_limit("ip")

    with pytest.raises(HTTPException) as exc_info:
        await limiter.check_rate_limit("ip")

    assert exc_info.value.status_code == 429
    assert int(exc_info.value.headers["Retry-After"]) >= 1


@pytest.mark.asyncio
async def test_keys_are_counted_separately():
    limiter = RateLimiter(max_requests=1, window_seconds=60)
    await limiter.check_rate_limit("a")

    assert await limiter.check_rate_limit("b") is True


@pytest.mark.asyncio
async def test_reset_clears_counters():
    limiter = RateLimiter(max_requests=1, window_seconds=60)
    await limiter.check_rate_limit("ip")

    limiter.reset()

    assert await limiter.check_rate_limit("ip") is True


@pytest.mark.asyncio
async def test_dependency_keys_by_path_and_client():
    limiter = RateLimiter(max_requests=1, window_seconds=60)

    await limiter(_request("/v1/auth/jwt/login"))
    # Another endpoint from the same client has its own budget
    await limiter(_request("/v1/auth/register"))

    with pytest.raises(HTTPException):
        await limiter(_request("/v1/auth/jwt/login"))


def test_client_ip_prefers_forwarded_header():
    request = _request(headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})

    assert get_client_ip(request) == "203.0.113.7"


def test_client_ip_falls_back_to_peer_address():
    assert get_client_ip(_request()) == "10.0.0.1"


@pytest.mark.asyncio
async def test_clients_outside_the_window_are_forgotten():
    limiter = RateLimiter(max_requests=5, window_seconds=60)
    limiter.requests["gone"].append(datetime.now() - timedelta(seconds=120))

    await limiter.check_rate_limit("new")

    assert "gone" not in limiter.requests
    assert list(limiter.requests) == ["new"]


@pytest.mark.asyncio
async def test_clients_inside_the_window_are_kept():
    limiter = RateLimiter(max_requests=5, window_seconds=60)
    await limiter.check_rate_limit("recent")

    await limiter.check_rate_limit("new")

    assert set(limiter.requests) == {"recent", "new"}
