"""Per-client throttling of the authentication endpoints."""
import asyncio
import logging
from collections import defaultdict, deque
from datetime import datetime, timedelta
from typing import Deque, Dict

from fastapi import HTTPException, Request, status


logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Sliding-window request counter kept in process memory.

    Counters are per worker process; a multi-worker deployment allows
    max_requests per worker.
    """

    def __init__(self, max_requests: int = 5, window_seconds: int = 300):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.requests: Dict[str, Deque[datetime]] = defaultdict(deque)
        self.lock = asyncio.Lock()

    def configure(self, max_requests: int, window_seconds: int) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    async def check_rate_limit(self, key: str) -> bool:
        """
        Record a hit for key.

        Returns:
            bool: True when the hit is within the limit

        Raises:
            HTTPException: 429 when key already used up its window
        """
        async with self.lock:
            now = datetime.now()
            cutoff = now - timedelta(seconds=self.window_seconds)

            self._evict_stale(cutoff)

            hits = self.requests[key]
            while hits and hits[0] <= cutoff:
                hits.popleft()

            if len(hits) >= self.max_requests:
                retry_after = int((hits[0] - cutoff).total_seconds()) + 1
                logger.warning(f"Rate limit exceeded for {key}")
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail=f"Too many requests. Please try again in {retry_after} seconds.",
                    headers={"Retry-After": str(retry_after)},
                )

            hits.append(now)
            return True

    def _evict_stale(self, cutoff: datetime) -> None:
        """Forget clients whose most recent hit is outside the window."""
        stale = [key for key, hits in self.requests.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self.requests[key]

    def reset(self) -> None:
        self.requests.clear()

    async def __call__(self, request: Request) -> None:
        """FastAPI dependency: throttle by endpoint and client IP."""
        await self.check_rate_limit(f"{request.url.path}:{get_client_ip(request)}")


def get_client_ip(request: Request) -> str:
    """
    Get client IP address from request.

    Handles X-Forwarded-For header for proxied requests.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


# Shared limiter for register/login, configured from settings at router import
rate_limiter = RateLimiter()
