# safepsy_api/utils/rate_limiting.py
import logging
import math
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Tuple

from fastapi import Request

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Client IP: first x-forwarded-for entry, else the socket peer"""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
        if ip:
            return ip
    return request.client.host if request.client else ""


class RateLimiter:
    """Sliding-window limiter keyed by (endpoint, identifier), held in process memory"""

    def __init__(
        self,
        max_requests: int = 5,
        window: int = 900,
        clock: Callable[[], float] = time.monotonic
    ):
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._hits: Dict[Tuple[str, str], Deque[float]] = defaultdict(deque)
        self._last_sweep = clock()

    def _sweep(self, now: float):
        # Clean old entries at most once per window
        if now - self._last_sweep < self.window:
            return
        self._last_sweep = now
        for key in list(self._hits):
            if not self._prune(key, now):
                del self._hits[key]

    def _prune(self, key: Tuple[str, str], now: float) -> Deque[float]:
        hits = self._hits[key]
        while hits and hits[0] <= now - self.window:
            hits.popleft()
        return hits

    def check_rate_limit(self, identifier: str, endpoint: str = "subscribe") -> bool:
        """Record the request and return True, or return False if over the limit"""
        key = (endpoint, identifier)
        now = self._clock()
        self._sweep(now)
        hits = self._prune(key, now)

        if len(hits) >= self.max_requests:
            logger.warning(f"Rate limit exceeded for {identifier} on {endpoint}")
            return False

        hits.append(now)
        return True

    def retry_after(self, identifier: str, endpoint: str = "subscribe") -> int:
        """Seconds until the oldest request in the window expires"""
        key = (endpoint, identifier)
        now = self._clock()
        hits = self._prune(key, now)
        if not hits:
            del self._hits[key]
            return 0
        return max(1, math.ceil(hits[0] + self.window - now))

    def reset(self):
        self._hits.clear()
