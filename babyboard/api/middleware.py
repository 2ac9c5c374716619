"""Request-level guards: client address resolution, rate and size limits."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import Settings
from ..data.votes import UNKNOWN_VOTER

log = logging.getLogger(__name__)


def client_ip(request: Request, trust_proxy: bool = True) -> str:
    """Best-effort address of the caller.

    Behind a single trusted proxy the address it appended to
    ``X-Forwarded-For`` (the right-most entry) is used; earlier entries are
    client supplied and ignored.
    """
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
        if hops:
            return hops[-1]
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_VOTER


class RateLimiter:
    """Rolling-window request counter keyed by client address."""

    def __init__(
        self,
        max_requests: int,
        window: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window = window
        self.clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        """Forget addresses with no request inside the current window."""
        stale = [key for key, hits in self._hits.items() if not hits or now - hits[-1] >= self.window]
        for key in stale:
            del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str) -> bool:
        """Count a request for ``key``; ``False`` once the limit is reached."""
        now = self.clock()
        with self._lock:
            if now - self._last_sweep >= self.window:
                self._sweep(now)
            hits = self._hits.setdefault(key, deque())
            while hits and now - hits[0] >= self.window:
                hits.popleft()
            if len(hits) >= self.max_requests:
                return False
            hits.append(now)
            return True


def install_middleware(app: FastAPI, settings: Settings, limiter: RateLimiter | None = None) -> None:
    """Attach the body size and rate limit guards for ``/api`` routes."""
    limiter = limiter or RateLimiter(settings.rate_limit_max, settings.rate_limit_window)
    app.state.rate_limiter = limiter

    @app.middleware("http")
    async def body_limit_middleware(request: Request, call_next):
        path = request.url.path
        if path.startswith("/api"):
            limit = (
                settings.offers_body_limit
                if path.startswith("/api/offers")
                else settings.json_body_limit
            )
            length = request.headers.get("content-length", "")
            if length.isdigit() and int(length) > limit:
                return JSONResponse(status_code=413, content={"error": "Request body too large"})
        return await call_next(request)

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        if request.url.path.startswith("/api"):
            ip = client_ip(request, settings.trust_proxy)
            if not limiter.hit(ip):
                log.warning("Rate limit exceeded for %s", ip)
                return JSONResponse(
                    status_code=429,
                    content={"error": "Too many requests from this IP."},
                )
        return await call_next(request)
