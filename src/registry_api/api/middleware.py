"""HTTP middleware: CORS, response hardening, and per-client request throttling."""

import math
import time
from collections import defaultdict, deque

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from registry_api.core.config import Settings

_DEFAULT_TRUSTED_HEADERS = ("CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP")

# Registry responses carry personal data
_HARDENING_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "no-referrer",
}

_UNTHROTTLED_SUFFIXES = ("/health",)


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Return the address a request is attributed to for throttling.

    The first non-blank trusted header wins; ``X-Forwarded-For`` contributes
    its leftmost entry. Without one, the socket peer is used, or ``"unknown"``.
    """
    candidates = _DEFAULT_TRUSTED_HEADERS if trusted_headers is None else trusted_headers
    for name in candidates:
        raw = request.headers.get(name, "").strip()
        if raw:
            return raw.split(",", 1)[0].strip() if name.lower() == "x-forwarded-for" else raw
    return request.client.host if request.client else "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Install CORSMiddleware from the configured origins.

    ``X-Access-Reason`` is exposed so browser clients can read refusal reasons.
    """
    options: dict[str, object] = {
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
        "expose_headers": ["X-Access-Reason"],
    }
    origins = settings.cors_origin_list
    if origins:
        options["allow_origins"] = origins
    origin_regex = settings.cors_origin_regex.strip()
    if origin_regex:
        options["allow_origin_regex"] = origin_regex
    app.add_middleware(CORSMiddleware, **options)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach hardening headers and mark responses uncacheable."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(_HARDENING_HEADERS)
        response.headers.setdefault("Cache-Control", "no-store")
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window request budget per client address, held in process memory."""

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 60,
        trusted_proxy_headers: list[str] | None = None,
        window_seconds: float = 60.0,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.trusted_proxy_headers = trusted_proxy_headers
        self.window_seconds = window_seconds
        self._hits: dict[str, deque[float]] = defaultdict(deque)

    def _expire(self, now: float) -> None:
        cutoff = now - self.window_seconds
        for client in list(self._hits):
            hits = self._hits[client]
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if not hits:
                del self._hits[client]

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path.endswith(_UNTHROTTLED_SUFFIXES):
            return await call_next(request)

        client = get_client_ip(request, self.trusted_proxy_headers)
        now = time.time()
        self._expire(now)
        hits = self._hits[client]

        if len(hits) >= self.requests_per_minute:
            retry_after = max(1, math.ceil(hits[0] + self.window_seconds - now))
            logger.warning(f"Throttled {client} on {path}; retry in {retry_after}s")
            return JSONResponse(
                {"detail": "Rate limit exceeded"},
                status_code=429,
                headers={"Retry-After": str(retry_after)},
            )

        hits.append(now)
        return await call_next(request)
