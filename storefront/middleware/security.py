from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

# Order placement is limited per client address
limiter = Limiter(key_func=get_remote_address)

API_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    # JSON bodies and QR code images only
    "Content-Security-Policy": "default-src 'none'; img-src 'self'; frame-ancestors 'none'",
}


class ApiHeadersMiddleware(BaseHTTPMiddleware):
    """Hardening headers for every response; API responses are never cached."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in API_HEADERS.items():
            response.headers.setdefault(name, value)

        # Orders, tickets and carts carry customer details
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"
        return response


def setup_security_middleware(app: FastAPI, allowed_hosts: list[str] = None):
    """Attach the rate limiter, response headers and host validation."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(ApiHeadersMiddleware)

    if allowed_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts)
