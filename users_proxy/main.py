from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import httpx
import logging

from .config import Settings, load_settings
from .diagnose import run_diagnostics
from .proxy import proxy_users

logging.basicConfig(level=logging.INFO)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(
    settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """Build the proxy app.

    `transport` replaces the network for every outbound call (proxy and
    diagnostics); tests pass an httpx.MockTransport here.
    """
    settings = settings or load_settings()
    app = FastAPI(title="Users API Proxy")
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # CORSMiddleware only answers requests that send an Origin header
    @app.middleware("http")
    async def allow_any_origin(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("access-control-allow-origin", "*")
        return response

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "message": "Proxy Server is running",
            "port": settings.port,
        }

    @app.get("/")
    def root():
        return {
            "message": "Users API Proxy Server",
            "endpoints": {
                "/users": f"GET - User data from {settings.upstream_host} (with fallback)",
                "/health": "GET - Health check status",
                "/diagnose": f"GET - DNS and HTTPS reachability checks for {settings.upstream_host}",
            },
        }

    @app.get("/diagnose")
    async def diagnose():
        return await run_diagnostics(settings, transport=transport)

    @app.api_route("/users", methods=PROXY_METHODS)
    @app.api_route("/users/{path:path}", methods=PROXY_METHODS)
    async def users(request: Request):
        return await proxy_users(request, settings, transport=transport)

    return app


app = create_app()
