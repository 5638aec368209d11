"""API gateway: bearer-token authentication and reverse proxying.

``/api/<service>/...`` is forwarded to ``<service URL>/<service>/...``.
Cart, order and payment routes require a valid token; its claims are passed on as
``X-User-Id``, ``X-User-Phone`` and ``X-User-Type``.

Usage:
    uvicorn api_gateway.app:build --factory --app-dir src --port 3000
"""

from datetime import UTC, datetime

import httpx
import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api_gateway.config import GatewaySettings
from shared.errors import NotFoundError, UpstreamUnavailable, register_error_handlers
from shared.logging import configure_logging, request_context
from shared.tokens import bearer_token, decode_token

logger = structlog.get_logger(__name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

# Hop-by-hop and recomputed headers are never forwarded
_DROPPED_REQUEST_HEADERS = {"host", "content-length", "connection", "transfer-encoding"}
_DROPPED_RESPONSE_HEADERS = {"content-length", "content-encoding", "connection", "transfer-encoding"}
_IDENTITY_HEADERS = ("x-user-id", "x-user-phone", "x-user-type")


def identity_headers(claims: dict) -> dict[str, str]:
    return {
        "x-user-id": str(claims.get("id", "")),
        "x-user-phone": str(claims.get("phone", "")),
        "x-user-type": str(claims.get("userType", "")),
    }


def forwarded_headers(request: Request, claims: dict | None) -> dict[str, str]:
    """Client headers minus hop-by-hop and spoofable identity headers, plus verified claims."""
    headers = {
        name: value
        for name, value in request.headers.items()
        if name.lower() not in _DROPPED_REQUEST_HEADERS and name.lower() not in _IDENTITY_HEADERS
    }
    if claims:
        headers.update(identity_headers(claims))
    return headers


def create_gateway(
    settings: GatewaySettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the gateway app.

    Args:
        transport: optional httpx transport for upstream calls (tests use
            ``httpx.MockTransport`` or ``httpx.ASGITransport``).
    """
    settings = settings or GatewaySettings()
    routes = settings.routes()

    app = FastAPI(title="Storefront API Gateway")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.middleware("http")
    async def request_log_context(request: Request, call_next):
        with request_context(method=request.method, path=request.url.path):
            return await call_next(request)

    async def proxy(service: str, path: str, request: Request) -> Response:
        base_url, protected = routes[service]
        claims = None
        if protected:
            token = bearer_token(request.headers.get("authorization"))
            claims = decode_token(token, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
            structlog.contextvars.bind_contextvars(user_id=claims.get("id"))

        upstream_path = f"/{service}/{path}" if path else f"/{service}"
        try:
            async with httpx.AsyncClient(
                base_url=base_url,
                timeout=settings.upstream_timeout,
                transport=transport,
            ) as client:
                upstream = await client.request(
                    request.method,
                    upstream_path,
                    params=request.query_params.multi_items(),
                    headers=forwarded_headers(request, claims),
                    content=await request.body(),
                )
        except httpx.TransportError as exc:
            logger.error(
                "Upstream unavailable",
                service=service,
                path=upstream_path,
                error_type=type(exc).__name__,
            )
            raise UpstreamUnavailable("Service temporarily unavailable", service=service) from exc

        logger.info(
            "Proxied request",
            service=service,
            method=request.method,
            path=upstream_path,
            status_code=upstream.status_code,
            user_id=claims.get("id") if claims else None,
        )
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers={k: v for k, v in upstream.headers.items() if k.lower() not in _DROPPED_RESPONSE_HEADERS},
        )

    for service in routes:

        def _bind(service=service):
            async def root(request: Request) -> Response:
                return await proxy(service, "", request)

            async def nested(path: str, request: Request) -> Response:
                return await proxy(service, path, request)

            app.add_api_route(f"/api/{service}", root, methods=PROXY_METHODS, include_in_schema=False)
            app.add_api_route(f"/api/{service}/{{path:path}}", nested, methods=PROXY_METHODS, include_in_schema=False)

        _bind()

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "OK",
                "timestamp": datetime.now(UTC).isoformat(),
                "services": list(routes),
            }
        )

    @app.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
    async def not_found(path: str):
        raise NotFoundError("Route not found", path=f"/{path}")

    return app


def build() -> FastAPI:
    configure_logging(log_dir="logs", log_file_prefix="gateway")
    return create_gateway()
