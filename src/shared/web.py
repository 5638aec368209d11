"""FastAPI application assembly shared by the service app and the tests.

Each request is wrapped in the Protean domain context that owns its URL
prefix, so one process can host several bounded contexts.
"""

import math
from collections.abc import Iterable, Mapping

from fastapi import APIRouter, FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from protean.domain import Domain

from shared.errors import AuthorizationError, register_error_handlers
from shared.tokens import bearer_token, decode_token


def build_app(
    title: str,
    route_domain_map: Mapping[str, Domain],
    routers: Iterable[APIRouter],
    description: str = "",
) -> FastAPI:
    """Create the FastAPI app, wire domain contexts, routers and error handlers."""
    app = FastAPI(title=title, description=description)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _resolve_domain(path: str):
        """Return the domain for the given request path, or None."""
        for prefix, domain in route_domain_map.items():
            if path == prefix or path.startswith(prefix + "/"):
                return domain
        return None

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match: health check and docs
        return await call_next(request)

    for router in routers:
        app.include_router(router)

    register_error_handlers(app)
    return app


def pagination(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit) if limit else 0,
    }


def token_claims(authorization: str | None = Header(default=None)) -> dict:
    """FastAPI dependency: verified claims of the request's bearer token."""
    return decode_token(bearer_token(authorization))


def admin_claims(authorization: str | None = Header(default=None)) -> dict:
    """FastAPI dependency: claims of an admin bearer token."""
    claims = token_claims(authorization)
    if claims.get("userType") != "admin":
        raise AuthorizationError("Admin access required", user_id=claims.get("id"))
    return claims
