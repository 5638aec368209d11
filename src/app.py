"""Storefront services in one FastAPI process.

Hosts the user, product, cart, order and payment services side by side; the gateway
forwards ``/api/<service>`` here. Requests run inside the domain context that
owns their URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from catalogue.api import product_router
from catalogue.domain import catalogue
from fastapi.responses import JSONResponse
from identity.api import router as user_router
from identity.domain import identity
from ordering.api import cart_router, order_router
from ordering.domain import ordering
from payments.api import payment_router
from payments.domain import payments
from shared.web import build_app

# PROTEAN_ENV selects the domain.toml overlay
for domain in (identity, catalogue, ordering, payments):
    domain.init()

SERVICE_DOMAINS = {
    "/users": identity,
    "/products": catalogue,
    "/cart": ordering,
    "/orders": ordering,
    "/payments": payments,
}

app = build_app(
    title="Storefront API",
    description="Users, menu, carts, orders and payments for the food storefront",
    route_domain_map=SERVICE_DOMAINS,
    routers=[user_router, product_router, cart_router, order_router, payment_router],
)


@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "OK",
            "services": sorted(prefix.strip("/") for prefix in SERVICE_DOMAINS),
            "domains": [identity.name, catalogue.name, ordering.name, payments.name],
        }
    )
