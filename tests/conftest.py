import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture

MENU_PRICES = {3: 25000, 7: 25000, 12: 60000}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay and the in-memory catalogue adapter before collection."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("CATALOGUE_ADAPTER", "fake")
    os.environ.setdefault("JWT_SECRET", "test-secret")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


def reset_domain_data(domain):
    """Wipe a domain's in-memory stores."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()
        for _, broker in domain.brokers.items():
            broker._data_reset()
        domain.event_store.store._data_reset()


@pytest.fixture(scope="session")
def reset_data():
    return reset_domain_data


@pytest.fixture(scope="session")
def identity_bed():
    from identity.domain import identity

    bed = DomainFixture(identity)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def payments_bed():
    from payments.domain import payments

    bed = DomainFixture(payments)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def fake_catalogue():
    """A fresh fixed-price catalogue for every test."""
    from ordering.catalogue import reset_catalogue, set_catalogue
    from ordering.catalogue.fake_adapter import FakeCatalogue

    catalogue = FakeCatalogue(MENU_PRICES)
    set_catalogue(catalogue)
    yield catalogue
    reset_catalogue()


@pytest.fixture
def services_app(identity_bed, catalogue_bed, ordering_bed, payments_bed, reset_data):
    """The combined user, product, cart, order and payment services, reset after the test."""
    from catalogue.api import product_router
    from catalogue.domain import catalogue
    from identity.api import router as identity_router
    from identity.domain import identity
    from ordering.api import cart_router, order_router
    from ordering.domain import ordering
    from payments.api import payment_router
    from payments.domain import payments
    from shared.web import build_app

    app = build_app(
        title="Storefront API",
        route_domain_map={
            "/users": identity,
            "/products": catalogue,
            "/cart": ordering,
            "/orders": ordering,
            "/payments": payments,
        },
        routers=[identity_router, product_router, cart_router, order_router, payment_router],
    )
    yield app

    for domain in (identity, catalogue, ordering, payments):
        reset_data(domain)
