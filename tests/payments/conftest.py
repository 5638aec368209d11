import pytest


@pytest.fixture(autouse=True)
def _ctx(payments_bed, reset_data):
    from payments.domain import payments

    with payments_bed.domain_context():
        yield

    reset_data(payments)


@pytest.fixture()
def fake_orders():
    """Orders the payment commands can be checked against, without the ordering domain."""
    from payments.orders import reset_orders, set_orders
    from payments.orders.fake_adapter import FakeOrders

    orders = FakeOrders()
    orders.add("DH1", "0901234567", 80000)
    orders.add("DH2", "0901234567", 55000, status=1)
    set_orders(orders)
    yield orders
    reset_orders()
