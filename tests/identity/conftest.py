import pytest


@pytest.fixture(autouse=True)
def _ctx(identity_bed, reset_data):
    from identity.domain import identity

    with identity_bed.domain_context():
        yield

    reset_data(identity)
