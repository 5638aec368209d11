import pytest


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed, reset_data):
    from catalogue.domain import catalogue

    with catalogue_bed.domain_context():
        yield

    reset_data(catalogue)
