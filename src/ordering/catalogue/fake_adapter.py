"""Fake catalogue adapter: an in-memory price list for tests and development."""

from ordering.catalogue.port import CatalogueLookupError, CataloguePort


class FakeCatalogue(CataloguePort):
    """Answers from a fixed price list; unknown products fail the lookup."""

    def __init__(self, prices: dict[int, int] | None = None):
        self.prices = dict(prices or {})
        self.sales: list[tuple[int, int]] = []
        self.should_succeed = True

    def configure(self, prices: dict[int, int] | None = None, should_succeed: bool = True):
        """Configure the fake catalogue behavior for testing."""
        if prices is not None:
            self.prices = dict(prices)
        self.should_succeed = should_succeed

    def unit_price(self, product_id: int) -> int:
        if not self.should_succeed:
            raise CatalogueLookupError("Catalogue unavailable")
        try:
            return self.prices[int(product_id)]
        except KeyError as exc:
            raise CatalogueLookupError(f"Unknown product {product_id}") from exc

    def record_sale(self, product_id: int, quantity: int) -> None:
        if not self.should_succeed:
            raise CatalogueLookupError("Catalogue unavailable")
        if int(product_id) not in self.prices:
            raise CatalogueLookupError(f"Unknown product {product_id}")
        self.sales.append((int(product_id), quantity))
