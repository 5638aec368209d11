"""Local catalogue adapter: talks to the catalogue domain in the same process."""

from protean.exceptions import ObjectNotFoundError

from ordering.catalogue.port import CatalogueLookupError, CataloguePort


class LocalCatalogue(CataloguePort):
    """Runs catalogue queries and commands inside the catalogue domain context.

    The catalogue domain must be initialized (``catalogue.init()``) before use.
    """

    def _domain(self):
        from catalogue.domain import catalogue

        return catalogue

    def unit_price(self, product_id: int) -> int:
        from catalogue.product.product import Product

        catalogue = self._domain()
        with catalogue.domain_context():
            try:
                return catalogue.repository_for(Product).get(int(product_id)).price
            except ObjectNotFoundError as exc:
                raise CatalogueLookupError(f"Unknown product {product_id}") from exc

    def record_sale(self, product_id: int, quantity: int) -> None:
        from catalogue.product.lifecycle import RecordSale

        catalogue = self._domain()
        with catalogue.domain_context():
            try:
                catalogue.process(RecordSale(product_id=int(product_id), quantity=quantity), asynchronous=False)
            except ObjectNotFoundError as exc:
                raise CatalogueLookupError(f"Unknown product {product_id}") from exc
