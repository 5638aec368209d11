"""Catalogue port: the ordering context's view of the product catalogue.

Ordering needs two things from the catalogue: the current unit price of a
product and a way to book sold units against inventory. Adapters are
swapped via configuration.
"""

from abc import ABC, abstractmethod


class CatalogueLookupError(Exception):
    """The catalogue could not answer (unknown product or unreachable service)."""


class CataloguePort(ABC):
    @abstractmethod
    def unit_price(self, product_id: int) -> int:
        """Current price of a product in whole VND.

        Raises:
            CatalogueLookupError: the product is unknown or the catalogue is unreachable.
        """
        ...

    @abstractmethod
    def record_sale(self, product_id: int, quantity: int) -> None:
        """Move ``quantity`` units of a product from inventory to sold.

        Raises:
            CatalogueLookupError: the product is unknown or the catalogue is unreachable.
        """
        ...
