"""Orders port: the payments context's view of placed orders.

Payments only need an order's owner, total and status to decide whether it
can be paid. Adapters are swapped via configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

PENDING = 0


class OrderLookupError(Exception):
    """The order is unknown or the order store could not answer."""


@dataclass(frozen=True)
class OrderSummary:
    order_number: str
    customer_phone: str
    total_amount: int
    status: int

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING


class OrdersPort(ABC):
    @abstractmethod
    def find(self, order_reference: str) -> OrderSummary:
        """Look an order up by display number (``DH12``) or identity.

        Raises:
            OrderLookupError: the order is unknown or the order store is unreachable.
        """
        ...
