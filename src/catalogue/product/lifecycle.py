"""Product lifecycle: deactivation and sales bookkeeping."""

from protean import handle
from protean.fields import Integer
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from shared.logging import get_logger

logger = get_logger(__name__)


@catalogue.command(part_of="Product")
class DeactivateProduct:
    product_id: Integer(required=True)


@catalogue.command(part_of="Product")
class RecordSale:
    product_id: Integer(required=True)
    quantity: Integer(required=True, min_value=1)


@catalogue.command_handler(part_of=Product)
class ManageLifecycleHandler:
    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)

    @handle(RecordSale)
    def record_sale(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        available = product.inventory or 0
        product.record_sale(command.quantity)
        repo.add(product)

        if command.quantity > available:
            logger.warning(
                "Inventory exhausted",
                product_id=product.product_id,
                requested=command.quantity,
                available=available,
            )
        return product.inventory
