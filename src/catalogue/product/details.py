"""Product detail updates: command and handler."""

from protean import handle
from protean.fields import Boolean, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Integer(required=True)
    title: String(max_length=255)
    category: String(max_length=50)
    price: Integer()
    image: String(max_length=500)
    description: Text()
    is_active: Boolean()
    inventory: Integer()


@catalogue.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update(
            title=command.title,
            category=command.category,
            price=command.price,
            image=command.image,
            description=command.description,
            is_active=command.is_active,
            inventory=command.inventory,
        )
        repo.add(product)
