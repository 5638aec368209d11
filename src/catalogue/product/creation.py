"""Product creation: command and handler."""

from protean import handle
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class CreateProduct:
    title: String(required=True, max_length=255)
    category: String(required=True, max_length=50)
    price: Integer(required=True)
    image: String(required=True, max_length=500)
    description: Text(required=True)
    inventory: Integer()


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        product = Product.create(
            product_id=repo.next_product_id(),
            title=command.title,
            category=command.category,
            price=command.price,
            image=command.image,
            description=command.description,
            inventory=command.inventory,
        )
        repo.add(product)
        return product.product_id
