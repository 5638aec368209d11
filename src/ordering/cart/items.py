"""Cart item management: commands, handler and the cart read."""

from protean import handle
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import ordering
from shared.errors import NotFoundError


@ordering.command(part_of="Cart")
class AddToCart:
    user_id = String(required=True, max_length=255)
    product_id = Integer(required=True)
    quantity = Integer(required=True)
    note = Text()


@ordering.command(part_of="Cart")
class UpdateCartItem:
    """Set a line's absolute quantity; ``0`` or less removes the line."""

    user_id = String(required=True, max_length=255)
    product_id = Integer(required=True)
    quantity = Integer(required=True)
    note = Text()


@ordering.command(part_of="Cart")
class RemoveFromCart:
    user_id = String(required=True, max_length=255)
    product_id = Integer(required=True)


@ordering.command(part_of="Cart")
class ClearCart:
    user_id = String(required=True, max_length=255)


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user_or_new(command.user_id)
        cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            note=command.note,
        )
        repo.add(cart)
        return cart.lines()

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user_or_new(command.user_id)
        if not cart.update_item(
            product_id=command.product_id,
            quantity=command.quantity,
            note=command.note,
        ):
            raise NotFoundError("Item not found in cart", user_id=command.user_id, product_id=command.product_id)
        repo.add(cart)
        return cart.lines()

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user_or_new(command.user_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)
        return cart.lines()

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            return []
        cart.clear()
        repo.add(cart)
        return []


def get_cart(user_id) -> list[dict]:
    """Current line items for ``user_id``; empty when absent or expired."""
    cart = current_domain.repository_for(Cart).for_user(user_id)
    return cart.lines() if cart else []
