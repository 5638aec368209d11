"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartItemAdded:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = String(required=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    note = Text()


@ordering.event(part_of="Cart")
class CartItemUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = String(required=True)
    product_id = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = String(required=True)
    product_id = Integer(required=True)


@ordering.event(part_of="Cart")
class CartExpired:
    """An idle cart's lines were discarded on its next write."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = String(required=True)
    items_discarded = Integer(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = String(required=True)
    items_removed = Integer(required=True)
