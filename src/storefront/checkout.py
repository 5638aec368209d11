"""Checkout: pricing the reconciled cart and submitting the order."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

import structlog

from storefront import cache as keys
from storefront.auth import expire_session, restore_session
from storefront.cache import LocalCache
from storefront.cart import CartReconciler
from storefront.catalog import CatalogSnapshot
from storefront.client import StorefrontClient
from storefront.config import StorefrontSettings
from storefront.errors import CheckoutSubmissionError, CheckoutValidationError, RemoteUnavailable, SessionExpired

logger = structlog.get_logger(__name__)


class DeliveryMethod(Enum):
    DELIVERY = "Giao tận nơi"
    PICKUP = "Tự đến lấy"


class CheckoutState(Enum):
    EDITING = "editing"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class PricedLine:
    product_id: int
    name: str
    quantity: int
    unit_price: int
    note: str

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Quote:
    lines: tuple[PricedLine, ...]
    delivery_method: DeliveryMethod
    subtotal: int
    shipping_fee: int
    total: int


@dataclass
class CheckoutForm:
    recipient_name: str = ""
    recipient_phone: str = ""
    delivery_address: str = ""
    delivery_date: date = field(default_factory=date.today)
    time_slot: str = ""
    note: str = ""


class Checkout:
    def __init__(
        self,
        cart: CartReconciler,
        catalog: CatalogSnapshot,
        client: StorefrontClient,
        cache: LocalCache,
        settings: StorefrontSettings | None = None,
    ):
        self.cart = cart
        self.catalog = catalog
        self.client = client
        self.cache = cache
        self.settings = settings or StorefrontSettings()
        self.delivery_method = DeliveryMethod.DELIVERY
        self.state = CheckoutState.EDITING
        self.last_order: dict | None = None

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def refresh_products(self) -> bool:
        return self.catalog.refresh(self.client)

    def quote(self) -> Quote:
        lines = tuple(
            PricedLine(
                product_id=int(line["id"]),
                name=self.catalog.name_for(line["id"]),
                quantity=line["soluong"],
                unit_price=self.catalog.price_for(line["id"]),
                note=line.get("note", ""),
            )
            for line in self.cart.items
        )
        subtotal = sum(line.line_total for line in lines)
        shipping_fee = self.settings.shipping_fee if self.delivery_method is DeliveryMethod.DELIVERY else 0
        return Quote(
            lines=lines,
            delivery_method=self.delivery_method,
            subtotal=subtotal,
            shipping_fee=shipping_fee,
            total=subtotal + shipping_fee,
        )

    def choose_delivery(self, method: DeliveryMethod) -> Quote:
        """Switch between delivery and pickup; the cart is not re-fetched."""
        self.delivery_method = method
        return self.quote()

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def validate(self, form: CheckoutForm) -> None:
        messages = {}
        if not form.recipient_name.strip():
            messages["tenguoinhan"] = "Vui lòng nhập tên người nhận"
        if not form.recipient_phone.strip():
            messages["sdtnhan"] = "Vui lòng nhập số điện thoại người nhận"
        if self.delivery_method is DeliveryMethod.DELIVERY and not form.delivery_address.strip():
            messages["diachinhan"] = "Vui lòng nhập địa chỉ nhận hàng"
        if not self.cart.items:
            messages["items"] = "Giỏ hàng trống"
        if restore_session(self.client, self.cache) is None:
            messages["user"] = "Vui lòng đăng nhập để đặt hàng"
        if messages:
            raise CheckoutValidationError(messages)

    def payload(self, form: CheckoutForm, quote: Quote) -> dict:
        return {
            "hinhthucgiao": quote.delivery_method.value,
            "ngaygiaohang": form.delivery_date.isoformat(),
            "thoigiangiao": form.time_slot,
            "ghichu": form.note,
            "tenguoinhan": form.recipient_name.strip(),
            "sdtnhan": form.recipient_phone.strip(),
            "diachinhan": form.delivery_address.strip(),
            "items": [{"id": line.product_id, "soluong": line.quantity, "note": line.note} for line in quote.lines],
            "tongtien": quote.total,
        }

    def submit(self, form: CheckoutForm) -> dict:
        """Validate, send the order, then empty the cart.

        Raises:
            CheckoutValidationError: the form is incomplete; nothing was sent.
            CheckoutSubmissionError: the order service failed; the cart is untouched.
        """
        self.validate(form)
        quote = self.quote()

        try:
            order = self.client.place_order(self.payload(form, quote))
        except RemoteUnavailable as exc:
            if isinstance(exc, SessionExpired):
                expire_session(self.client, self.cache, exc.status_code)
            self.state = CheckoutState.FAILED
            logger.warning("Order submission failed", status_code=exc.status_code, error=exc.message)
            raise CheckoutSubmissionError(exc.message, status_code=exc.status_code) from exc

        self.cart.clear()
        history = self.cache.get(keys.ORDERS, [])
        history.append(order)
        self.cache.set(keys.ORDERS, history)

        self.last_order = order
        self.state = CheckoutState.CONFIRMED
        logger.info("Order confirmed", order_number=order.get("id"), total=order.get("tongtien"))
        return order

    def order_history(self) -> list[dict]:
        """The user's orders from the Order Store, else the locally buffered ones."""
        user = restore_session(self.client, self.cache)
        if user is None:
            return []
        phone = user.get("phone")
        try:
            return self.client.orders_for(phone)
        except RemoteUnavailable as exc:
            if isinstance(exc, SessionExpired):
                expire_session(self.client, self.cache, exc.status_code)
            logger.warning("Order Store unreachable, using local order history", error=exc.message)
            return [order for order in self.cache.get(keys.ORDERS, []) if order.get("khachhang") == phone]
