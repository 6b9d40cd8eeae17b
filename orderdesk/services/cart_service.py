# orderdesk/services/cart_service.py
from decimal import Decimal

from orderdesk.domain.errors import ErrorCode, Outcome
from orderdesk.domain.ports import CatalogProvider
from orderdesk.domain.schemas import Cart, OrderItem, Totals
from orderdesk.utils.money import ZERO, to_decimal
from orderdesk.utils.logging import get_logger

logger = get_logger(__name__)

HUNDRED = Decimal("100")


def compute_totals(cart: Cart) -> Totals:
    """
    Subtotal, discount and total of a cart, unrounded.

    Rounding to cents belongs to whoever displays the numbers
    (see Totals.rounded), so the sum of many lines never drifts.
    """
    subtotal = sum((i.line_total for i in cart.items), ZERO)
    discount_amount = subtotal * (cart.discount_percentage / HUNDRED)
    return Totals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        total=subtotal - discount_amount,
    )


class CartService:
    """
    Cart/pricing engine.

    Every command takes a cart value and returns a new one wrapped in an
    Outcome; the cart passed in is never modified. Only the catalog is
    consulted (prices and current inventory), nothing is written.
    """

    def __init__(self, catalog: CatalogProvider):
        self.catalog = catalog

    # =====================================================
    # QUERY
    # =====================================================
    @staticmethod
    def compute_totals(cart: Cart) -> Totals:
        return compute_totals(cart)

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_item(self, cart: Cart, product_id: str, quantity: int) -> Outcome[Cart]:
        if quantity <= 0:
            return Outcome.failure(ErrorCode.INVALID_QUANTITY, "Quantity must be greater than 0")

        product = self.catalog.get_product(product_id)
        if not product:
            return Outcome.failure(ErrorCode.PRODUCT_NOT_FOUND, f"Product {product_id} does not exist")

        if quantity > product.inventory:
            return Outcome.failure(
                ErrorCode.INVALID_QUANTITY,
                f"Only {product.inventory} of product {product_id} in stock, requested {quantity}",
            )

        item = OrderItem(product_id=product.id, quantity=quantity, price=product.price)
        logger.debug(f"Adding {quantity} x {product.id} at {product.price} to cart")
        return Outcome.success(cart.model_copy(update={"items": cart.items + (item,)}))

    def remove_item(self, cart: Cart, index: int) -> Outcome[Cart]:
        if not 0 <= index < len(cart.items):
            return Outcome.failure(ErrorCode.OUT_OF_RANGE, f"No cart item at index {index}")

        items = cart.items[:index] + cart.items[index + 1:]
        return Outcome.success(cart.model_copy(update={"items": items}))

    def update_quantity(self, cart: Cart, index: int, new_quantity: int) -> Outcome[Cart]:
        if not 0 <= index < len(cart.items):
            return Outcome.failure(ErrorCode.OUT_OF_RANGE, f"No cart item at index {index}")

        if new_quantity <= 0:
            return Outcome.failure(ErrorCode.INVALID_QUANTITY, "Quantity must be greater than 0")

        item = cart.items[index]
        product = self.catalog.get_product(item.product_id)
        if not product:
            return Outcome.failure(ErrorCode.PRODUCT_NOT_FOUND, f"Product {item.product_id} does not exist")

        if new_quantity > product.inventory:
            return Outcome.failure(
                ErrorCode.INVALID_QUANTITY,
                f"Only {product.inventory} of product {item.product_id} in stock, requested {new_quantity}",
            )

        items = list(cart.items)
        items[index] = item.model_copy(update={"quantity": new_quantity})
        return Outcome.success(cart.model_copy(update={"items": tuple(items)}))

    def set_discount(self, cart: Cart, percentage) -> Outcome[Cart]:
        """Clamp to [0, 100] on the way in; an out-of-range percentage never reaches the cart."""
        try:
            value = to_decimal(percentage)
        except ValueError:
            return Outcome.failure(ErrorCode.INVALID_DISCOUNT, f"Discount is not a number: {percentage!r}")

        if not value.is_finite():
            return Outcome.failure(ErrorCode.INVALID_DISCOUNT, f"Discount is not a number: {percentage!r}")

        clamped = min(max(value, ZERO), HUNDRED)
        return Outcome.success(cart.model_copy(update={"discount_percentage": clamped}))
