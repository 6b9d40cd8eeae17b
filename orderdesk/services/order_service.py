# orderdesk/services/order_service.py
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from orderdesk.domain.errors import ErrorCode, Outcome
from orderdesk.domain.order_status import OrderStatus, can_transition
from orderdesk.domain.ports import CatalogProvider
from orderdesk.domain.schemas import Cart, CommitResult, InventoryDelta, OrderOut, normalize_tags
from orderdesk.repos.cart_repo import CartRepo
from orderdesk.repos.order_repo import OrderRepo
from orderdesk.repos.product_repo import CatalogRepo
from orderdesk.services.cart_service import compute_totals
from orderdesk.services.lock_service import default_commit_lock
from orderdesk.utils.settings import RESTOCK_ON_CANCEL
from orderdesk.utils.logging import get_logger

logger = get_logger(__name__)


def inventory_deltas(items, sign: int = -1) -> List[InventoryDelta]:
    """One delta per product, in first-seen order. sign=-1 takes stock out, +1 puts it back."""
    per_product = OrderedDict()
    for item in items:
        per_product[item.product_id] = per_product.get(item.product_id, 0) + item.quantity
    return [InventoryDelta(product_id=pid, delta=sign * qty) for pid, qty in per_product.items()]


class OrderService:
    """
    Commit of a cart into an order, and the order status lifecycle.

    The order row and the catalog inventory share one database session, so
    a commit is a single transaction: either the order is recorded and all
    stock is taken, or nothing changes.
    """

    def __init__(
        self,
        db: Session,
        catalog: CatalogProvider | None = None,
        lock=None,
        restock_on_cancel: bool = RESTOCK_ON_CANCEL,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.catalog = catalog or CatalogRepo(db)
        self.lock = lock or default_commit_lock()
        self.restock_on_cancel = restock_on_cancel

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, order_id: str) -> Outcome[OrderOut]:
        order = self.repo.get(order_id)
        if not order:
            return Outcome.failure(ErrorCode.ORDER_NOT_FOUND, f"Order {order_id} does not exist")
        return Outcome.success(order)

    def list_orders(self, status: OrderStatus | None = None, search: str | None = None) -> List[OrderOut]:
        return self.repo.list(
            status=status.value if status else None,
            search=search or None,
        )

    # =====================================================
    # COMMANDS
    # =====================================================
    def commit_order(
        self,
        cart: Cart,
        customer: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Union[str, Iterable[str], None] = None,
        discard_cart_id: Optional[str] = None,
    ) -> Outcome[CommitResult]:
        """
        Use Case: freeze the cart into a pending order and take its stock.

        1. rejects an empty cart
        2. re-checks stock (the check on add is only advisory)
        3. appends the order, applies the deltas, commits, all under the commit lock

        discard_cart_id names a stored cart to delete in the same transaction.
        """
        if cart.is_empty:
            return Outcome.failure(ErrorCode.EMPTY_CART_COMMIT, "Cannot create an order from an empty cart")

        deltas = inventory_deltas(cart.items)
        totals = compute_totals(cart)

        with self.lock.hold():
            for d in deltas:
                product = self.catalog.get_product(d.product_id)
                if not product:
                    return Outcome.failure(ErrorCode.PRODUCT_NOT_FOUND, f"Product {d.product_id} does not exist")
                if product.inventory < -d.delta:
                    logger.warning(
                        f"Rejected commit: product {d.product_id} has {product.inventory} in stock, "
                        f"cart needs {-d.delta}"
                    )
                    return Outcome.failure(
                        ErrorCode.INVALID_QUANTITY,
                        f"Only {product.inventory} of product {d.product_id} in stock, cart needs {-d.delta}",
                    )

            order = OrderOut(
                id=str(uuid.uuid4()),
                items=list(cart.items),
                total=totals.total,
                discount_percentage=cart.discount_percentage,
                status=OrderStatus.PENDING,
                created_at=datetime.now(timezone.utc),
                customer=customer or None,
                notes=notes or None,
                tags=normalize_tags(tags),
            )

            try:
                created = self.repo.append(order)
                for d in deltas:
                    self.catalog.apply_inventory_delta(d.product_id, d.delta)
                if discard_cart_id:
                    self.carts.delete(discard_cart_id)
                self.repo.commit()
            except Exception as e:
                logger.error(f"Commit of order {order.id} failed, rolling back: {e}")
                self.repo.rollback()
                raise

        logger.info(f"Order {created.id} created with {len(created.items)} items, total {created.total}")
        return Outcome.success(CommitResult(order=created, inventory_deltas=deltas))

    def commit_cart(
        self,
        cart_id: str,
        customer: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Union[str, Iterable[str], None] = None,
    ) -> Outcome[CommitResult]:
        """
        Use Case: commit a server-held cart. Line prices are the snapshots
        taken when the items were added; the cart is discarded on success.
        """
        cart = self.carts.get(cart_id)
        if cart is None:
            return Outcome.failure(ErrorCode.CART_NOT_FOUND, f"Cart {cart_id} does not exist")
        return self.commit_order(cart, customer, notes, tags, discard_cart_id=cart_id)

    def update_status(self, order_id: str, new_status: OrderStatus) -> Outcome[OrderOut]:
        """
        Use Case: move an order along pending -> processing -> completed,
        or cancel it while still pending/processing.
        """
        try:
            new_status = OrderStatus(new_status)
        except ValueError:
            return Outcome.failure(ErrorCode.INVALID_TRANSITION, f"Unknown order status: {new_status!r}")

        with self.lock.hold():
            order = self.repo.get(order_id)
            if not order:
                return Outcome.failure(ErrorCode.ORDER_NOT_FOUND, f"Order {order_id} does not exist")

            if not can_transition(order.status, new_status):
                return Outcome.failure(
                    ErrorCode.INVALID_TRANSITION,
                    f"Order {order_id} cannot go from {order.status.value} to {new_status.value}",
                )

            restock = new_status == OrderStatus.CANCELLED and self.restock_on_cancel
            try:
                updated = self.repo.update_status(order_id, new_status.value)
                if restock:
                    for d in inventory_deltas(order.items, sign=1):
                        self.catalog.apply_inventory_delta(d.product_id, d.delta)
                self.repo.commit()
            except Exception as e:
                logger.error(f"Status change of order {order_id} failed, rolling back: {e}")
                self.repo.rollback()
                raise

        logger.info(
            f"Order {order_id}: {order.status.value} -> {new_status.value}"
            + (" (restocked)" if restock else "")
        )
        return Outcome.success(updated)
