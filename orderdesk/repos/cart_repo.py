# orderdesk/repos/cart_repo.py
import uuid

from sqlalchemy.orm import Session

from orderdesk.data.models.cart import CartModel
from orderdesk.data.models.cart_item import CartItemModel
from orderdesk.domain.schemas import Cart, OrderItem


class CartRepo:
    """
    Server-held carts.

    Stores whatever cart value the engine produced; prices in it were
    snapshotted from the catalog by CartService, never sent by a client.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self) -> str:
        cart = CartModel(id=str(uuid.uuid4()), discount_percentage=0)
        self.db.add(cart)
        self.db.flush()
        return cart.id

    def get(self, cart_id: str) -> Cart | None:
        cart = self.db.get(CartModel, cart_id)
        if not cart:
            return None
        return Cart(
            items=tuple(OrderItem.model_validate(i) for i in cart.items),
            discount_percentage=cart.discount_percentage,
        )

    def save(self, cart_id: str, value: Cart) -> bool:
        cart = self.db.get(CartModel, cart_id)
        if not cart:
            return False
        cart.discount_percentage = value.discount_percentage
        cart.items = [
            CartItemModel(
                position=position,
                product_id=item.product_id,
                quantity=item.quantity,
                price=item.price,
            )
            for position, item in enumerate(value.items)
        ]
        self.db.flush()
        return True

    def delete(self, cart_id: str) -> bool:
        cart = self.db.get(CartModel, cart_id)
        if not cart:
            return False
        self.db.delete(cart)
        self.db.flush()
        return True

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
