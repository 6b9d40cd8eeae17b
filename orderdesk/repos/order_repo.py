# orderdesk/repos/order_repo.py
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from orderdesk.data.models.order import OrderModel
from orderdesk.data.models.order_item import OrderItemModel
from orderdesk.domain.schemas import OrderOut
from orderdesk.repos import like_pattern


class OrderRepo:
    """Append-only order history. Like CatalogRepo, leaves commit/rollback to the caller."""

    def __init__(self, db: Session):
        self.db = db

    def append(self, order: OrderOut) -> OrderOut:
        model = OrderModel(
            id=order.id,
            status=order.status.value,
            total=order.total,
            discount_percentage=order.discount_percentage,
            created_at=order.created_at,
            customer=order.customer,
            notes=order.notes,
            tags=list(order.tags),
            items=[
                OrderItemModel(
                    position=position,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                )
                for position, item in enumerate(order.items)
            ],
        )
        self.db.add(model)
        self.db.flush()
        return OrderOut.model_validate(model)

    def get(self, order_id: str) -> OrderOut | None:
        order = self.db.get(OrderModel, order_id)
        return OrderOut.model_validate(order) if order else None

    def update_status(self, order_id: str, status: str) -> OrderOut | None:
        order = self.db.get(OrderModel, order_id)
        if order:
            order.status = status
            self.db.flush()
            return OrderOut.model_validate(order)
        return None

    def list(self, status: Optional[str] = None, search: Optional[str] = None) -> List[OrderOut]:
        query = self.db.query(OrderModel)
        if status:
            query = query.filter(OrderModel.status == status)
        if search:
            query = query.filter(
                or_(
                    OrderModel.id.contains(search, autoescape=True),
                    OrderModel.customer.ilike(like_pattern(search), escape="\\"),
                )
            )
        orders = query.order_by(OrderModel.created_at.desc(), OrderModel.id).all()
        return [OrderOut.model_validate(o) for o in orders]

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
