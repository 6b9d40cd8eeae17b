from sqlalchemy import Column, Integer, ForeignKey, String
from sqlalchemy.orm import relationship

from orderdesk.data.database import Base
from orderdesk.data.types import ExactDecimal


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    price = Column(ExactDecimal, nullable=False)

    order = relationship("OrderModel", back_populates="items")
