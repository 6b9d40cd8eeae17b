from sqlalchemy import Column, Integer, ForeignKey, String
from sqlalchemy.orm import relationship

from orderdesk.data.database import Base
from orderdesk.data.types import ExactDecimal


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(String(36), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    product_id = Column(String(36), nullable=False)

    quantity = Column(Integer, nullable=False)
    # snapshot of the catalog price when the line was added
    price = Column(ExactDecimal, nullable=False)

    cart = relationship("CartModel", back_populates="items")
