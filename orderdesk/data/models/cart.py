from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from orderdesk.data.database import Base
from orderdesk.data.types import ExactDecimal, UTCDateTime


class CartModel(Base):
    """Cart of the order being composed; dropped once it is committed."""

    __tablename__ = "carts"

    id = Column(String(36), primary_key=True)
    discount_percentage = Column(ExactDecimal, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.position",
    )
