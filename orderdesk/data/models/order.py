from sqlalchemy import Column, String, Text, JSON
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from orderdesk.data.database import Base
from orderdesk.data.types import ExactDecimal, UTCDateTime


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)

    status = Column(String, nullable=False, default="pending")  # pending, processing, completed, cancelled
    total = Column(ExactDecimal, nullable=False)
    discount_percentage = Column(ExactDecimal, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    customer = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
