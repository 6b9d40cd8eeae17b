from sqlalchemy import Column, Integer, String, Text

from orderdesk.data.database import Base
from orderdesk.data.types import ExactDecimal


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    price = Column(ExactDecimal, nullable=False)
    inventory = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=False, default="")
    image = Column(String, nullable=False, default="")
