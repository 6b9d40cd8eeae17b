# orderdesk/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Iterable, List, Optional, Tuple, Union
from decimal import Decimal
from datetime import datetime

from orderdesk.domain.order_status import OrderStatus
from orderdesk.utils.money import round_cents


def normalize_tags(tags: Union[str, Iterable[str], None]) -> List[str]:
    """Comma separated string or list -> trimmed, non-empty, unique labels in first-seen order."""
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    seen = []
    for tag in tags:
        label = str(tag).strip()
        if label and label not in seen:
            seen.append(label)
    return seen


class ProductOut(BaseModel):
    """Catalog entry."""

    id: str
    name: str
    price: Decimal = Field(..., ge=0)
    inventory: int = Field(..., ge=0)
    description: str = ""
    image: str = ""

    model_config = ConfigDict(from_attributes=True)


class OrderItem(BaseModel):
    """Line in a cart or order. `price` is a snapshot taken when the item was added."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0)

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Cart(BaseModel):
    """Immutable cart value; every engine operation returns a new one."""

    items: Tuple[OrderItem, ...] = ()
    discount_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return not self.items


class Totals(BaseModel):
    subtotal: Decimal
    discount_amount: Decimal
    total: Decimal

    def rounded(self) -> "Totals":
        return Totals(
            subtotal=round_cents(self.subtotal),
            discount_amount=round_cents(self.discount_amount),
            total=round_cents(self.total),
        )


class InventoryDelta(BaseModel):
    product_id: str
    delta: int


class OrderOut(BaseModel):
    """Committed order (response)."""

    id: str
    items: List[OrderItem]
    total: Decimal
    discount_percentage: Decimal = Decimal("0")
    status: OrderStatus
    created_at: datetime
    customer: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = []

    model_config = ConfigDict(from_attributes=True)


class CommitResult(BaseModel):
    order: OrderOut
    inventory_deltas: List[InventoryDelta]


# =====================================================
# REQUEST / RESPONSE BODIES
# =====================================================
class AddItemIn(BaseModel):
    product_id: str
    quantity: int = 1


class UpdateQuantityIn(BaseModel):
    quantity: int


class DiscountIn(BaseModel):
    discount_percentage: Decimal


class CartOut(BaseModel):
    """Stored cart plus totals rounded to cents for display."""

    cart_id: str
    cart: Cart
    totals: Totals


class OrderCreate(BaseModel):
    """Commit a server-held cart. Line prices never come from the client."""

    cart_id: str
    customer: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = []

    model_config = ConfigDict(extra="forbid")

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return normalize_tags(value)


class StatusUpdate(BaseModel):
    status: OrderStatus


class InvoiceIn(BaseModel):
    to: str
    cc: Optional[str] = None
    bcc: Optional[str] = None
    message: Optional[str] = None


class InvoiceOut(BaseModel):
    task_id: str
    order_id: Optional[str] = None
    state: str
