# orderdesk/domain/ports.py
from typing import List, Optional, Protocol

from orderdesk.domain.schemas import OrderOut, ProductOut


class CatalogProvider(Protocol):
    """What the cart engine needs from the product catalog."""

    def get_product(self, product_id: str) -> Optional[ProductOut]: ...

    def list_products(self, search: Optional[str] = None) -> List[ProductOut]: ...

    def apply_inventory_delta(self, product_id: str, delta: int) -> ProductOut: ...


class OrderHistory(Protocol):
    def append(self, order: OrderOut) -> OrderOut: ...

    def update_status(self, order_id: str, status: str) -> Optional[OrderOut]: ...

    def get(self, order_id: str) -> Optional[OrderOut]: ...

    def list(self, status: Optional[str] = None, search: Optional[str] = None) -> List[OrderOut]: ...
