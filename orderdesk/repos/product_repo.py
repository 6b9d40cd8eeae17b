# orderdesk/repos/product_repo.py
from typing import List, Optional

from sqlalchemy.orm import Session

from orderdesk.data.models.product import ProductModel
from orderdesk.domain.schemas import ProductOut
from orderdesk.repos import like_pattern


class CatalogRepo:
    """
    Catalog provider over the in-process store.

    Does not commit: inventory changes become visible when the caller
    commits the surrounding transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductOut | None:
        product = self.db.get(ProductModel, product_id)
        return ProductOut.model_validate(product) if product else None

    def list_products(self, search: Optional[str] = None) -> List[ProductOut]:
        query = self.db.query(ProductModel)
        if search:
            query = query.filter(ProductModel.name.ilike(like_pattern(search), escape="\\"))
        return [ProductOut.model_validate(p) for p in query.order_by(ProductModel.id).all()]

    def apply_inventory_delta(self, product_id: str, delta: int) -> ProductOut:
        product = self.db.get(ProductModel, product_id)
        if not product:
            raise ValueError(f"Product {product_id} does not exist")

        new_inventory = product.inventory + delta
        if new_inventory < 0:
            raise ValueError(
                f"Inventory for product {product_id} would drop below zero "
                f"({product.inventory} {delta:+d})"
            )

        product.inventory = new_inventory
        self.db.flush()
        return ProductOut.model_validate(product)
