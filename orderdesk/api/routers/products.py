# orderdesk/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from orderdesk.data.database import get_db
from orderdesk.domain.schemas import ProductOut
from orderdesk.repos.product_repo import CatalogRepo

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=List[ProductOut])
def list_products(q: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return CatalogRepo(db).list_products(search=q)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    product = CatalogRepo(db).get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
