# orderdesk/api/routers/orders.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from orderdesk.api import unwrap
from orderdesk.data.database import get_db
from orderdesk.domain.order_status import OrderStatus
from orderdesk.domain.schemas import InvoiceIn, InvoiceOut, OrderCreate, OrderOut, StatusUpdate
from orderdesk.services.invoice_service import InvoiceService
from orderdesk.services.lock_service import CommitLockBusy
from orderdesk.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    """
    Commits the stored cart as a pending order, takes its stock and drops the cart.
    """
    svc = get_service(db)
    try:
        result = unwrap(svc.commit_cart(payload.cart_id, payload.customer, payload.notes, payload.tags))
    except CommitLockBusy as e:
        raise HTTPException(status_code=409, detail=str(e))
    return result.order


@router.get("/", response_model=List[OrderOut])
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return get_service(db).list_orders(status=status, search=q)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)):
    return unwrap(get_service(db).get_order(order_id))


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_status(order_id: str, payload: StatusUpdate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return unwrap(svc.update_status(order_id, payload.status))
    except CommitLockBusy as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{order_id}/invoice", response_model=InvoiceOut, status_code=202)
def send_invoice(order_id: str, payload: InvoiceIn, db: Session = Depends(get_db)):
    svc = InvoiceService(db)
    return unwrap(svc.send_invoice(order_id, payload.to, payload.cc, payload.bcc, payload.message))
