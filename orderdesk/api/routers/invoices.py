# orderdesk/api/routers/invoices.py
from fastapi import APIRouter

from orderdesk.domain.schemas import InvoiceOut
from orderdesk.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("/{task_id}", response_model=InvoiceOut)
def invoice_status(task_id: str):
    return InvoiceService.invoice_status(task_id)


@router.delete("/{task_id}", response_model=InvoiceOut)
def cancel_invoice(task_id: str):
    return InvoiceService.cancel_invoice(task_id)
