# orderdesk/services/invoice_service.py
import re

from celery.result import AsyncResult
from sqlalchemy.orm import Session

from orderdesk.celery_worker import celery_app
from orderdesk.domain.errors import ErrorCode, Outcome
from orderdesk.domain.schemas import InvoiceOut
from orderdesk.repos.order_repo import OrderRepo
from orderdesk.tasks.invoice import send_invoice_task
from orderdesk.utils.settings import INVOICE_SEND_DELAY_SECONDS
from orderdesk.utils.logging import get_logger

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_RE.match(value) is not None


class InvoiceService:
    """
    Sending an invoice for an order.

    The send runs as a delayed Celery task; it can be cancelled until a
    worker picks it up, and its state tells success from failure. Nothing
    here reads or writes cart or catalog state.
    """

    def __init__(self, db: Session, delay: float = INVOICE_SEND_DELAY_SECONDS):
        self.repo = OrderRepo(db)
        self.delay = delay

    def send_invoice(
        self,
        order_id: str,
        to: str,
        cc: str | None = None,
        bcc: str | None = None,
        message: str | None = None,
    ) -> Outcome[InvoiceOut]:
        if not is_valid_email(to):
            return Outcome.failure(ErrorCode.INVALID_EMAIL, f"Invalid recipient address: {to!r}")

        for label, address in (("cc", cc), ("bcc", bcc)):
            if address and not is_valid_email(address):
                return Outcome.failure(ErrorCode.INVALID_EMAIL, f"Invalid {label} address: {address!r}")

        if not self.repo.get(order_id):
            return Outcome.failure(ErrorCode.ORDER_NOT_FOUND, f"Order {order_id} does not exist")

        result = send_invoice_task.apply_async(
            args=[order_id, to, cc or None, bcc or None, message or None],
            countdown=self.delay,
        )
        logger.info(f"Invoice for order {order_id} queued as task {result.id}")

        return Outcome.success(InvoiceOut(task_id=result.id, order_id=order_id, state=result.state))

    @staticmethod
    def invoice_status(task_id: str) -> InvoiceOut:
        result = AsyncResult(task_id, app=celery_app)
        order_id = None
        if result.successful() and isinstance(result.result, dict):
            order_id = result.result.get("order_id")
        return InvoiceOut(task_id=task_id, order_id=order_id, state=result.state)

    @staticmethod
    def cancel_invoice(task_id: str) -> InvoiceOut:
        celery_app.control.revoke(task_id)
        logger.info(f"Invoice task {task_id} revoked")
        return InvoiceOut(task_id=task_id, state="REVOKED")
