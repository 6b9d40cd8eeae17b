# orderdesk/tasks/invoice.py
from orderdesk.celery_worker import celery_app
from orderdesk.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="orderdesk.tasks.invoice.send_invoice_task")
def send_invoice_task(order_id: str, to: str, cc: str | None = None, bcc: str | None = None, message: str | None = None):
    """
    Celery task - a real system would hand the invoice to an email provider here.
    Only logs.
    """
    recipients = [r for r in (to, cc, bcc) if r]
    logger.info(f"[INVOICE] Order {order_id} sent to {', '.join(recipients)}")

    return {"order_id": order_id, "to": to, "cc": cc, "bcc": bcc, "message": message, "status": "sent"}
