# orderdesk/celery_worker.py
from celery import Celery

from orderdesk.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "orderdesk",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# import tasks explicitly so the worker registers them
celery_app.conf.imports = (
    "orderdesk.tasks.invoice",
)

celery_app.conf.timezone = "UTC"
celery_app.conf.task_track_started = True
