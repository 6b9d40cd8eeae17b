# orderdesk/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
REDIS_URL = os.getenv("REDIS_URL", "")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL or "memory://")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "cache+memory://")
COMMIT_LOCK_TTL_SECONDS = int(os.getenv("COMMIT_LOCK_TTL_SECONDS", 30))
INVOICE_SEND_DELAY_SECONDS = float(os.getenv("INVOICE_SEND_DELAY_SECONDS", 1.2))
RESTOCK_ON_CANCEL = os.getenv("RESTOCK_ON_CANCEL", "true").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
