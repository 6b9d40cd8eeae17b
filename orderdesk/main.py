# orderdesk/main.py
from fastapi import FastAPI
import uvicorn

from orderdesk.data.database import Base, engine
from orderdesk.data.seed import seed
from orderdesk.api.routers import carts, health, invoices, orders, products
from orderdesk.utils.logging import get_logger

# register every model before create_all
from orderdesk.data import models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ready: {list(Base.metadata.tables.keys())}")
    seed()


def create_app() -> FastAPI:
    init_db()

    app = FastAPI(
        title="Order Desk",
        version="1.0.0",
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(invoices.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
