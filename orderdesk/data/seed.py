# orderdesk/data/seed.py
from decimal import Decimal

from orderdesk.data.database import SessionLocal
from orderdesk.data.models import ProductModel
from orderdesk.utils.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/150"

PRODUCTS = [
    {
        "id": "1",
        "name": "Premium Wireless Headphones",
        "price": Decimal("199.99"),
        "inventory": 50,
        "description": "High-quality wireless headphones with noise cancellation",
    },
    {
        "id": "2",
        "name": "Smart Watch Series 5",
        "price": Decimal("299.99"),
        "inventory": 30,
        "description": "Latest smartwatch with health monitoring features",
    },
    {
        "id": "3",
        "name": "Professional Camera Kit",
        "price": Decimal("899.99"),
        "inventory": 15,
        "description": "Complete camera kit for professional photography",
    },
    {
        "id": "4",
        "name": "Gaming Laptop Pro",
        "price": Decimal("1299.99"),
        "inventory": 20,
        "description": "High-performance gaming laptop with RTX graphics",
    },
    {
        "id": "5",
        "name": "Wireless Earbuds",
        "price": Decimal("79.99"),
        "inventory": 100,
        "description": "True wireless earbuds with premium sound quality",
    },
]


def seed(db=None, products=PRODUCTS) -> int:
    """Load the static catalog. Only seeds an empty store; returns how many products were added."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return 0
        for p in products:
            db.add(ProductModel(image=p.get("image", PLACEHOLDER_IMAGE), **{k: v for k, v in p.items() if k != "image"}))
        db.commit()
        logger.info(f"Seeded catalog with {len(products)} products")
        return len(products)
    finally:
        if own_session:
            db.close()
