"""Tests for the catalog and order history stores."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from orderdesk.data.models import ProductModel
from orderdesk.data.seed import PRODUCTS, seed
from orderdesk.domain.order_status import OrderStatus
from orderdesk.domain.schemas import Cart, OrderItem, OrderOut
from orderdesk.repos import like_pattern
from orderdesk.repos.cart_repo import CartRepo
from orderdesk.repos.order_repo import OrderRepo
from orderdesk.repos.product_repo import CatalogRepo


class TestSeed:
    def test_seeds_empty_store_once(self, db):
        assert seed(db) == len(PRODUCTS)
        assert seed(db) == 0
        assert db.query(ProductModel).count() == len(PRODUCTS)

    def test_prices_are_exact(self, db):
        seed(db)

        assert CatalogRepo(db).get_product("1").price == Decimal("199.99")
        assert CatalogRepo(db).get_product("3").image.startswith("https://")


class TestCatalogRepo:
    def test_get_missing(self, catalog):
        assert catalog.get_product("nope") is None

    def test_list_and_search(self, db):
        seed(db)
        repo = CatalogRepo(db)

        assert [p.id for p in repo.list_products()] == ["1", "2", "3", "4", "5"]
        assert [p.id for p in repo.list_products("wireless")] == ["1", "5"]

    def test_search_wildcards_match_literally(self, db):
        seed(db)
        repo = CatalogRepo(db)

        assert repo.list_products("%") == []
        assert repo.list_products("_") == []

    def test_apply_delta(self, catalog):
        assert catalog.apply_inventory_delta("A", -2).inventory == 3
        assert catalog.apply_inventory_delta("A", 4).inventory == 7

    def test_delta_below_zero_raises(self, catalog):
        with pytest.raises(ValueError):
            catalog.apply_inventory_delta("A", -6)
        assert catalog.get_product("A").inventory == 5

    def test_delta_unknown_product_raises(self, catalog):
        with pytest.raises(ValueError):
            catalog.apply_inventory_delta("nope", -1)


class TestOrderRepo:
    def make_order(self, order_id="o-1", customer=None):
        return OrderOut(
            id=order_id,
            items=[
                OrderItem(product_id="A", quantity=1, price=Decimal("100.00")),
                OrderItem(product_id="B", quantity=2, price=Decimal("19.99")),
            ],
            total=Decimal("139.98"),
            status=OrderStatus.PENDING,
            created_at=datetime.now(timezone.utc),
            customer=customer,
            tags=["rush"],
        )

    def test_append_and_get(self, db, catalog):
        repo = OrderRepo(db)
        repo.append(self.make_order())
        repo.commit()

        stored = repo.get("o-1")
        assert [i.product_id for i in stored.items] == ["A", "B"]
        assert stored.total == Decimal("139.98")
        assert stored.tags == ["rush"]

    def test_update_status(self, db, catalog):
        repo = OrderRepo(db)
        repo.append(self.make_order())

        assert repo.update_status("o-1", "processing").status == OrderStatus.PROCESSING
        assert repo.update_status("missing", "processing") is None

    def test_rollback_discards_append(self, db, catalog):
        repo = OrderRepo(db)
        repo.append(self.make_order())
        repo.rollback()

        assert repo.get("o-1") is None

    def test_created_at_reads_back_as_utc(self, db, catalog, session_factory):
        committed = self.make_order()
        repo = OrderRepo(db)
        repo.append(committed)
        repo.commit()

        fresh = session_factory()
        try:
            stored = OrderRepo(fresh).get("o-1")
        finally:
            fresh.close()

        assert stored.created_at.tzinfo is not None
        assert stored.created_at.utcoffset() == timedelta(0)
        assert stored.created_at == committed.created_at

    def test_created_at_from_other_zone_is_stored_as_utc(self, db, catalog, session_factory):
        local = datetime(2026, 3, 1, 12, 30, tzinfo=timezone(timedelta(hours=2)))
        repo = OrderRepo(db)
        repo.append(self.make_order().model_copy(update={"created_at": local}))
        repo.commit()

        fresh = session_factory()
        try:
            stored = OrderRepo(fresh).get("o-1")
        finally:
            fresh.close()

        assert stored.created_at == datetime(2026, 3, 1, 10, 30, tzinfo=timezone.utc)
        assert stored.created_at.tzinfo == timezone.utc


class TestCartRepo:
    def cart(self, *lines, discount="0"):
        return Cart(
            items=tuple(OrderItem(product_id=p, quantity=q, price=Decimal(price)) for p, q, price in lines),
            discount_percentage=Decimal(discount),
        )

    def test_create_starts_empty(self, db):
        repo = CartRepo(db)
        cart_id = repo.create()
        repo.commit()

        assert repo.get(cart_id) == Cart()

    def test_save_replaces_items_in_order(self, db):
        repo = CartRepo(db)
        cart_id = repo.create()
        repo.save(cart_id, self.cart(("A", 1, "100.00"), ("B", 2, "19.99")))
        repo.save(cart_id, self.cart(("B", 3, "19.99"), ("A", 1, "100.00"), discount="12.5"))
        repo.commit()

        stored = repo.get(cart_id)
        assert [(i.product_id, i.quantity, i.price) for i in stored.items] == [
            ("B", 3, Decimal("19.99")),
            ("A", 1, Decimal("100.00")),
        ]
        assert stored.discount_percentage == Decimal("12.5")

    def test_missing_cart(self, db):
        repo = CartRepo(db)

        assert repo.get("nope") is None
        assert repo.save("nope", Cart()) is False
        assert repo.delete("nope") is False

    def test_delete(self, db):
        repo = CartRepo(db)
        cart_id = repo.create()
        repo.save(cart_id, self.cart(("A", 1, "100.00")))
        repo.commit()

        assert repo.delete(cart_id) is True
        repo.commit()
        assert repo.get(cart_id) is None


@pytest.mark.parametrize(
    "text, pattern",
    [
        ("ash", "%ash%"),
        ("a_b", "%a\\_b%"),
        ("100%", "%100\\%%"),
        ("c:\\tmp", "%c:\\\\tmp%"),
    ],
)
def test_like_pattern_escapes_wildcards(text, pattern):
    assert like_pattern(text) == pattern
