# orderdesk/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from orderdesk.api import unwrap
from orderdesk.data.database import get_db
from orderdesk.domain.schemas import (
    AddItemIn,
    Cart,
    CartOut,
    DiscountIn,
    UpdateQuantityIn,
)
from orderdesk.repos.cart_repo import CartRepo
from orderdesk.repos.product_repo import CatalogRepo
from orderdesk.services.cart_service import CartService, compute_totals

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session):
    return CartService(catalog=CatalogRepo(db))


def cart_out(cart_id: str, cart: Cart) -> CartOut:
    return CartOut(cart_id=cart_id, cart=cart, totals=compute_totals(cart).rounded())


def load_cart(repo: CartRepo, cart_id: str) -> Cart:
    cart = repo.get(cart_id)
    if cart is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "cart_not_found", "message": f"Cart {cart_id} does not exist"},
        )
    return cart


def store(repo: CartRepo, cart_id: str, outcome) -> CartOut:
    # a failed command leaves the stored cart as it was
    cart = unwrap(outcome)
    repo.save(cart_id, cart)
    repo.commit()
    return cart_out(cart_id, cart)


@router.post("/", response_model=CartOut, status_code=201)
def create_cart(db: Session = Depends(get_db)):
    repo = CartRepo(db)
    cart_id = repo.create()
    repo.commit()
    return cart_out(cart_id, Cart())


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(cart_id: str, db: Session = Depends(get_db)):
    return cart_out(cart_id, load_cart(CartRepo(db), cart_id))


@router.delete("/{cart_id}", status_code=204)
def discard_cart(cart_id: str, db: Session = Depends(get_db)):
    repo = CartRepo(db)
    if not repo.delete(cart_id):
        raise HTTPException(
            status_code=404,
            detail={"code": "cart_not_found", "message": f"Cart {cart_id} does not exist"},
        )
    repo.commit()


@router.post("/{cart_id}/items", response_model=CartOut)
def add_item(cart_id: str, payload: AddItemIn, db: Session = Depends(get_db)):
    repo = CartRepo(db)
    cart = load_cart(repo, cart_id)
    return store(repo, cart_id, get_service(db).add_item(cart, payload.product_id, payload.quantity))


@router.patch("/{cart_id}/items/{index}", response_model=CartOut)
def update_quantity(cart_id: str, index: int, payload: UpdateQuantityIn, db: Session = Depends(get_db)):
    repo = CartRepo(db)
    cart = load_cart(repo, cart_id)
    return store(repo, cart_id, get_service(db).update_quantity(cart, index, payload.quantity))


@router.delete("/{cart_id}/items/{index}", response_model=CartOut)
def remove_item(cart_id: str, index: int, db: Session = Depends(get_db)):
    repo = CartRepo(db)
    cart = load_cart(repo, cart_id)
    return store(repo, cart_id, get_service(db).remove_item(cart, index))


@router.put("/{cart_id}/discount", response_model=CartOut)
def set_discount(cart_id: str, payload: DiscountIn, db: Session = Depends(get_db)):
    repo = CartRepo(db)
    cart = load_cart(repo, cart_id)
    return store(repo, cart_id, get_service(db).set_discount(cart, payload.discount_percentage))
