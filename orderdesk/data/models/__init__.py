# register every model with Base.metadata before create_all

from orderdesk.data.models.product import ProductModel
from orderdesk.data.models.cart import CartModel
from orderdesk.data.models.cart_item import CartItemModel
from orderdesk.data.models.order import OrderModel
from orderdesk.data.models.order_item import OrderItemModel

__all__ = ["ProductModel", "CartModel", "CartItemModel", "OrderModel", "OrderItemModel"]
