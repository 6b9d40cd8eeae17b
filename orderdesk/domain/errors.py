# orderdesk/domain/errors.py
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorCode(str, Enum):
    INVALID_QUANTITY = "invalid_quantity"
    PRODUCT_NOT_FOUND = "product_not_found"
    OUT_OF_RANGE = "out_of_range"
    EMPTY_CART_COMMIT = "empty_cart_commit"
    INVALID_TRANSITION = "invalid_transition"
    INVALID_DISCOUNT = "invalid_discount"
    ORDER_NOT_FOUND = "order_not_found"
    CART_NOT_FOUND = "cart_not_found"
    INVALID_EMAIL = "invalid_email"


@dataclass(frozen=True)
class Failure:
    code: ErrorCode
    message: str


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of an engine operation.

    Expected invalid input (bad quantity, unknown product, illegal status
    change...) comes back as a Failure instead of an exception, so the
    caller decides whether to show it or ignore it.
    """

    value: Optional[T] = None
    error: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "Outcome[T]":
        return cls(error=Failure(code=code, message=message))

    def value_or(self, default: T) -> T:
        return self.value if self.ok else default
