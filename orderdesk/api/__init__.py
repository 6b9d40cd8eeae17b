# orderdesk/api/__init__.py
from fastapi import HTTPException

from orderdesk.domain.errors import ErrorCode, Outcome

_NOT_FOUND = {ErrorCode.PRODUCT_NOT_FOUND, ErrorCode.ORDER_NOT_FOUND, ErrorCode.CART_NOT_FOUND}
_CONFLICT = {ErrorCode.INVALID_TRANSITION}


def status_for(code: ErrorCode) -> int:
    if code in _NOT_FOUND:
        return 404
    if code in _CONFLICT:
        return 409
    return 400


def unwrap(outcome: Outcome):
    """Value of a successful outcome, HTTPException for a failed one."""
    if outcome.ok:
        return outcome.value
    raise HTTPException(
        status_code=status_for(outcome.error.code),
        detail={"code": outcome.error.code.value, "message": outcome.error.message},
    )
