import re
from typing import Optional, Dict, Any

from .errors import ValidationError
from .models import ProductIn

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _is_blank(value: Any) -> bool:
    # JSON falsy values only; empty lists and objects count as present
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)):
        return value == 0 or value != value
    return False


def validate_product(payload: Optional[ProductIn]) -> None:
    """
    Presence check for create/update payloads.

    ``name``, ``description`` and ``category`` must not be null, empty,
    ``false`` or ``0``. ``price`` and ``inStock`` only have to be present,
    so ``0`` and ``False`` pass.
    """
    if payload is None:
        raise ValidationError()
    if _is_blank(payload.name) or _is_blank(payload.description) or _is_blank(payload.category):
        raise ValidationError()
    if payload.price is None or payload.in_stock is None:
        raise ValidationError()


def parse_positive_int(raw: Optional[str], default: int) -> int:
    # leading integer like "2.5" -> 2; absent, non-numeric and < 1 use the default
    if raw is None:
        return default
    match = _LEADING_INT.match(str(raw))
    if not match:
        return default
    value = int(match.group())
    return value if value >= 1 else default


def _make_product_dict(product_id: str, p: ProductIn) -> Dict[str, Any]:
    return {
        "id": product_id,
        "name": p.name,
        "description": p.description,
        "price": p.price,
        "category": p.category,
        "inStock": p.in_stock
    }
