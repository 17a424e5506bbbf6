# productapi/models.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List


class ProductIn(BaseModel):
    """
    Create/update payload.

    Fields are deliberately untyped: the only check applied to a payload is
    the presence check in ``core.validate_product``.
    """
    name: Any = None
    description: Any = None
    price: Any = None
    category: Any = None
    in_stock: Any = Field(None, alias="inStock")


class ProductPage(BaseModel):
    total: int
    page: int
    limit: int
    products: List[Dict[str, Any]]
