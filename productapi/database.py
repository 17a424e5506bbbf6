import uuid
from typing import Any, Dict, List, Optional, Union

from .core import DEFAULT_LIMIT, DEFAULT_PAGE, _make_product_dict, parse_positive_int
from .errors import NotFoundError
from .logging_config import get_logger
from .models import ProductIn, ProductPage

logger = get_logger(__name__)

# Every process starts from these records.
SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False
    },
]


class ProductStore:
    """
    In-memory product collection.

    Records are kept in insertion order. Reads hand out copies so nothing
    outside the store can mutate a stored record. Lookups that miss raise
    ``NotFoundError``.
    """

    def __init__(self, products: Optional[List[Dict[str, Any]]] = None):
        self._products: List[Dict[str, Any]] = []
        self.reset(products if products is not None else [])

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(SEED_PRODUCTS)

    def __len__(self) -> int:
        return len(self._products)

    def reset(self, products: Optional[List[Dict[str, Any]]] = None) -> None:
        """Replace the whole collection, defaulting to the seed records."""
        source = SEED_PRODUCTS if products is None else products
        self._products = [dict(p) for p in source]

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p["id"] == product_id:
                return i
        raise NotFoundError()

    # ---------------------------
    # Reads
    # ---------------------------
    def list_products(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        if not category:
            return [dict(p) for p in self._products]
        wanted = category.lower()
        return [dict(p) for p in self._products if str(p["category"]).lower() == wanted]

    @staticmethod
    def paginate(items: List[Dict[str, Any]],
                 page: Union[str, int, None] = None,
                 limit: Union[str, int, None] = None) -> ProductPage:
        page_no = parse_positive_int(page, DEFAULT_PAGE)
        size = parse_positive_int(limit, DEFAULT_LIMIT)
        start = (page_no - 1) * size
        return ProductPage(
            total=len(items),
            page=page_no,
            limit=size,
            products=items[start:start + size]
        )

    def get(self, product_id: str) -> Dict[str, Any]:
        return dict(self._products[self._index_of(product_id)])

    def search_by_name(self, query: Optional[str] = None) -> List[Dict[str, Any]]:
        term = (query or "").lower()
        return [dict(p) for p in self._products if term in str(p["name"]).lower()]

    def category_stats(self) -> Dict[str, int]:
        stats: Dict[str, int] = {}
        for p in self._products:
            # non-string categories are counted under their string form
            key = p["category"] if isinstance(p["category"], str) else str(p["category"])
            stats[key] = stats.get(key, 0) + 1
        return stats

    # ---------------------------
    # Mutations
    # ---------------------------
    def create(self, payload: ProductIn) -> Dict[str, Any]:
        pid = uuid.uuid4().hex
        product = _make_product_dict(pid, payload)
        self._products.append(product)
        logger.info(f"Created product {pid} ({product['name']!r})")
        return dict(product)

    def update(self, product_id: str, payload: ProductIn) -> Dict[str, Any]:
        index = self._index_of(product_id)
        product = _make_product_dict(product_id, payload)
        self._products[index] = product
        logger.info(f"Replaced product {product_id}")
        return dict(product)

    def delete(self, product_id: str) -> None:
        index = self._index_of(product_id)
        del self._products[index]
        logger.info(f"Deleted product {product_id}")
