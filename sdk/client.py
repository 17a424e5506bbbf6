# sdk/client.py
import asyncio
from typing import Any, Dict, Iterable, List, Optional

import httpx
import requests
from rich import print


class ProductClientError(Exception):
    """Raised for any 4xx/5xx answer; carries the server's ``error`` message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ProductClient:
    """
    Thin client for the product API.

    ``session`` defaults to a ``requests.Session``; anything with the same
    ``get/post/put/delete`` surface works (the tests pass FastAPI's TestClient).
    """

    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.headers: Dict[str, str] = {}
        if api_key:
            self.headers["x-api-key"] = api_key
            self.session.headers.update(self.headers)

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/api/products{path}"

    @staticmethod
    def _handle(r) -> Any:
        if r.status_code == 204:
            return None
        if r.status_code >= 400:
            try:
                message = r.json().get("error", r.text)
            except ValueError:
                message = r.text
            raise ProductClientError(r.status_code, message)
        return r.json()

    # Reads
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Dict[str, Any]:
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url(), params=params, timeout=self.timeout)
        return self._handle(r)

    def search_products(self, q: str = "") -> List[Dict[str, Any]]:
        r = self.session.get(self._url("/search"), params={"q": q}, timeout=self.timeout)
        return self._handle(r)

    def category_stats(self) -> Dict[str, int]:
        r = self.session.get(self._url("/stats"), timeout=self.timeout)
        return self._handle(r)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        return self._handle(r)

    # Mutations
    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: bool = True) -> Dict[str, Any]:
        payload = {"name": name, "description": description, "price": price,
                   "category": category, "inStock": in_stock}
        r = self.session.post(self._url(), json=payload, timeout=self.timeout)
        return self._handle(r)

    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool) -> Dict[str, Any]:
        payload = {"name": name, "description": description, "price": price,
                   "category": category, "inStock": in_stock}
        r = self.session.put(self._url(f"/{product_id}"), json=payload, timeout=self.timeout)
        return self._handle(r)

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        return self._handle(r)

    # Async bulk create
    async def create_many_async(self, payloads: Iterable[Dict[str, Any]],
                                transport: Optional[httpx.AsyncBaseTransport] = None) -> List[Dict[str, Any]]:
        async with httpx.AsyncClient(base_url=self.base_url, headers=self.headers,
                                     timeout=self.timeout, transport=transport) as client:
            responses = await asyncio.gather(
                *(client.post("/api/products", json=p) for p in payloads)
            )
        return [self._handle(r) for r in responses]


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from rich.console import Console
    from rich.table import Table

    parser = argparse.ArgumentParser(description="Product API client")
    parser.add_argument("--base-url", default="http://localhost:3000", help="API base URL")
    parser.add_argument("--api-key", help="Sent as x-api-key")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Filter by category (case insensitive)")
    lp.add_argument("--page", type=int, help="Page number, from 1")
    lp.add_argument("--limit", type=int, help="Page size")

    sp = subparsers.add_parser("search", help="Search products by name")
    sp.add_argument("q", nargs="?", default="", help="Substring of the name")

    subparsers.add_parser("stats", help="Product count per category")

    gp = subparsers.add_parser("get", help="Get a product by id")
    gp.add_argument("product_id")

    for cmd, help_text in (("create", "Create a product"), ("update", "Replace a product")):
        p = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update":
            p.add_argument("product_id")
        p.add_argument("--name", required=True)
        p.add_argument("--description", required=True)
        p.add_argument("--price", type=float, required=True)
        p.add_argument("--category", required=True)
        p.add_argument("--out-of-stock", action="store_true", help="Mark as not in stock")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")

    args = parser.parse_args(argv)
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)
    console = Console()

    def show(products: List[Dict[str, Any]]):
        table = Table(title="Products")
        for col in ("ID", "Name", "Price", "Category", "In stock"):
            table.add_column(col)
        for p in products:
            table.add_row(str(p["id"]), str(p["name"]), str(p["price"]), str(p["category"]),
                          "yes" if p["inStock"] else "no")
        console.print(table)

    try:
        if args.command == "list":
            page = c.list_products(args.category, args.page, args.limit)
            show(page["products"])
            print(f"[dim]page {page['page']} (limit {page['limit']}) of {page['total']} products[/dim]")
        elif args.command == "search":
            show(c.search_products(args.q))
        elif args.command == "stats":
            print(c.category_stats())
        elif args.command == "get":
            show([c.get_product(args.product_id)])
        elif args.command == "create":
            show([c.create_product(args.name, args.description, args.price, args.category,
                                   not args.out_of_stock)])
        elif args.command == "update":
            show([c.update_product(args.product_id, args.name, args.description, args.price,
                                   args.category, not args.out_of_stock)])
        elif args.command == "delete":
            c.delete_product(args.product_id)
            print(f"[green]Deleted {args.product_id}[/green]")
    except ProductClientError as e:
        print(f"[red]{e}[/red]")
        return 1
    except requests.exceptions.ConnectionError as e:
        print(f"[red]Cannot reach {args.base_url}: {e}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
