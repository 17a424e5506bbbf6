# cli.py - interactive product catalog console
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.client import ProductClient, ProductClientError

console = Console()
c = ProductClient(base_url=os.environ.get("PRODUCT_API_URL", "http://127.0.0.1:3000"),
                  api_key=os.environ.get("API_KEY"))

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=34)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("Stock", width=6)

    for p in products:
        in_stock = p.get("inStock")
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("name", "N/A")),
            str(p.get("description", "")),
            str(p.get("price", "")),
            str(p.get("category", "N/A")),
            "[green]yes[/green]" if in_stock else "[red]no[/red]"
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    show_products(page.get("products", []))
    console.print(f"[dim]Page {page.get('page')} · limit {page.get('limit')} · "
                  f"{page.get('total')} matching products[/dim]")


def show_stats(stats: Dict[str, int]):
    if not stats:
        console.print("[italic yellow]Catalog is empty[/italic yellow]")
        return
    table = Table(title="📊 Products per category", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category")
    table.add_column("Count", justify="right")
    for category, count in stats.items():
        table.add_row(str(category), str(count))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API and connection errors are shown in the status panel and yield None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except ProductClientError as e:
        status_message = f"Error: {e.message} (HTTP {e.status_code})"
        console.print(show_status(status_message, False))
        return None
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    # all pages, so completion covers every product
    products: List[Dict[str, Any]] = []
    page_no = 1
    while True:
        page = try_api(c.list_products, page=page_no, limit=50)
        if not page:
            break
        products.extend(page["products"])
        if len(products) >= page["total"] or not page["products"]:
            break
        page_no += 1
    product_cache = products


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_name_completer():
    names = [str(p.get("name", "")) for p in product_cache]
    return WordCompleter([n for n in names if n], ignore_case=True)


def get_category_completer():
    categories = sorted({str(p.get("category", "")) for p in product_cache})
    return WordCompleter([cat for cat in categories if cat], ignore_case=True)


# ---------------------------
# Header and input helpers
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product API",
        "[bold blue]Catalog console[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("Name", completer=get_name_completer(),
                                         default=str(current.get("name", ""))),
        "description": prompt_with_autocomplete("Description",
                                                default=str(current.get("description", ""))),
        "price": ask_float("💰 Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete("🏷️ Category", completer=get_category_completer(),
                                             default=str(current.get("category", ""))),
        "in_stock": Confirm.ask("In stock?", default=bool(current.get("inStock", True))),
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔍 Search by name", "6", "✏️ Replace product"),
            ("3", "📊 Category stats", "7", "🗑️ Delete product"),
            ("4", "ℹ️ Get product by ID", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("Category filter (blank for all)",
                                                completer=get_category_completer()).strip()
            page_no = Prompt.ask("Page", default="1")
            limit = Prompt.ask("Per page", default="5")
            page = try_api(c.list_products, category or None, page_no, limit,
                           success_msg="Products loaded")
            if page is not None:
                show_page(page)

        elif choice == "2":
            term = prompt_with_autocomplete("Search term", completer=get_name_completer())
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res, title=f"🔍 Results for '{term}'")

        elif choice == "3":
            stats = try_api(c.category_stats, success_msg="Stats loaded")
            if stats is not None:
                show_stats(stats)

        elif choice == "4":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if resp:
                show_products([resp])

        elif choice == "5":
            fields = ask_product_fields()
            resp = try_api(c.create_product, success_msg=f"Product '{fields['name']}' created", **fields)
            if resp:
                show_products([resp])
                refresh_product_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                resp = try_api(c.update_product, pid, success_msg=f"Product {pid} replaced", **fields)
                if resp:
                    show_products([resp])
                    refresh_product_cache()

        elif choice == "7":
            pid = prompt_with_autocomplete("Product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_product_cache()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
