#!/usr/bin/env python3
"""Invoicedash CLI for inspecting dashboard data."""

import argparse
import asyncio

import questionary
from rich.console import Console
from rich.table import Table

from invoicedash import db
from invoicedash.dashboard.service import DashboardService
from invoicedash.log import configure_logging

console = Console()


def render_rows(title: str, rows: list[dict], columns: list[str]) -> None:
    """Print rows as a table, or a notice when there are none."""
    if not rows:
        console.print(f"[yellow]No {title.lower()} found.[/]")
        return
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(str(row.get(column, "")) for column in columns))
    console.print(table)


async def show_cards(service: DashboardService, args) -> None:
    cards = await service.fetch_card_data()
    table = Table(title="Summary", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Collected", cards["totalPaidInvoices"])
    table.add_row("Pending", cards["totalPendingInvoices"])
    table.add_row("Total invoices", str(cards["numberOfInvoices"]))
    table.add_row("Total customers", str(cards["numberOfCustomers"]))
    console.print(table)


async def show_revenue(service: DashboardService, args) -> None:
    render_rows("Revenue", await service.fetch_revenue(), ["month", "revenue"])


async def show_latest(service: DashboardService, args) -> None:
    rows = await service.fetch_latest_invoices()
    render_rows("Latest invoices", rows, ["name", "email", "amount"])


async def show_invoices(service: DashboardService, args) -> None:
    rows, pages = await asyncio.gather(
        service.fetch_filtered_invoices(args.query, args.page),
        service.fetch_invoices_pages(args.query),
    )
    render_rows("Invoices", rows, ["id", "name", "email", "amount", "date", "status"])
    if pages:
        console.print(f"[dim]Page {max(args.page, 1)} of {pages}[/]")


async def show_invoice(service: DashboardService, args) -> None:
    invoice = await service.fetch_invoice_by_id(args.invoice_id)
    if invoice is None:
        console.print(f"[red]Invoice {args.invoice_id} not found.[/]")
        return
    render_rows("Invoice", [invoice], ["id", "customer_id", "amount", "status"])


async def show_customers(service: DashboardService, args) -> None:
    if args.query is None:
        rows = await service.fetch_customers()
        render_rows("Customers", rows, ["id", "name"])
        return
    rows = await service.fetch_filtered_customers(args.query)
    render_rows(
        "Customers",
        rows,
        ["name", "email", "total_invoices", "total_pending", "total_paid"],
    )


async def add_comment(service: DashboardService, args) -> None:
    text = args.text
    if text is None:
        text = questionary.text("Write a comment:").ask()
    if not text:
        console.print("[dim]Cancelled.[/]")
        return
    await service.create_comment(text)
    console.print("[green]Comment submitted.[/]")


COMMANDS = {
    "cards": show_cards,
    "revenue": show_revenue,
    "latest": show_latest,
    "invoices": show_invoices,
    "invoice": show_invoice,
    "customers": show_customers,
    "comment": add_comment,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="invoicedash", description="Dashboard data console")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("cards", help="Show the summary cards")
    subparsers.add_parser("revenue", help="Show the revenue series")
    subparsers.add_parser("latest", help="Show the five latest invoices")

    invoices = subparsers.add_parser("invoices", help="Search invoices")
    invoices.add_argument("--query", "-q", default="")
    invoices.add_argument("--page", "-p", type=int, default=1)

    invoice = subparsers.add_parser("invoice", help="Show one invoice")
    invoice.add_argument("invoice_id")

    customers = subparsers.add_parser("customers", help="List or search customers")
    customers.add_argument("--query", "-q", default=None)

    comment = subparsers.add_parser("comment", help="Add a comment")
    comment.add_argument("text", nargs="?", default=None)

    return parser


async def run(args) -> None:
    service = DashboardService()
    try:
        await COMMANDS[args.command](service, args)
    finally:
        await db.close_connection()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
