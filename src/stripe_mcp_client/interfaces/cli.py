"""CLI: Typer app wired to StripeMcpClient and the hosting tool server."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import typer
from rich import print as rprint
from rich.panel import Panel

from stripe_mcp_client.domain import RAW_RESPONSE_KEY, StripeMcpError
from stripe_mcp_client.infrastructure.mcp import StripeMcpClient

app = typer.Typer(help="stripe-mcp-client: create Stripe payment links through the Stripe MCP server.")


def _setup_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_options(
    price: Optional[str],
    quantity: int,
    redirect_url: Optional[str],
    payload: Optional[str],
) -> Dict[str, Any]:
    """Turn CLI flags into paymentLinks.create options.

    ``--payload`` is used as-is when given; otherwise one line item is built
    from ``--price`` / ``--quantity`` with an optional redirect after checkout.
    """
    if payload:
        try:
            parsed = json.loads(payload)
        except ValueError as e:
            raise typer.BadParameter(f"--payload is not valid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise typer.BadParameter("--payload must be a JSON object")
        return parsed
    if not price:
        raise typer.BadParameter("either --price or --payload is required")
    options: Dict[str, Any] = {"line_items": [{"price": price, "quantity": quantity}]}
    if redirect_url:
        options["after_completion"] = {"type": "redirect", "redirect": {"url": redirect_url}}
    return options


async def _create_link(client: StripeMcpClient, options: Dict[str, Any]) -> Dict[str, Any]:
    async with client:
        return await client.create_payment_link(options)


async def _list_tools(client: StripeMcpClient) -> List[str]:
    async with client:
        return await client.list_tools()


@app.command("create-link")
def create_link(
    price: Optional[str] = typer.Option(None, help="Stripe price id for a single line item (e.g. price_123)."),
    quantity: int = typer.Option(1, min=1, help="Quantity for the --price line item."),
    redirect_url: Optional[str] = typer.Option(None, help="Redirect here after checkout completes."),
    payload: Optional[str] = typer.Option(
        None, help="Raw paymentLinks.create options as a JSON object (overrides --price/--quantity/--redirect-url)."
    ),
    api_key: Optional[str] = typer.Option(None, help="Stripe secret key (default: STRIPE_API_KEY)."),
    stripe_account: Optional[str] = typer.Option(None, help="Connected account id (default: STRIPE_ACCOUNT)."),
    debug: bool = typer.Option(False, "--debug", help="Log connection progress and advertised tools."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """Create a payment link and print it."""
    _setup_logging(verbose, debug)
    options = _build_options(price, quantity, redirect_url, payload)
    try:
        client = StripeMcpClient(api_key=api_key, stripe_account=stripe_account, debug=debug)
        link = asyncio.run(_create_link(client, options))
    except StripeMcpError as e:
        rprint(f"[red]{e}[/red]")
        sys.exit(1)

    if RAW_RESPONSE_KEY in link:
        rprint("[yellow]Server response was not JSON:[/yellow]")
        rprint(link[RAW_RESPONSE_KEY])
        return

    rprint(Panel.fit(f"[bold]Payment link:[/bold] {link.get('url', '-')}\n[bold]Id:[/bold] {link.get('id', '-')}"))
    rprint(json.dumps(link, indent=2, ensure_ascii=False))


@app.command()
def tools(
    api_key: Optional[str] = typer.Option(None, help="Stripe secret key (default: STRIPE_API_KEY)."),
    stripe_account: Optional[str] = typer.Option(None, help="Connected account id (default: STRIPE_ACCOUNT)."),
    selector: Optional[str] = typer.Option(
        None, "--tools", help="Tools selector passed to the server (default: paymentLinks.create)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """List the tools the Stripe MCP server exposes."""
    _setup_logging(verbose, debug=False)
    try:
        client = StripeMcpClient(api_key=api_key, tools=selector, stripe_account=stripe_account)
        names = asyncio.run(_list_tools(client))
    except StripeMcpError as e:
        rprint(f"[red]{e}[/red]")
        sys.exit(1)

    if not names:
        rprint("[dim]Server advertised no tools.[/dim]")
        return
    for name in names:
        rprint(f"  [cyan]{name}[/cyan]")


@app.command()
def serve(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """Run the hosting MCP server (stdio) with the create_checkout_link tool."""
    from stripe_mcp_client.interfaces.tool_server import build_server

    # stdout carries the MCP protocol; logs go to stderr only.
    _setup_logging(verbose, debug=False)
    build_server().run()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
