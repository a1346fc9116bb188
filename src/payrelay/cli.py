"""Typer CLI for PayRelay."""

from typing import Optional

import typer
from rich.console import Console

app = typer.Typer(name="payrelay", help="PayRelay: Stripe and Braintree checkout relay")
console = Console()


def _mask(key: str) -> str:
    if not key:
        return "<empty>"
    return f"{key[:8]}…{key[-4:]}" if len(key) > 12 else key[:4] + "…"


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
):
    """Start the PayRelay API server."""
    import uvicorn
    from payrelay.app import create_app

    console.print(f"[bold green]Starting PayRelay on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command()
def keys(
    payment_method: Optional[str] = typer.Argument(None, help="Payment method type, e.g. oxxo"),
):
    """Show which Stripe account a payment method type is routed to."""
    from payrelay.credentials.resolver import region_for
    from payrelay.deps import get_credentials

    credential_set = get_credentials().resolve(payment_method)
    console.print(f"Region: [bold]{region_for(payment_method).value}[/bold]")
    console.print(f"  Publishable key: {_mask(credential_set.publishable_key)}")
    console.print(f"  Secret key:      {_mask(credential_set.secret_key)}")
    if not credential_set.secret_key:
        console.print("[bold red]Secret key is not configured[/bold red]")
        raise typer.Exit(1)


@app.command()
def health(
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
):
    """Check PayRelay server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] — v{data['version']}")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
