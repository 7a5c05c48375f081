"""Mini README: Entry point CLI for the Moneyflow expense tracker.

This script exposes a Typer CLI with two commands: ``run`` starts the
FastAPI expense form under uvicorn and ``show`` prints the expenses saved in
the local preferences file together with the running total. Settings come
from ``MONEYFLOW_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

import typer
import uvicorn

from moneyflow.configuration import get_settings
from moneyflow.controller import build_controller
from moneyflow.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch and inspect the Moneyflow expense tracker.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the expense form using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Moneyflow on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "moneyflow.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def show() -> None:
    """Print the persisted expenses and their total."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    controller = build_controller(settings)
    controller.activate()
    rows = controller.rows()
    if not rows:
        typer.echo("No expenses recorded.")
    for row in rows:
        typer.echo(f"{row['description']} / {row['category']} / {row['amount']}")
    typer.echo(f"Total: {controller.view_model()['total']}")


if __name__ == "__main__":
    cli()
