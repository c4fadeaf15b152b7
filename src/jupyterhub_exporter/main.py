"""
jupyterhub-exporter entry point.

Usage:
    jupyterhub-exporter --host http://hub:8081/hub/api --token $TOKEN    Serve /metrics
    jupyterhub-exporter --token $TOKEN users                            One-shot active user list
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import click

from jupyterhub_exporter import __version__
from jupyterhub_exporter.collector.active_users import ActiveUserCollector
from jupyterhub_exporter.config import (
    DEFAULT_HOST,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_PORT,
    ExporterConfig,
)
from jupyterhub_exporter.errors import ExporterError
from jupyterhub_exporter.server import serve


log = logging.getLogger("jupyterhub_exporter")


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="jupyterhub-exporter")
@click.option("--host", default=DEFAULT_HOST, envvar="JUPYTERHUB_API_URL", show_default=True,
              help="JupyterHub API base URL")
@click.option("--token", default="", envvar="JUPYTERHUB_API_TOKEN",
              help="JupyterHub API token (admin)")
@click.option("--stop/--no-stop", default=True, help="Stop idle single-user servers (not implemented)")
@click.option("--hours", default=24, help="Idle hours before stopping a server (not implemented)")
@click.option("--listen-address", default=DEFAULT_LISTEN_ADDRESS, show_default=True,
              help="Address to serve /metrics on")
@click.option("--port", default=DEFAULT_PORT, show_default=True, help="Port to serve /metrics on")
@click.option("--timeout", type=float, default=None,
              help="Seconds to wait for the hub API (default: no timeout)")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx, host: str, token: str, stop: bool, hours: int, listen_address: str,
        port: int, timeout: float, verbose: bool):
    """Prometheus exporter for JupyterHub user activity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = ExporterConfig(
        host=host,
        token=token,
        stop=stop,
        hours=hours,
        listen_address=listen_address,
        port=port,
        timeout_seconds=timeout,
    )

    if not token:
        log.warning("no API token configured, the hub will likely refuse /users")

    if ctx.invoked_subcommand is None:
        serve(ctx.obj["config"])


def _format_activity(nanoseconds: int) -> str:
    if nanoseconds == 0:
        return "[dim]unknown[/dim]"
    try:
        moment = datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(microseconds=nanoseconds // 1000)
    except (ValueError, OverflowError):
        return str(nanoseconds)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


@cli.command()
@click.pass_context
def users(ctx):
    """Fetch the hub's user list once and print the active users."""
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    config: ExporterConfig = ctx.obj["config"]
    collector = ActiveUserCollector(config)

    try:
        active = collector.fetch_active_users()
    except ExporterError as exc:
        click.echo(f"Could not read users from {config.users_url}: {exc}", err=True)
        raise SystemExit(1)
    finally:
        collector.close()

    console = Console()

    if not active:
        console.print("\n[dim]No active users.[/dim]\n")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("User")
    table.add_column("Last activity")
    table.add_column("Nanoseconds", justify="right")

    for user_name in sorted(active):
        table.add_row(
            f"[cyan]{escape(user_name)}[/cyan]",
            _format_activity(active[user_name]),
            str(active[user_name]),
        )

    console.print(table)
    console.print(f"[bold]{len(active)}[/bold] active user(s)\n")


if __name__ == "__main__":
    cli()
