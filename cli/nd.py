"""nd -- Notification Dispatcher CLI.

Thin command-line wrapper over the Dispatcher API.
Sends HTTP requests and prints formatted output.

Usage:
    nd [--api-url URL] COMMAND [OPTIONS]
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import click
import httpx

DEFAULT_API_URL = "http://localhost:9750"


class ApiClient:
    """Simple HTTP client for the Dispatcher API."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        """Make an HTTP request and return parsed JSON.

        Raises:
            click.ClickException: On connection or HTTP errors.
        """
        url = f"{self.base_url}{path}"
        try:
            resp = httpx.request(
                method, url, json=json_body, params=params, timeout=30.0
            )
        except httpx.ConnectError:
            raise click.ClickException(
                f"Cannot connect to Dispatcher API at {self.base_url}"
            )
        except httpx.TimeoutException:
            raise click.ClickException("Request timed out")

        if resp.status_code == 204:
            return None
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail", resp.text)
            except Exception:
                detail = resp.text
            raise click.ClickException(f"API error ({resp.status_code}): {detail}")

        return resp.json()

    def get(self, path: str, **params: Any) -> Any:
        clean = {k: v for k, v in params.items() if v is not None}
        return self._request("GET", path, params=clean)

    def post(self, path: str, body: dict | None = None) -> Any:
        return self._request("POST", path, json_body=body)


@click.group()
@click.option(
    "--api-url",
    default=DEFAULT_API_URL,
    envvar="ND_API_URL",
    help="Dispatcher API base URL.",
    show_default=True,
)
@click.pass_context
def cli(ctx: click.Context, api_url: str) -> None:
    """nd -- Notification Dispatcher command-line interface."""
    ctx.obj = ApiClient(api_url)


# ── info ──────────────────────────────────────────────────────────────────


@cli.command()
@click.pass_obj
def info(client: ApiClient) -> None:
    """Show dispatcher version and schedule size."""
    data = client.get("/api/info")
    click.echo(f"Version: {data['version']}")
    click.echo(f"Scheduled Notifications: {data['scheduled_notifications']}")
    click.echo(f"Accounts: {data['accounts']}")


# ── submit ────────────────────────────────────────────────────────────────


@cli.command()
@click.argument("account")
@click.option(
    "--priority",
    type=click.Choice(["high", "low"], case_sensitive=False),
    default="high",
    show_default=True,
    help="Notification priority.",
)
@click.option(
    "--created",
    default=None,
    help="ISO-8601 creation time (defaults to now, UTC).",
)
@click.option("--id", "notification_id", default=None, help="Notification id.")
@click.pass_obj
def submit(
    client: ApiClient,
    account: str,
    priority: str,
    created: str | None,
    notification_id: str | None,
) -> None:
    """Submit a notification for ACCOUNT and print its delivery time."""
    if created is None:
        created = datetime.now(timezone.utc).isoformat()
    body = {
        "messenger_account": account,
        "created": created,
        "priority": priority.lower(),
    }
    if notification_id:
        body["id"] = notification_id
    data = client.post("/api/notifications/", body)
    click.echo(
        f"✓ Scheduled {data['id']} ({data['priority']}) for {data['messenger_account']} "
        f"at {data['scheduled_delivery_time']}"
    )


# ── schedule ──────────────────────────────────────────────────────────────


@cli.command()
@click.option("--account", default=None, help="Filter by messenger account.")
@click.option("--limit", default=None, type=int, help="Maximum entries.")
@click.pass_obj
def schedule(client: ApiClient, account: str | None, limit: int | None) -> None:
    """List scheduled notifications, earliest delivery first."""
    data = client.get("/api/notifications/schedule", account=account, limit=limit)
    if not data:
        click.echo("No scheduled notifications.")
        return
    click.echo(f"{'DELIVERY':<32s} {'ACCOUNT':<20s} {'PRIORITY':<9s} {'ID'}")
    for n in data:
        click.echo(
            f"{n['scheduled_delivery_time']:<32s} {n['messenger_account']:<20s} "
            f"{n['priority']:<9s} {n['id']}"
        )


# ── logs ──────────────────────────────────────────────────────────────────


@cli.command()
@click.option("--account", default=None, help="Filter by messenger account.")
@click.option("--level", default=None, help="Minimum log level.")
@click.option("--limit", default=50, show_default=True, help="Maximum entries.")
@click.pass_obj
def logs(client: ApiClient, account: str | None, level: str | None, limit: int) -> None:
    """Show recent dispatcher log entries."""
    data = client.get("/api/logs/", account=account, level=level, limit=limit)
    if not data:
        click.echo("No log entries.")
        return
    for e in data:
        click.echo(f"{e['timestamp'][:19]} [{e['level']}] {e['message']}")


# ── serve ─────────────────────────────────────────────────────────────────


@cli.command()
@click.option("--host", default=None, help="Bind address (default from config).")
@click.option("--port", default=None, type=int, help="Bind port (default from config).")
def serve(host: str | None, port: int | None) -> None:
    """Run the Dispatcher API server."""
    import uvicorn

    from dispatcher.config import get_config

    cfg = get_config()
    uvicorn.run(
        "dispatcher.api.app:create_app",
        factory=True,
        host=host or cfg.host,
        port=port or cfg.port,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
