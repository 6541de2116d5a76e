"""SSL certificate commands."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console

from vhostctl.audit import audit
from vhostctl.commands import abort, input_error
from vhostctl.config import get_config
from vhostctl.errors import VhostctlError
from vhostctl.services import certbot

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command()
def issue(
    domain: str = typer.Argument(help="Domain to issue a certificate for (www. is added)"),
    email: str = typer.Option(..., prompt="Email address for Certbot notifications", help="Notification email"),
) -> None:
    """Issue a Let's Encrypt certificate against the domain's existing webroot."""
    cfg = get_config()
    try:
        site = cfg.site(domain)
    except ValidationError as exc:
        abort(input_error(exc))

    try:
        with audit("cert.issue", target=site.domain):
            certbot.issue_cert(
                site,
                email.strip(),
                certbot_bin=cfg.certbot_bin,
                log_path=cfg.certbot_log_path,
            )
    except VhostctlError as exc:
        abort(exc)

    console.print(f"[green]Certificate issued for {site.domain}[/green]")
