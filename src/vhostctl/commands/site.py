"""Site provisioning command."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from vhostctl.audit import audit
from vhostctl.commands import abort, err_console, input_error
from vhostctl.config import get_config
from vhostctl.errors import InputError, VhostctlError
from vhostctl.logging_setup import setup_logging
from vhostctl.models import RedirectStrategy, normalize_domain
from vhostctl.services import pipeline

app = typer.Typer(no_args_is_help=True)
console = Console()
log = logging.getLogger(__name__)

USAGE = "Usage: new-nginx-vhost domain.com"
EMAIL_PROMPT = "Please specify email address for Certbot notifications"
POWERED_BY_PROMPT = "Please specify 'X-Powered-By' header or leave empty to completely remove header"


@app.command()
def new(
    domain: Optional[str] = typer.Argument(None, help="Domain name (e.g., example.com)", show_default=False),
    email: Optional[str] = typer.Option(None, help="Certbot notification email (prompted if omitted)"),
    powered_by: Optional[str] = typer.Option(
        None, "--powered-by",
        help="X-Powered-By value; an empty string removes the header (prompted if omitted)",
    ),
    redirect: Optional[RedirectStrategy] = typer.Option(
        None, case_sensitive=False, help="HTTP to HTTPS redirect policy (default from config)",
    ),
    trusted_proxy: Optional[List[str]] = typer.Option(
        None, "--trusted-proxy",
        help="CIDR allowed to assert X-Forwarded-Proto (repeatable, trust-forwarded-proto only)",
    ),
    default_index: bool = typer.Option(
        False, "--default-index",
        help="Write a greeting index.php into the document root unless one exists",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every external command"),
) -> None:
    """Provision a new NGINX vHost with a Let's Encrypt certificate."""
    if verbose or not logging.getLogger().handlers:
        setup_logging(verbose)
    cfg = get_config()

    console.print("[bold cyan]New Nginx vHost[/bold cyan]\n")

    if not domain:
        err_console.print(USAGE, highlight=False)
        raise typer.Exit(1)
    try:
        domain = normalize_domain(domain)
    except ValueError as exc:
        abort(InputError(str(exc)))

    if cfg.require_root and os.geteuid() != 0:
        abort(InputError("Must be run as root (try sudo)."))

    if email is None:
        email = typer.prompt(EMAIL_PROMPT, default="", show_default=False)
    email = email.strip()
    if not email:
        abort(InputError("Email is required for Certbot notifications."))

    if powered_by is None:
        powered_by = typer.prompt(POWERED_BY_PROMPT, default="", show_default=False)

    try:
        site = cfg.site(
            domain,
            powered_by=powered_by,
            redirect=redirect,
            trusted_proxies=trusted_proxy or None,
        )
    except ValidationError as exc:
        abort(input_error(exc))

    if site.redirect is RedirectStrategy.TRUST_FORWARDED_PROTO and not site.trusted_proxies:
        log.warning(
            "X-Forwarded-Proto will be trusted from any client; "
            "pass --trusted-proxy to restrict it to your proxy's addresses"
        )

    write_index = default_index or cfg.write_default_index
    steps = pipeline.provision_steps(cfg, site, email, write_index=write_index)

    try:
        with audit(
            "vhost.provision",
            target=site.domain,
            redirect=site.redirect.value,
            powered_by=bool(site.powered_by),
            default_index=write_index,
        ):
            pipeline.run_steps(steps, console)
    except VhostctlError as exc:
        abort(exc)

    console.print(
        f"\n[green bold]Deployment completed![/green bold] {site.domain} is live with SSL."
    )
