"""NGINX vhost inspection and activation commands."""

from __future__ import annotations

from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.syntax import Syntax

from vhostctl.audit import audit
from vhostctl.commands import abort, input_error
from vhostctl.config import get_config
from vhostctl.errors import InputError, NginxError, VhostctlError
from vhostctl.models import RedirectStrategy, normalize_domain
from vhostctl.services import certbot, nginx, vhost_renderer

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command()
def render(
    domain: str = typer.Argument(help="Domain name to render a config for"),
    final: bool = typer.Option(False, "--final", help="Render the TLS config instead of the bootstrap one"),
    powered_by: str = typer.Option("", "--powered-by", help="X-Powered-By value (empty omits the header)"),
    redirect: Optional[RedirectStrategy] = typer.Option(None, case_sensitive=False, help="Redirect policy"),
    trusted_proxy: Optional[List[str]] = typer.Option(None, "--trusted-proxy", help="Trusted proxy CIDR"),
) -> None:
    """Print a rendered vhost config to stdout without touching the system."""
    cfg = get_config()
    try:
        site = cfg.site(
            domain,
            powered_by=powered_by,
            redirect=redirect,
            trusted_proxies=trusted_proxy or None,
        )
    except ValidationError as exc:
        abort(input_error(exc))

    content = vhost_renderer.render_https_vhost(site) if final else vhost_renderer.render_http_vhost(site)
    typer.echo(content, nl=False)


@app.command()
def show(
    domain: str = typer.Argument(help="Domain name to show config for"),
) -> None:
    """Display the NGINX vhost config for a domain."""
    cfg = get_config()
    try:
        domain = normalize_domain(domain)
    except ValueError as exc:
        abort(InputError(str(exc)))
    vhost_file = cfg.vhost_path(domain)

    if not vhost_file.exists():
        console.print(f"[red]No vhost found for {domain}[/red]")
        raise typer.Exit(1)

    content = vhost_file.read_text()
    syntax = Syntax(content, "nginx", theme="monokai")
    console.print(syntax)


@app.command()
def enable(
    domain: str = typer.Argument(help="Domain whose sites-available file should go live"),
) -> None:
    """Symlink a vhost into sites-enabled, then start or reload NGINX."""
    cfg = get_config()
    try:
        site = cfg.site(domain)
    except ValidationError as exc:
        abort(input_error(exc))
    vhost_file = cfg.vhost_path(site.domain)

    try:
        with audit("vhost.enable", target=site.domain):
            if not vhost_file.exists():
                raise NginxError(f"No vhost found at {vhost_file}")
            if str(site.certificate) in vhost_file.read_text() and not certbot.certificate_exists(site):
                raise NginxError(
                    f"{vhost_file} references {site.certificate}, which does not exist yet"
                )
            link = nginx.enable_site(vhost_file, cfg.sites_enabled_dir)
            verb = nginx.start_or_reload(cfg)
    except VhostctlError as exc:
        abort(exc)

    console.print(f"[green]Enabled {link}[/green] (nginx {verb})")
