"""Root Typer applications for vhostctl."""

from __future__ import annotations

import typer

from vhostctl.commands import cert, site, vhost
from vhostctl.logging_setup import setup_logging

app = typer.Typer(
    name="vhostctl",
    help="Provision NGINX + PHP-FPM virtual hosts with Let's Encrypt certificates.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every external command"),
) -> None:
    setup_logging(verbose)


app.add_typer(site.app, name="site", help="Provision a complete site (directories, vhost, certificate).")
app.add_typer(vhost.app, name="vhost", help="Render, inspect and enable NGINX vhosts.")
app.add_typer(cert.app, name="cert", help="SSL certificate issuance.")

# Single-command entry point: `new-nginx-vhost example.com`
new_vhost_app = typer.Typer(name="new-nginx-vhost", add_completion=False)
new_vhost_app.command()(site.new)

if __name__ == "__main__":
    app()
