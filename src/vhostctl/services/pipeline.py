"""Ordered, fail-fast provisioning steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from rich.console import Console

from vhostctl.config import VhostctlConfig
from vhostctl.models import SiteConfig
from vhostctl.services import certbot, filesystem, nginx, vhost_renderer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    label: str
    action: Callable[[], object]


def run_steps(steps: list[Step], console: Console) -> None:
    """Run *steps* in order. The first exception stops the run and propagates."""
    total = len(steps)
    for i, step in enumerate(steps, start=1):
        console.print(f"[bold][{i}/{total}][/bold] {step.label}")
        log.debug("step %d/%d: %s", i, total, step.label)
        step.action()


def provision_steps(
    cfg: VhostctlConfig,
    site: SiteConfig,
    email: str,
    *,
    write_index: bool = False,
) -> list[Step]:
    """The six steps that take a domain from nothing to HTTPS.

    A certbot failure in step 4 leaves the bootstrap vhost live and the
    final config unwritten.
    """
    vhost_path = cfg.vhost_path(site.domain)

    def prepare_tree() -> None:
        filesystem.ensure_site_tree(site, cfg.web_user, cfg.web_group)
        if write_index:
            filesystem.write_default_index(site, cfg.web_user, cfg.web_group)

    def write_bootstrap() -> None:
        vhost_renderer.write_vhost(vhost_path, vhost_renderer.render_http_vhost(site))

    def activate() -> None:
        nginx.enable_site(vhost_path, cfg.sites_enabled_dir)
        nginx.start_or_reload(cfg)

    def issue() -> None:
        certbot.issue_cert(
            site,
            email,
            certbot_bin=cfg.certbot_bin,
            log_path=cfg.certbot_log_path,
        )

    def write_final() -> None:
        vhost_renderer.write_vhost(vhost_path, vhost_renderer.render_https_vhost(site))

    return [
        Step("Creating vHost directories", prepare_tree),
        Step("Creating temporary HTTP-only NGINX configuration", write_bootstrap),
        Step("Enabling temporary site and starting or reloading NGINX", activate),
        Step(f"Generating SSL certificate for {site.domain} with Certbot", issue),
        Step("Creating final NGINX configuration with SSL", write_final),
        Step("Reloading NGINX with final SSL configuration", lambda: nginx.reload(cfg)),
    ]
