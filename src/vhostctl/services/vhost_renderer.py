"""Jinja2-based NGINX vhost config renderer."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from vhostctl.constants import FASTCGI_BUFFER_SIZE, FASTCGI_BUFFERS, FASTCGI_TIMEOUT, INDEX_FILES
from vhostctl.errors import FilesystemError
from vhostctl.models import SiteConfig

log = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_FASTCGI = {
    "buffer_size": FASTCGI_BUFFER_SIZE,
    "buffers": FASTCGI_BUFFERS,
    "timeout": FASTCGI_TIMEOUT,
}


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _render(template_name: str, site: SiteConfig) -> str:
    env = _get_env()
    template = env.get_template(template_name)
    return template.render(
        site=site,
        strategy=site.redirect.value,
        index_files=INDEX_FILES,
        fastcgi=_FASTCGI,
    )


def render_https_vhost(site: SiteConfig) -> str:
    """Render the final vhost: SSL server, PHP-FPM handoff, redirect policy."""
    return _render("vhost_https.conf.j2", site)


def render_http_vhost(site: SiteConfig) -> str:
    """Render an HTTP-only vhost for ACME challenge (pre-cert issuance)."""
    return _render("vhost_http.conf.j2", site)


def write_vhost(path: Path, content: str) -> None:
    """Write vhost config to disk, replacing whatever was there."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    except OSError as exc:
        raise FilesystemError(f"Could not write {path}: {exc}") from exc
    log.debug("wrote %d bytes to %s", len(content), path)
