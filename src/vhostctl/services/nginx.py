"""Site activation, NGINX config validation and service control."""

from __future__ import annotations

import logging
from pathlib import Path

from vhostctl.config import VhostctlConfig
from vhostctl.errors import CommandError, NginxConfigError, NginxError
from vhostctl.services import process

log = logging.getLogger(__name__)


def enable_site(available: Path, enabled_dir: Path) -> Path:
    """Point ``enabled_dir/<name>`` at *available*, replacing an old symlink.

    A regular file in the link's place is never clobbered.
    """
    link = enabled_dir / available.name
    try:
        if link.is_symlink():
            link.unlink()
            log.debug("removed stale link %s", link)
        elif link.exists():
            raise NginxError(f"{link} exists and is not a symlink; refusing to replace it")
        enabled_dir.mkdir(parents=True, exist_ok=True)
        link.symlink_to(available)
    except OSError as exc:
        raise NginxError(f"Could not enable {available.name}: {exc}") from exc
    return link


def is_active(cfg: VhostctlConfig) -> bool:
    result = process.run(
        [cfg.systemctl_bin, "is-active", "--quiet", cfg.service_name],
        check=False,
    )
    return result.returncode == 0


def validate_config(cfg: VhostctlConfig) -> None:
    """Run nginx -t. Raises NginxConfigError on failure."""
    if not cfg.validate_config:
        return
    try:
        result = process.run([cfg.nginx_bin, "-t"], check=False)
    except CommandError as exc:
        raise NginxConfigError(str(exc)) from exc
    if result.returncode != 0:
        raise NginxConfigError(f"NGINX config test failed:\n{result.stderr}")


def _systemctl(cfg: VhostctlConfig, verb: str) -> None:
    try:
        process.run([cfg.systemctl_bin, verb, cfg.service_name])
    except CommandError as exc:
        raise NginxError(f"systemctl {verb} {cfg.service_name} failed: {exc}") from exc


def start(cfg: VhostctlConfig) -> None:
    validate_config(cfg)
    _systemctl(cfg, "start")


def reload(cfg: VhostctlConfig) -> None:
    """Validate config, then reload NGINX (never restart)."""
    validate_config(cfg)
    _systemctl(cfg, "reload")


def start_or_reload(cfg: VhostctlConfig) -> str:
    """Start NGINX if it is down, otherwise reload it. Returns the verb used."""
    if is_active(cfg):
        reload(cfg)
        return "reload"
    start(cfg)
    return "start"
