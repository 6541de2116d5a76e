"""Runtime configuration resolved once at startup.

Every field can be overridden from the environment with the ``VHOSTCTL_``
prefix, e.g. ``VHOSTCTL_WEB_USER=nginx`` or
``VHOSTCTL_TRUSTED_PROXIES='["173.245.48.0/20"]'``.
"""

from __future__ import annotations

import socket
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from vhostctl.constants import (
    AUDIT_DB_PATH,
    AUDIT_JSONL_PATH,
    CERTBOT_LOG_PATH,
    DEFAULT_CLIENT_MAX_BODY_SIZE,
    LETSENCRYPT_DIR,
    LOG_DIR,
    NGINX_SERVICE,
    NGINX_SITES_AVAILABLE,
    NGINX_SITES_ENABLED,
    PHP_FPM_SOCKET,
    WEB_GROUP,
    WEB_USER,
    WWW_BASE,
)
from vhostctl.models import RedirectStrategy, SiteConfig


class VhostctlConfig(BaseSettings):
    """Host-level settings shared by every command."""

    www_base: Path = WWW_BASE
    sites_available_dir: Path = NGINX_SITES_AVAILABLE
    sites_enabled_dir: Path = NGINX_SITES_ENABLED
    letsencrypt_dir: Path = LETSENCRYPT_DIR
    certbot_log_path: Path = CERTBOT_LOG_PATH
    web_user: str = WEB_USER
    web_group: str = WEB_GROUP
    php_fpm_socket: str = PHP_FPM_SOCKET
    client_max_body_size: str = DEFAULT_CLIENT_MAX_BODY_SIZE
    service_name: str = NGINX_SERVICE
    nginx_bin: str = "nginx"
    systemctl_bin: str = "systemctl"
    certbot_bin: str = "certbot"
    redirect_strategy: RedirectStrategy = RedirectStrategy.NONE
    trusted_proxies: list[str] = Field(default_factory=list)
    validate_config: bool = True
    write_default_index: bool = False
    require_root: bool = True
    host_id: str = Field(default_factory=socket.gethostname)
    log_dir: Path = LOG_DIR
    audit_jsonl_path: Path = AUDIT_JSONL_PATH
    audit_db_path: Path = AUDIT_DB_PATH

    model_config = {"env_prefix": "VHOSTCTL_"}

    def vhost_path(self, domain: str) -> Path:
        return self.sites_available_dir / domain

    def enabled_path(self, domain: str) -> Path:
        return self.sites_enabled_dir / domain

    def site(
        self,
        domain: str,
        *,
        powered_by: str = "",
        redirect: Optional[RedirectStrategy] = None,
        trusted_proxies: Optional[list[str]] = None,
    ) -> SiteConfig:
        """Build a SiteConfig for *domain* using this host's defaults.

        Raises pydantic.ValidationError on a malformed domain or header value.
        """
        return SiteConfig(
            domain=domain,
            powered_by=powered_by,
            redirect=redirect or self.redirect_strategy,
            trusted_proxies=self.trusted_proxies if trusted_proxies is None else trusted_proxies,
            php_fpm_socket=self.php_fpm_socket,
            client_max_body_size=self.client_max_body_size,
            www_base=self.www_base,
            letsencrypt_dir=self.letsencrypt_dir,
        )


@lru_cache(maxsize=1)
def get_config() -> VhostctlConfig:
    """Return the global VhostctlConfig (resolved once, cached)."""
    return VhostctlConfig()
