"""Site configuration model."""

from __future__ import annotations

import ipaddress
import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from vhostctl.constants import (
    ACME_CHALLENGE_PATH,
    DEFAULT_CLIENT_MAX_BODY_SIZE,
    DOCUMENT_ROOT_NAME,
    LETSENCRYPT_DIR,
    LOG_DIR_NAME,
    PHP_FPM_SOCKET,
    WWW_BASE,
)

_LABEL_RE = re.compile(r"(?!-)[a-z0-9-]{1,63}(?<!-)")
_BODY_SIZE_RE = re.compile(r"[0-9]+[kKmMgG]?")
# Characters that would let a header value escape its quoted nginx directive
_HEADER_FORBIDDEN = set('"\\$;{}')


class RedirectStrategy(str, Enum):
    """How plain-HTTP requests are sent to HTTPS."""

    NONE = "none"
    FORCE_HTTPS = "force-https"
    TRUST_FORWARDED_PROTO = "trust-forwarded-proto"


def normalize_domain(value: str) -> str:
    """Lower-case, strip a trailing dot and check the hostname grammar.

    Raises ValueError when the value is not a plain DNS hostname with at
    least two labels.
    """
    domain = value.strip().lower().rstrip(".")
    if not domain:
        raise ValueError("domain must not be empty")
    if len(domain) > 253:
        raise ValueError(f"domain is too long ({len(domain)} > 253 characters)")
    labels = domain.split(".")
    if len(labels) < 2:
        raise ValueError(f"{domain!r} is not a fully qualified domain name")
    for label in labels:
        if not _LABEL_RE.fullmatch(label):
            raise ValueError(f"{domain!r} contains an invalid label {label!r}")
    if labels[-1].isdigit():
        raise ValueError(f"{domain!r} looks like an IP address, not a domain")
    return domain


class SiteConfig(BaseModel):
    """Everything needed to render and provision one virtual host."""

    domain: str
    powered_by: str = ""
    redirect: RedirectStrategy = RedirectStrategy.NONE
    trusted_proxies: list[str] = Field(default_factory=list)
    php_fpm_socket: str = PHP_FPM_SOCKET
    client_max_body_size: str = DEFAULT_CLIENT_MAX_BODY_SIZE
    www_base: Path = WWW_BASE
    letsencrypt_dir: Path = LETSENCRYPT_DIR

    @field_validator("domain")
    @classmethod
    def _check_domain(cls, value: str) -> str:
        return normalize_domain(value)

    @field_validator("powered_by")
    @classmethod
    def _check_powered_by(cls, value: str) -> str:
        value = value.strip()
        for ch in value:
            if ch in _HEADER_FORBIDDEN or not ch.isprintable():
                raise ValueError(f"X-Powered-By value may not contain {ch!r}")
        return value

    @field_validator("trusted_proxies")
    @classmethod
    def _check_trusted_proxies(cls, value: list[str]) -> list[str]:
        return [str(ipaddress.ip_network(item.strip(), strict=False)) for item in value]

    @field_validator("client_max_body_size")
    @classmethod
    def _check_body_size(cls, value: str) -> str:
        if not _BODY_SIZE_RE.fullmatch(value):
            raise ValueError(f"invalid client_max_body_size {value!r}")
        return value

    @property
    def server_names(self) -> list[str]:
        return [self.domain, f"www.{self.domain}"]

    @property
    def ident(self) -> str:
        """Domain as an nginx variable-name fragment (example_com)."""
        return re.sub(r"[^a-z0-9]", "_", self.domain)

    @property
    def site_dir(self) -> Path:
        return self.www_base / self.domain

    @property
    def document_root(self) -> Path:
        return self.site_dir / DOCUMENT_ROOT_NAME

    @property
    def log_dir(self) -> Path:
        return self.site_dir / LOG_DIR_NAME

    @property
    def acme_challenge_dir(self) -> Path:
        return self.document_root / ACME_CHALLENGE_PATH

    @property
    def access_log(self) -> Path:
        return self.log_dir / "access.log"

    @property
    def error_log(self) -> Path:
        return self.log_dir / "error.log"

    @property
    def cert_dir(self) -> Path:
        return self.letsencrypt_dir / "live" / self.domain

    @property
    def certificate(self) -> Path:
        return self.cert_dir / "fullchain.pem"

    @property
    def certificate_key(self) -> Path:
        return self.cert_dir / "privkey.pem"

    @property
    def ssl_options(self) -> Path:
        return self.letsencrypt_dir / "options-ssl-nginx.conf"

    @property
    def ssl_dhparam(self) -> Path:
        return self.letsencrypt_dir / "ssl-dhparams.pem"
