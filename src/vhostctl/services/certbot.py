"""Certbot certificate issuance via the webroot plugin."""

from __future__ import annotations

import logging
from pathlib import Path

from vhostctl.constants import CERTBOT_LOG_PATH
from vhostctl.errors import CertbotError, CommandError
from vhostctl.models import SiteConfig
from vhostctl.services import process

log = logging.getLogger(__name__)


def build_issue_command(site: SiteConfig, email: str, *, certbot_bin: str = "certbot") -> list[str]:
    cmd = [
        certbot_bin, "certonly", "--webroot",
        "-w", str(site.document_root),
        "--agree-tos", "--no-eff-email",
        "--non-interactive", "--keep-until-expiring",
        "--email", email,
    ]
    for name in site.server_names:
        cmd.extend(["-d", name])
    return cmd


def issue_cert(
    site: SiteConfig,
    email: str,
    *,
    certbot_bin: str = "certbot",
    log_path: Path = CERTBOT_LOG_PATH,
) -> None:
    """Issue a Let's Encrypt certificate via HTTP-01 webroot challenge.

    Certbot's own output goes straight to the terminal. On failure the
    operator is pointed at certbot's log instead of a local diagnosis.
    """
    if not email:
        raise CertbotError("An email address is required for certbot notifications")
    cmd = build_issue_command(site, email, certbot_bin=certbot_bin)
    try:
        result = process.run(cmd, check=False, capture=False)
    except CommandError as exc:
        raise CertbotError(f"{exc}\nCheck {log_path} for details.") from exc
    if result.returncode != 0:
        raise CertbotError(
            f"Certbot failed for {site.domain} (exit {result.returncode}). "
            f"Check {log_path} for details."
        )
    log.debug("certificate material expected under %s", site.cert_dir)


def certificate_exists(site: SiteConfig) -> bool:
    return site.certificate.is_file() and site.certificate_key.is_file()
