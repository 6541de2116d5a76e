"""Custom exceptions for vhostctl."""

from __future__ import annotations


class VhostctlError(Exception):
    """Base exception for all vhostctl operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class InputError(VhostctlError):
    """Required input missing or malformed."""


class FilesystemError(VhostctlError):
    """Creating the site tree or setting its ownership/permissions failed."""


class CommandError(VhostctlError):
    """An external command exited non-zero or could not be started."""


class NginxError(VhostctlError):
    """Enabling the site or controlling the NGINX service failed."""


class NginxConfigError(NginxError):
    """NGINX configuration validation failed."""


class CertbotError(VhostctlError):
    """Certbot operation failed."""
