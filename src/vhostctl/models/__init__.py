"""Pydantic models."""

from vhostctl.models.audit_event import AuditEvent
from vhostctl.models.site import RedirectStrategy, SiteConfig, normalize_domain

__all__ = ["AuditEvent", "RedirectStrategy", "SiteConfig", "normalize_domain"]
