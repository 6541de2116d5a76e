"""Per-site directory tree, ownership and permissions."""

from __future__ import annotations

import grp
import logging
import os
import pwd
from pathlib import Path

from vhostctl.constants import (
    DEFAULT_INDEX_CONTENT,
    DEFAULT_INDEX_MODE,
    DEFAULT_INDEX_NAME,
    SITE_DIR_MODE,
)
from vhostctl.errors import FilesystemError
from vhostctl.models import SiteConfig

log = logging.getLogger(__name__)


def _ids(user: str, group: str) -> tuple[int, int]:
    return pwd.getpwnam(user).pw_uid, grp.getgrnam(group).gr_gid


def _walk(root: Path):
    # os.walk does not descend into symlinked directories; links are
    # yielded as entries so callers can act on the link itself
    yield root
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            yield Path(dirpath) / name


def chown_recursive(root: Path, user: str, group: str) -> None:
    """Like ``chown -R``: symlinks are re-owned, their targets are not."""
    uid, gid = _ids(user, group)
    for path in _walk(root):
        os.lchown(path, uid, gid)


def chmod_recursive(root: Path, mode: int) -> None:
    """Like ``chmod -R``: symlinks are skipped."""
    for path in _walk(root):
        if path.is_symlink():
            continue
        path.chmod(mode)


def ensure_site_tree(site: SiteConfig, user: str, group: str) -> None:
    """Create wwwroot, logs and the ACME challenge dir; fix owner and mode.

    Safe to re-run. Raises FilesystemError on any OS failure; directories
    already created are left in place.
    """
    try:
        for d in (site.document_root, site.log_dir, site.acme_challenge_dir):
            d.mkdir(parents=True, exist_ok=True)
            log.debug("ensured %s", d)
        chown_recursive(site.site_dir, user, group)
        chmod_recursive(site.site_dir, SITE_DIR_MODE)
    except (OSError, LookupError) as exc:
        raise FilesystemError(f"Could not prepare {site.site_dir}: {exc}") from exc


def write_default_index(site: SiteConfig, user: str, group: str) -> Path:
    """Drop a greeting index.php into the document root unless one exists."""
    index = site.document_root / DEFAULT_INDEX_NAME
    try:
        if index.is_symlink():
            raise FilesystemError(f"{index} is a symlink; refusing to write through it")
        if not index.exists():
            index.write_text(DEFAULT_INDEX_CONTENT)
            log.debug("wrote %s", index)
        uid, gid = _ids(user, group)
        os.lchown(index, uid, gid)
        index.chmod(DEFAULT_INDEX_MODE)
    except (OSError, LookupError) as exc:
        raise FilesystemError(f"Could not write {index}: {exc}") from exc
    return index
