"""Tests for the per-site directory tree."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from vhostctl.config import VhostctlConfig
from vhostctl.errors import FilesystemError
from vhostctl.services.filesystem import ensure_site_tree, write_default_index

from conftest import CURRENT_GROUP, CURRENT_USER


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


class TestEnsureSiteTree:
    def test_creates_layout(self, tmp_config: VhostctlConfig):
        site = tmp_config.site("example.com")
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)

        base = tmp_config.www_base / "example.com"
        for d in (base / "wwwroot", base / "logs", base / "wwwroot/.well-known/acme-challenge"):
            assert d.is_dir()
            assert _mode(d) == 0o750
            assert d.stat().st_uid == os.getuid()
        assert _mode(base) == 0o750

    def test_idempotent(self, tmp_config: VhostctlConfig):
        site = tmp_config.site("example.com")
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)
        (site.document_root / "keep.html").write_text("hi")
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)

        assert (site.document_root / "keep.html").read_text() == "hi"
        assert sorted(p.name for p in site.site_dir.iterdir()) == ["logs", "wwwroot"]

    def test_mode_applied_to_existing_files(self, tmp_config: VhostctlConfig):
        site = tmp_config.site("example.com")
        site.document_root.mkdir(parents=True)
        page = site.document_root / "page.html"
        page.write_text("x")
        page.chmod(0o666)
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)
        assert _mode(page) == 0o750

    def test_symlinked_file_target_untouched(self, tmp_config: VhostctlConfig, tmp_path: Path):
        site = tmp_config.site("example.com")
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)
        outside = tmp_path / "secret.txt"
        outside.write_text("secret")
        outside.chmod(0o600)
        before = outside.stat()
        link = site.document_root / "link"
        link.symlink_to(outside)

        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)

        assert link.is_symlink()
        assert _mode(outside) == 0o600
        assert (outside.stat().st_uid, outside.stat().st_gid) == (before.st_uid, before.st_gid)

    def test_symlinked_dir_not_descended(self, tmp_config: VhostctlConfig, tmp_path: Path):
        site = tmp_config.site("example.com")
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)
        outside = tmp_path / "elsewhere"
        outside.mkdir()
        outside.chmod(0o700)
        inner = outside / "data.txt"
        inner.write_text("x")
        inner.chmod(0o640)
        (site.document_root / "shared").symlink_to(outside, target_is_directory=True)

        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)

        assert _mode(outside) == 0o700
        assert _mode(inner) == 0o640

    def test_unknown_user_is_fatal(self, tmp_config: VhostctlConfig):
        site = tmp_config.site("example.com")
        with pytest.raises(FilesystemError):
            ensure_site_tree(site, "no-such-user-vhostctl", CURRENT_GROUP)


class TestDefaultIndex:
    def test_writes_greeting(self, tmp_config: VhostctlConfig):
        site = tmp_config.site("example.com")
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)
        index = write_default_index(site, CURRENT_USER, CURRENT_GROUP)

        assert index == site.document_root / "index.php"
        assert "Hello World!" in index.read_text()
        assert _mode(index) == 0o644

    def test_keeps_existing_content(self, tmp_config: VhostctlConfig):
        site = tmp_config.site("example.com")
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)
        index = site.document_root / "index.php"
        index.write_text("<?php phpinfo();")

        write_default_index(site, CURRENT_USER, CURRENT_GROUP)
        assert index.read_text() == "<?php phpinfo();"
        assert _mode(index) == 0o644

    def test_refuses_symlinked_index(self, tmp_config: VhostctlConfig, tmp_path: Path):
        site = tmp_config.site("example.com")
        ensure_site_tree(site, CURRENT_USER, CURRENT_GROUP)
        outside = tmp_path / "other.php"
        outside.write_text("<?php // other")
        outside.chmod(0o600)
        (site.document_root / "index.php").symlink_to(outside)

        with pytest.raises(FilesystemError):
            write_default_index(site, CURRENT_USER, CURRENT_GROUP)
        assert outside.read_text() == "<?php // other"
        assert _mode(outside) == 0o600
