"""Shared test fixtures."""

from __future__ import annotations

import grp
import os
import pwd
import subprocess
from pathlib import Path

import pytest

from vhostctl.config import VhostctlConfig
from vhostctl.errors import CommandError

CURRENT_USER = pwd.getpwuid(os.getuid()).pw_name
CURRENT_GROUP = grp.getgrgid(os.getgid()).gr_name


@pytest.fixture
def tmp_config(tmp_path: Path) -> VhostctlConfig:
    """Return a VhostctlConfig pointing at temp directories."""
    return VhostctlConfig(
        www_base=tmp_path / "www",
        sites_available_dir=tmp_path / "nginx" / "sites-available",
        sites_enabled_dir=tmp_path / "nginx" / "sites-enabled",
        letsencrypt_dir=tmp_path / "letsencrypt",
        certbot_log_path=tmp_path / "letsencrypt.log",
        web_user=CURRENT_USER,
        web_group=CURRENT_GROUP,
        require_root=False,
        host_id="test-host",
        log_dir=tmp_path / "log",
        audit_jsonl_path=tmp_path / "log" / "audit.jsonl",
        audit_db_path=tmp_path / "lib" / "audit.db",
    )


@pytest.fixture
def patched_config(tmp_config: VhostctlConfig, monkeypatch) -> VhostctlConfig:
    """Make every get_config() call in the CLI return tmp_config."""
    for module in (
        "vhostctl.audit",
        "vhostctl.commands.site",
        "vhostctl.commands.vhost",
        "vhostctl.commands.cert",
    ):
        monkeypatch.setattr(f"{module}.get_config", lambda: tmp_config)
    return tmp_config


class FakeRunner:
    """Stand-in for services.process.run that records commands.

    ``results`` maps a command prefix (tuple) to the return code it should
    produce; the longest matching prefix wins.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.results: dict[tuple[str, ...], int] = {}

    def __call__(self, cmd: list[str], *, check: bool = True, capture: bool = True):
        self.calls.append(list(cmd))
        rc = 0
        best = -1
        for prefix, code in self.results.items():
            if tuple(cmd[: len(prefix)]) == prefix and len(prefix) > best:
                rc, best = code, len(prefix)
        if check and rc != 0:
            raise CommandError(f"Command failed: {' '.join(cmd)}\nstderr: boom")
        return subprocess.CompletedProcess(cmd, rc, stdout="", stderr="boom")

    def commands(self, program: str) -> list[list[str]]:
        return [c for c in self.calls if c[0] == program]


@pytest.fixture
def fake_run(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr("vhostctl.services.process.run", runner)
    return runner
