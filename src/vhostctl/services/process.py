"""Subprocess wrapper shared by the nginx and certbot services."""

from __future__ import annotations

import logging
import shlex
import subprocess

from vhostctl.errors import CommandError

log = logging.getLogger(__name__)


def run(cmd: list[str], *, check: bool = True, capture: bool = True) -> subprocess.CompletedProcess[str]:
    """Run *cmd* and wait for it.

    With ``check`` a non-zero exit raises CommandError carrying stderr.
    A missing executable always raises CommandError.
    """
    log.debug("exec: %s", shlex.join(cmd))
    try:
        return subprocess.run(
            cmd,
            check=check,
            capture_output=capture,
            text=True,
        )
    except subprocess.CalledProcessError as exc:
        raise CommandError(
            f"Command failed: {shlex.join(cmd)}\nstderr: {exc.stderr}"
        ) from exc
    except FileNotFoundError as exc:
        raise CommandError(f"Command not found: {cmd[0]}") from exc
