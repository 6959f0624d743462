"""
Execution — subprocess runner for privileged install steps.

The single place where ``subprocess.run`` is called for installs.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)


def run_subprocess(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    sudo_password: str = "",
    timeout: int = 120,
) -> dict[str, Any]:
    """Run a command, optionally through sudo.

    With a password, it is piped via stdin (``sudo -S -k``) and never
    appears in the argument list or the log.  Without one, plain ``sudo``
    is used and prompts on the controlling terminal.  When already root
    no prefix is added.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Whether the command requires root.
        sudo_password: Sudo password (piped to stdin).
        timeout: Seconds before ``TimeoutExpired``.

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    use_password = False
    if needs_sudo and os.geteuid() != 0:
        if sudo_password:
            cmd = ["sudo", "-S", "-k"] + cmd
            use_password = True
        else:
            cmd = ["sudo"] + cmd

    logger.debug("Running: %s", " ".join(cmd))

    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=(sudo_password + "\n") if use_password else None,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        logger.warning("Subprocess error: %s: %s", cmd[0], e)
        return {"ok": False, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)

    if result.returncode == 0:
        return {
            "ok": True,
            "stdout": result.stdout[-2000:] if result.stdout else "",
            "elapsed_ms": elapsed_ms,
        }

    stderr = result.stderr[-2000:] if result.stderr else ""

    # Wrong password?
    if use_password and (
        "incorrect password" in stderr.lower() or "sorry" in stderr.lower()
    ):
        return {
            "ok": False,
            "needs_sudo": True,
            "error": "Wrong sudo password.",
        }

    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "stderr": stderr,
        "elapsed_ms": elapsed_ms,
    }
