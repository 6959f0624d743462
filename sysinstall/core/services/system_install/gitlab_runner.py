"""
GitLab Runner install — download the runner binary for this machine.

Steps:
    1. Expand ``$HOME`` / ``~`` in the install path.
    2. Detect OS + arch; only Linux is supported.
    3. Apply the ``--arch`` override, map to the vendor's naming.
    4. Normalize the version and build the download URL.
    5. Download (directly, or to a temp file + ``sudo cp`` when the
       target directory is not writable).
    6. Mark the binary executable (0755 on both paths).

Raises ``InstallError`` subclasses; never exits the process.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable

from sysinstall.core.models.install import InstallRequest, ResolvedTarget
from sysinstall.core.services.system_install.constants import SUPPORTED_OS
from sysinstall.core.services.system_install.detection import get_client_arch
from sysinstall.core.services.system_install.download import (
    ProgressCallback,
    download_file,
)
from sysinstall.core.services.system_install.errors import (
    DownloadError,
    PermissionSetError,
    UnsupportedPlatformError,
)
from sysinstall.core.services.system_install.resolve import expand_home, resolve_target
from sysinstall.core.services.system_install.subprocess_runner import run_subprocess

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


def _noop(_message: str) -> None:
    pass


def _ensure_parent_dir(dest: Path) -> None:
    """Create the parent directory tree.  Failure is logged, not raised."""
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create %s: %s", dest.parent, e)


def _needs_privilege(dest: Path) -> bool:
    """True when we are not root and cannot write into ``dest``'s directory."""
    if os.geteuid() == 0:
        return False
    return not os.access(dest.parent, os.W_OK)


def _install_privileged(
    target: ResolvedTarget,
    dest: Path,
    on_progress: ProgressCallback | None,
    sudo_password: str,
) -> None:
    """Download to a temp file, then ``sudo cp`` it into place."""
    fd, tmp_name = tempfile.mkstemp(prefix="gitlab-runner-")
    os.close(fd)
    tmp_file = Path(tmp_name)

    try:
        download_file(target.download_url, tmp_file, on_progress=on_progress)

        result = run_subprocess(
            ["cp", str(tmp_file), str(dest)],
            needs_sudo=True,
            sudo_password=sudo_password,
            timeout=30,
        )
        if not result["ok"]:
            detail = result.get("stderr") or result["error"]
            raise DownloadError(f"failed to copy binary to {dest}: {detail}")
    finally:
        tmp_file.unlink(missing_ok=True)


def _make_executable(dest: Path, *, privileged: bool, sudo_password: str) -> None:
    if privileged:
        # Explicit mode: cp carries over the 0600 mode of the mkstemp file
        result = run_subprocess(
            ["chmod", "0755", str(dest)],
            needs_sudo=True,
            sudo_password=sudo_password,
            timeout=10,
        )
        if not result["ok"]:
            detail = result.get("stderr") or result["error"]
            raise PermissionSetError(
                f"failed to set execute permissions for GitLab Runner binary: {detail}"
            )
        return

    try:
        os.chmod(dest, 0o755)
    except OSError as e:
        raise PermissionSetError(
            f"failed to set execute permissions for GitLab Runner binary: {e}"
        ) from e


def install_gitlab_runner(
    request: InstallRequest,
    *,
    echo: Echo | None = None,
    on_progress: ProgressCallback | None = None,
    sudo_password: str = "",
    dry_run: bool = False,
) -> ResolvedTarget:
    """Install the GitLab Runner binary described by ``request``.

    Args:
        request: Path, version, arch override and progress preference.
        echo: Receives one human-readable line per stage.
        on_progress: Download progress callback ``(downloaded, total)``.
            Ignored when ``request.show_progress`` is False.
        sudo_password: Piped to ``sudo -S`` when the target directory
            needs root.  Empty means sudo prompts on the terminal.
        dry_run: Resolve the target and stop before touching the disk.

    Returns:
        The resolved target (version, arch, URL, expanded path).

    Raises:
        UnsupportedPlatformError: The OS is not Linux.  Nothing is downloaded.
        DownloadError: The binary could not be fetched or put in place.
        PermissionSetError: The binary could not be made executable.
    """
    say = echo or _noop

    say(f"Installing GitLab Runner to {request.install_path}")
    install_path = expand_home(request.install_path)

    arch, os_name = get_client_arch()
    if os_name.lower() != SUPPORTED_OS:
        raise UnsupportedPlatformError("this app only supports Linux")

    if request.arch_override:
        arch = request.arch_override

    target = resolve_target(
        version=request.version,
        arch=arch,
        install_path=install_path,
    )
    say(f"Installing version: {target.version} for: {target.architecture}")

    if dry_run:
        logger.info("Dry run, skipping download of %s", target.download_url)
        return target

    dest = Path(install_path)
    _ensure_parent_dir(dest)

    progress = on_progress if request.show_progress else None
    privileged = _needs_privilege(dest)

    say(f"Downloading from: {target.download_url}")
    try:
        if privileged:
            logger.info("%s is not writable, installing with sudo", dest.parent)
            _install_privileged(target, dest, progress, sudo_password)
        else:
            download_file(target.download_url, dest, on_progress=progress)
    except DownloadError as e:
        say(install_path)
        say(target.download_url)
        raise DownloadError(f"failed to download GitLab Runner binary: {e}") from e

    say(f"Downloaded to: {install_path}")

    _make_executable(dest, privileged=privileged, sudo_password=sudo_password)

    logger.info("Installed GitLab Runner %s (%s) at %s",
                target.version, target.architecture, install_path)
    return target
