"""
Resolution — turn user input into a concrete download target.

Pure functions: no network, no filesystem.
"""

from __future__ import annotations

import os

from sysinstall.core.models.install import ResolvedTarget
from sysinstall.core.services.system_install.constants import (
    DOWNLOAD_URL_TEMPLATE,
    HOME_PLACEHOLDER,
    LATEST_VERSION,
    RUNNER_ARCH_MAP,
)


def expand_home(path: str, home: str | None = None) -> str:
    """Replace ``$HOME`` (anywhere) and a leading ``~`` with the home dir.

    Args:
        path: Raw ``--path`` value.
        home: Home directory; defaults to the ``HOME`` environment variable.

    Returns:
        The path with placeholders substituted.  Other ``$VARS`` are left
        alone.
    """
    if home is None:
        home = os.environ.get("HOME", "")

    path = path.replace(HOME_PLACEHOLDER, home)
    if path == "~" or path.startswith("~/"):
        path = home + path[1:]
    return path


def map_arch(arch: str) -> str:
    """Map a raw architecture token to the runner's asset naming."""
    return RUNNER_ARCH_MAP.get(arch, arch)


def normalize_version(version: str) -> str:
    """``""`` → ``latest``; ``1.2.3`` → ``v1.2.3``; ``v1.2.3`` unchanged."""
    if not version:
        return LATEST_VERSION
    if not version.startswith("v"):
        return f"v{version}"
    return version


def build_download_url(version: str, arch: str) -> str:
    """Fill the vendor URL template.  Inputs must already be normalized."""
    return DOWNLOAD_URL_TEMPLATE.format(version=version, arch=arch)


def resolve_target(*, version: str, arch: str, install_path: str) -> ResolvedTarget:
    """Resolve version, architecture and URL for one install."""
    resolved_version = normalize_version(version)
    resolved_arch = map_arch(arch)
    return ResolvedTarget(
        version=resolved_version,
        architecture=resolved_arch,
        download_url=build_download_url(resolved_version, resolved_arch),
        install_path=install_path,
    )
