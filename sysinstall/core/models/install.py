"""
Install models — the request a user makes and the target it resolves to.

Both are transient: built for one command invocation and discarded.
"""

from __future__ import annotations

from pydantic import BaseModel

from sysinstall.core.services.system_install.constants import DEFAULT_INSTALL_PATH


class InstallRequest(BaseModel):
    """What the caller asked for, before any normalization.

    ``version`` and ``arch_override`` are empty when not supplied; the
    resolver turns them into ``latest`` and the detected architecture.
    """

    install_path: str = DEFAULT_INSTALL_PATH
    version: str = ""
    arch_override: str = ""
    show_progress: bool = True


class ResolvedTarget(BaseModel):
    """Where the binary comes from and where it goes."""

    version: str
    architecture: str
    download_url: str
    install_path: str
