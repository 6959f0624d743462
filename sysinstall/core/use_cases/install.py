"""
Install use case — run a system install and capture the outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sysinstall.core.models.install import InstallRequest, ResolvedTarget
from sysinstall.core.services.system_install.download import ProgressCallback
from sysinstall.core.services.system_install.errors import InstallError
from sysinstall.core.services.system_install.gitlab_runner import (
    Echo,
    install_gitlab_runner,
)

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Outcome of one install invocation."""

    target: ResolvedTarget | None = None
    installed: bool = False
    dry_run: bool = False
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {"ok": self.ok}
        if self.error:
            result["error"] = self.error
            result["error_type"] = self.error_type
            return result

        result["installed"] = self.installed
        result["dry_run"] = self.dry_run
        if self.target:
            result["target"] = self.target.model_dump()
        return result


def run_gitlab_runner_install(
    request: InstallRequest,
    *,
    echo: Echo | None = None,
    on_progress: ProgressCallback | None = None,
    sudo_password: str = "",
    dry_run: bool = False,
) -> InstallResult:
    """Install GitLab Runner, turning any ``InstallError`` into a result."""
    try:
        target = install_gitlab_runner(
            request,
            echo=echo,
            on_progress=on_progress,
            sudo_password=sudo_password,
            dry_run=dry_run,
        )
    except InstallError as e:
        logger.debug("GitLab Runner install failed", exc_info=True)
        return InstallResult(error=str(e), error_type=type(e).__name__)

    return InstallResult(target=target, installed=not dry_run, dry_run=dry_run)
