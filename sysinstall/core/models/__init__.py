"""
Domain models for sysinstall.

Re-exports the public model types so callers can do::

    from sysinstall.core.models import InstallRequest, ResolvedTarget
"""

from sysinstall.core.models.config import GitLabRunnerDefaults, InstallerConfig
from sysinstall.core.models.install import InstallRequest, ResolvedTarget

__all__ = [
    "GitLabRunnerDefaults",
    "InstallRequest",
    "InstallerConfig",
    "ResolvedTarget",
]
