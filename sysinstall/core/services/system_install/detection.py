"""
Detection — client architecture and operating system.

Read-only probes. Nothing here touches the filesystem.
"""

from __future__ import annotations

import logging
import platform

logger = logging.getLogger(__name__)


def get_client_arch() -> tuple[str, str]:
    """Return ``(arch, os)`` for the running machine.

    Values are the raw ``uname`` forms, e.g. ``("x86_64", "Linux")`` or
    ``("arm64", "Darwin")``.  Callers normalize them.
    """
    arch = platform.machine()
    os_name = platform.system()
    logger.debug("Detected client arch=%s os=%s", arch, os_name)
    return arch, os_name
