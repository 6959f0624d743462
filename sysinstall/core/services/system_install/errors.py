"""
Install errors — raised by the system install services.

The use-case layer catches ``InstallError`` and turns it into a result
with ``error`` set; the CLI prints it and exits 1.
"""

from __future__ import annotations


class InstallError(Exception):
    """Base class for a failed system install."""


class UnsupportedPlatformError(InstallError):
    """The detected operating system is not supported by the vendor build."""


class DownloadError(InstallError):
    """Fetching the binary or writing it to its final path failed."""


class PermissionSetError(InstallError):
    """Marking the installed binary executable failed."""
