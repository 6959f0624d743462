"""
Data — constants for system-level binary installs.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# The only platform the vendor publishes raw runner binaries for here.
SUPPORTED_OS = "linux"

DEFAULT_INSTALL_PATH = "/usr/local/bin/gitlab-runner"

# Vendor binary storage. ``{version}`` is ``latest`` or ``vX.Y.Z``.
DOWNLOAD_URL_TEMPLATE = (
    "https://gitlab-runner-downloads.s3.amazonaws.com/"
    "{version}/binaries/gitlab-runner-linux-{arch}"
)

LATEST_VERSION = "latest"

# ``uname -m`` → GitLab Runner asset naming.  Unknown tokens pass through,
# so ``amd64``/``arm64`` given via --arch are used as-is.
RUNNER_ARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "aarch64": "arm64",
    "armv7": "arm",
    "armv7l": "arm",
}

# Placeholder substituted with $HOME in --path values.
HOME_PLACEHOLDER = "$HOME"

USER_AGENT = "sysinstall/0.1"

DOWNLOAD_CHUNK_SIZE = 8192
DOWNLOAD_TIMEOUT = 60
