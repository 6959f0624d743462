"""
Execution — streamed binary download.

Writes the response body straight to ``dest`` in fixed-size chunks.
"""

from __future__ import annotations

import http.client
import logging
import urllib.request
from pathlib import Path
from typing import Callable

from sysinstall.core.services.system_install.constants import (
    DOWNLOAD_CHUNK_SIZE,
    DOWNLOAD_TIMEOUT,
    USER_AGENT,
)
from sysinstall.core.services.system_install.errors import DownloadError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def _fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def download_file(
    url: str,
    dest: Path,
    *,
    on_progress: ProgressCallback | None = None,
    timeout: int = DOWNLOAD_TIMEOUT,
) -> int:
    """Download ``url`` to ``dest``, overwriting any existing file.

    Args:
        url: Source URL.
        dest: Destination file.  Its parent must already exist.
        on_progress: Called after every chunk with ``(downloaded, total)``.
            ``total`` is 0 when the server sends no Content-Length.
        timeout: Socket timeout in seconds.

    Returns:
        Number of bytes written.

    Raises:
        DownloadError: On any HTTP, network or write failure, or when fewer
            bytes arrive than Content-Length announced.  A partially written
            file is removed; an existing file is untouched if the request
            fails before writing starts.
    """
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    downloaded = 0
    total = 0
    opened = False

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            total = int(resp.headers.get("Content-Length", 0) or 0)
            with open(dest, "wb") as f:
                opened = True
                last_progress = -1
                while True:
                    chunk = resp.read(DOWNLOAD_CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    downloaded += len(chunk)

                    if on_progress is not None:
                        on_progress(downloaded, total)

                    # Log every 5%
                    if total > 0:
                        pct = int(downloaded * 100 / total)
                        if pct >= last_progress + 5:
                            last_progress = pct
                            logger.info(
                                "Download progress: %d%% (%s / %s)",
                                pct, _fmt_size(downloaded), _fmt_size(total),
                            )
    except (OSError, ValueError, http.client.HTTPException) as e:
        # Leave an existing binary alone unless we started overwriting it
        if opened:
            dest.unlink(missing_ok=True)
        raise DownloadError(f"GET {url} failed: {e}") from e

    if total > 0 and downloaded != total:
        dest.unlink(missing_ok=True)
        raise DownloadError(
            f"GET {url} failed: incomplete download ({downloaded} of {total} bytes)"
        )

    logger.info("Downloaded %s to %s", _fmt_size(downloaded), dest)
    return downloaded
