"""
Shared test fixtures and configuration.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

_GITLAB_RUNNER = "sysinstall.core.services.system_install.gitlab_runner"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty directory with no sysinstall env vars."""
    for name in (
        "SYSINSTALL_CONFIG",
        "SYSINSTALL_LOG_LEVEL",
        "SYSINSTALL_LOG_FILE",
        "SYSINSTALL_LOG_FILE_LEVEL",
        "SUDO_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def linux_amd64():
    """Pretend the client is a Linux x86_64 machine."""
    with patch(f"{_GITLAB_RUNNER}.get_client_arch", return_value=("x86_64", "Linux")) as m:
        yield m


@pytest.fixture
def fake_download():
    """Replace the network download with one that writes a small payload.

    Reports progress in two chunks so progress callbacks get exercised.
    """
    payload = b"#!/bin/sh\necho gitlab-runner\n"

    def _download(url, dest, *, on_progress=None, timeout=60):
        Path(dest).write_bytes(payload)
        if on_progress is not None:
            on_progress(len(payload) // 2, len(payload))
            on_progress(len(payload), len(payload))
        return len(payload)

    with patch(f"{_GITLAB_RUNNER}.download_file", side_effect=_download) as m:
        yield m
