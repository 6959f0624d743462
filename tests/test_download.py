"""
Tests for the streamed binary download.
"""

import http.client
import io
import urllib.error
from pathlib import Path
from unittest.mock import patch

import pytest

from sysinstall.core.services.system_install.download import _fmt_size, download_file
from sysinstall.core.services.system_install.errors import DownloadError

URL = "https://gitlab-runner-downloads.s3.amazonaws.com/latest/binaries/gitlab-runner-linux-amd64"


class _FakeResponse:
    def __init__(self, body: bytes, *, content_length: bool = True, declared: int = -1):
        self._buf = io.BytesIO(body)
        size = len(body) if declared < 0 else declared
        self.headers = {"Content-Length": str(size)} if content_length else {}

    def read(self, n: int = -1) -> bytes:
        return self._buf.read(n)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class TestDownloadFile:
    def test_writes_body(self, tmp_path: Path):
        body = b"x" * 20000
        dest = tmp_path / "gitlab-runner"
        with patch("urllib.request.urlopen", return_value=_FakeResponse(body)):
            written = download_file(URL, dest)
        assert written == 20000
        assert dest.read_bytes() == body

    def test_sends_user_agent(self, tmp_path: Path):
        with patch("urllib.request.urlopen", return_value=_FakeResponse(b"abc")) as m:
            download_file(URL, tmp_path / "bin")
        req = m.call_args[0][0]
        assert req.full_url == URL
        assert req.get_header("User-agent").startswith("sysinstall/")

    def test_overwrites_existing_file(self, tmp_path: Path):
        dest = tmp_path / "gitlab-runner"
        dest.write_bytes(b"old contents that are longer")
        with patch("urllib.request.urlopen", return_value=_FakeResponse(b"new")):
            download_file(URL, dest)
        assert dest.read_bytes() == b"new"

    def test_progress_callback(self, tmp_path: Path):
        body = b"y" * 20000
        calls = []
        with patch("urllib.request.urlopen", return_value=_FakeResponse(body)):
            download_file(URL, tmp_path / "bin", on_progress=lambda d, t: calls.append((d, t)))
        assert calls[0] == (8192, 20000)
        assert calls[-1] == (20000, 20000)
        assert len(calls) == 3

    def test_progress_without_content_length(self, tmp_path: Path):
        calls = []
        with patch("urllib.request.urlopen", return_value=_FakeResponse(b"z" * 10, content_length=False)):
            download_file(URL, tmp_path / "bin", on_progress=lambda d, t: calls.append((d, t)))
        assert calls == [(10, 0)]

    def test_http_error_raises(self, tmp_path: Path):
        dest = tmp_path / "gitlab-runner"
        err = urllib.error.HTTPError(URL, 404, "Not Found", hdrs=None, fp=None)
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(DownloadError, match="404"):
                download_file(URL, dest)
        assert not dest.exists()

    def test_http_error_keeps_existing_binary(self, tmp_path: Path):
        dest = tmp_path / "gitlab-runner"
        dest.write_bytes(b"working binary")
        err = urllib.error.HTTPError(URL, 404, "Not Found", hdrs=None, fp=None)
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(DownloadError, match="404"):
                download_file(URL, dest)
        assert dest.read_bytes() == b"working binary"

    def test_short_body_raises(self, tmp_path: Path):
        dest = tmp_path / "gitlab-runner"
        resp = _FakeResponse(b"a" * 100, declared=5000)
        with patch("urllib.request.urlopen", return_value=resp):
            with pytest.raises(DownloadError, match="incomplete download \\(100 of 5000 bytes\\)"):
                download_file(URL, dest)
        assert not dest.exists()

    def test_protocol_error_raises(self, tmp_path: Path):
        with patch("urllib.request.urlopen", side_effect=http.client.BadStatusLine("garbage")):
            with pytest.raises(DownloadError, match="garbage"):
                download_file(URL, tmp_path / "bin")

    def test_network_error_raises(self, tmp_path: Path):
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("no route")):
            with pytest.raises(DownloadError, match="no route"):
                download_file(URL, tmp_path / "bin")

    def test_write_error_removes_partial(self, tmp_path: Path):
        dest = tmp_path / "missing-dir" / "gitlab-runner"
        with patch("urllib.request.urlopen", return_value=_FakeResponse(b"abc")):
            with pytest.raises(DownloadError):
                download_file(URL, dest)
        assert not dest.exists()


class TestFmtSize:
    def test_bytes(self):
        assert _fmt_size(512) == "512.0 B"

    def test_megabytes(self):
        assert _fmt_size(5 * 1024 * 1024) == "5.0 MB"
