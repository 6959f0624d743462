"""
CLI commands for system-level installs.

Thin wrappers over ``sysinstall.core.use_cases.install``.

Usage::

    sysinstall system install gitlab-runner
    sysinstall system install gitlab-runner --version 16.11.0
    sysinstall system install gitlab-runner --path '$HOME/bin/gitlab-runner'
"""

from __future__ import annotations

import contextlib
import json
import sys
from typing import Any

import click
from click.core import ParameterSource

from sysinstall.core.services.system_install.constants import DEFAULT_INSTALL_PATH


class _DownloadProgress:
    """Download callback that drives a click progress bar.

    The bar is created on the first chunk, once the total size is known,
    and finished as soon as the last byte arrives.  Servers that send no
    Content-Length get no bar.
    """

    def __init__(self) -> None:
        self._stack = contextlib.ExitStack()
        self._bar: Any = None
        self._seen = 0

    def __call__(self, downloaded: int, total: int) -> None:
        if total <= 0:
            return
        if self._bar is None:
            self._bar = self._stack.enter_context(
                click.progressbar(length=total, label="Downloading", show_eta=False)
            )
        self._bar.update(downloaded - self._seen)
        self._seen = downloaded
        if downloaded >= total:
            self.close()

    def close(self) -> None:
        self._stack.close()


def _pick(ctx: click.Context, name: str, value: Any, configured: Any) -> Any:
    """Explicit CLI flag > sysinstall.yml > built-in default."""
    source = ctx.get_parameter_source(name)
    if source in (ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT):
        return value
    return value if configured is None else configured


@click.group()
def system() -> None:
    """System — install system-level tools and agents."""


@system.group()
def install() -> None:
    """Install a binary for the current machine."""


# ── GitLab Runner ───────────────────────────────────────────────


@install.command("gitlab-runner")
@click.option(
    "--version", "-v", "version", default="",
    help="The version or leave blank to determine the latest available version.",
)
@click.option(
    "--path", "install_path", default=DEFAULT_INSTALL_PATH, show_default=True,
    help="Installation path of the gitlab-runner binary ($HOME is expanded).",
)
@click.option("--progress/--no-progress", default=True, help="Show download progress.")
@click.option("--arch", default="", help="CPU architecture i.e. amd64.")
@click.option(
    "--sudo-password", envvar="SUDO_PASSWORD", default="",
    help="Password for sudo steps (can also set SUDO_PASSWORD env var).",
)
@click.option("--dry-run", is_flag=True, help="Resolve the download without installing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def gitlab_runner(
    ctx: click.Context,
    version: str,
    install_path: str,
    progress: bool,
    arch: str,
    sudo_password: str,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Install GitLab Runner for self-hosted CI.

    Examples::

        sysinstall system install gitlab-runner
        sysinstall system install gitlab-runner --version <version>
    """
    from sysinstall.core.config.loader import ConfigError, load_config
    from sysinstall.core.models.install import InstallRequest
    from sysinstall.core.use_cases.install import run_gitlab_runner_install

    try:
        defaults = load_config(ctx.obj.get("config_path")).gitlab_runner
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e), "error_type": "ConfigError"}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    request = InstallRequest(
        install_path=_pick(ctx, "install_path", install_path, defaults.path),
        version=_pick(ctx, "version", version, defaults.version),
        arch_override=_pick(ctx, "arch", arch, defaults.arch),
        show_progress=_pick(ctx, "progress", progress, defaults.progress),
    )

    quiet = as_json or ctx.obj.get("quiet", False)
    bar = _DownloadProgress() if request.show_progress and not quiet else None

    try:
        result = run_gitlab_runner_install(
            request,
            echo=None if quiet else click.echo,
            on_progress=bar,
            sudo_password=sudo_password,
            dry_run=dry_run,
        )
    finally:
        if bar is not None:
            bar.close()

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    target = result.target
    if dry_run:
        if target is None:
            click.secho("❌ no download target was resolved", fg="red")
            sys.exit(1)
        click.secho("[dry-run] GitLab Runner would be installed:", fg="cyan", bold=True)
        click.echo(f"   Version: {target.version}")
        click.echo(f"   Arch:    {target.architecture}")
        click.echo(f"   URL:     {target.download_url}")
        click.echo(f"   Path:    {target.install_path}")
        return

    click.secho("GitLab Runner installation completed successfully!", fg="green")
