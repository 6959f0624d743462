"""
sysinstall — CLI entrypoint.

Usage:
    python -m sysinstall.main --help
    sysinstall system install gitlab-runner
    sysinstall system install gitlab-runner --version 16.11.0
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from sysinstall import __version__
from sysinstall.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="sysinstall")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    envvar="SYSINSTALL_CONFIG",
    default=None,
    help="Path to sysinstall.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """sysinstall — install system tools and CI agents for this machine."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


# ── Register sub-command groups from sysinstall/ui/cli/ ───────────

from sysinstall.ui.cli.system import system  # noqa: E402

cli.add_command(system)


if __name__ == "__main__":
    cli()
