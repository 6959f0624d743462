"""
Config models — schema for sysinstall.yml.

Every field is optional: a value left unset falls back to the
command's own default, and an explicit CLI flag always wins.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GitLabRunnerDefaults(BaseModel):
    """Defaults for ``system install gitlab-runner``."""

    model_config = ConfigDict(extra="forbid")

    path: str | None = None
    version: str | None = None
    arch: str | None = None
    progress: bool | None = None

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, v: object) -> object:
        # YAML reads ``16.10`` as the float 16.1, so the original text is lost
        if isinstance(v, float):
            raise ValueError(
                f"version {v!r} was read as a number; quote it, e.g. version: \"16.10.0\""
            )
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class InstallerConfig(BaseModel):
    """Root of sysinstall.yml."""

    model_config = ConfigDict(extra="forbid")

    gitlab_runner: GitLabRunnerDefaults = Field(default_factory=GitLabRunnerDefaults)
