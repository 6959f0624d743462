"""sysinstall — install system-level tools and CI agents."""

__version__ = "0.1.0"
