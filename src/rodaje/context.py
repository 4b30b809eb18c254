"""Process-wide state set by the command line."""

from __future__ import annotations

from pathlib import Path


class _Context:
    """Holds options given once on the command line and read by subcommands."""

    def __init__(self) -> None:
        self.config_path: Path | None = None


_context = _Context()


def get_config_path() -> Path | None:
    """Return the config path passed with --config, if any."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    """Remember the config path passed with --config."""
    _context.config_path = path


def reset() -> None:
    """Forget everything set so far (used between CLI invocations in tests)."""
    _context.config_path = None
