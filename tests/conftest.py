"""Pytest configuration and fixtures for rodaje tests."""

from __future__ import annotations

from typing import Any

import pytest

from rodaje import context
from rodaje.logger import reset_logger
from rodaje.models import Project


@pytest.fixture(autouse=True)
def clean_global_state() -> None:
    """Reset the logger and CLI context before each test for isolation."""
    reset_logger()
    context.reset()


def make_project(  # noqa: PLR0913 - test helper mirrors the project fields
    project_id: str,
    primary: tuple[str, str] | None = None,
    *,
    fitting: tuple[str | None, str | None] | None = None,
    prep: tuple[str | None, str | None] | None = None,
    confirmed: bool = True,
    name: str | None = None,
    **extra: Any,
) -> Project:
    """Build a Project from (start, end) tuples.

    Example:
        make_project("a", ("2025-01-01", "2025-01-10"), fitting=("2024-12-30", "2024-12-30"))
    """
    primary_start, primary_end = primary if primary else (None, None)
    fitting_start, fitting_end = fitting if fitting else (None, None)
    prep_start, prep_end = prep if prep else (None, None)
    return Project(
        id=project_id,
        name=name if name is not None else project_id.title(),
        confirmed=confirmed,
        primary_start=primary_start,
        primary_end=primary_end,
        fitting_start=fitting_start,
        fitting_end=fitting_end,
        prep_start=prep_start,
        prep_end=prep_end,
        **extra,
    )
