"""YAML parser for rodaje project files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .models import Project
from .schemas import ProjectFileSchema, ProjectSchema


def project_from_schema(project_id: str, schema: ProjectSchema) -> Project:
    """Convert a validated schema entry into a Project."""
    fitting = schema.fitting
    prep = schema.prep
    return Project(
        id=project_id,
        name=schema.name,
        confirmed=schema.confirmed,
        primary_start=schema.primary.start,
        primary_end=schema.primary.end,
        fitting_start=fitting.start if fitting else None,
        fitting_end=fitting.end if fitting else None,
        prep_start=prep.start if prep else None,
        prep_end=prep.end if prep else None,
        producer=schema.producer,
        contact=schema.contact,
        city=schema.city,
        description=schema.description,
        notes=schema.notes,
        budget=schema.budget,
        team_budget=schema.team_budget,
    )


def parse_project_data(data: dict[str, Any]) -> list[Project]:
    """Validate loaded YAML data and build projects in file order."""
    try:
        schema = ProjectFileSchema(**data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid YAML structure: {e}") from e

    return [
        project_from_schema(project_id, entry) for project_id, entry in schema.projects.items()
    ]


def parse_project_file(file_path: Path | str) -> list[Project]:
    """Parse a YAML project file.

    An empty file holds no projects.

    Raises:
        ParseError: The file is missing or is not a YAML mapping.
        ValidationError: An entry does not match the project schema.
    """
    path = Path(file_path)
    if not path.exists():
        raise ParseError(f"File not found: {file_path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict):
        raise ParseError("YAML must contain a dictionary at the root level")

    return parse_project_data(data)  # type: ignore[arg-type]
