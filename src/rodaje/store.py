"""Project storage.

The scheduling functions never talk to storage themselves; callers fetch the
project list, hand it over, and save afterwards. ProjectStore describes what
such a collaborator offers, and YamlProjectStore is the file-backed one the
command line uses.
"""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path
from typing import Any, Protocol

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from .exceptions import DuplicateProjectError, ProjectNotFoundError
from .logger import get_logger
from .models import Project
from .parser import parse_project_file

logger = get_logger()


class ProjectStore(Protocol):
    """Protocol for project persistence."""

    def list(self) -> list[Project]:
        """Return every stored project."""
        ...

    def get(self, project_id: str) -> Project:
        """Return one project.

        Raises:
            ProjectNotFoundError: No project has this ID
        """
        ...

    def create(self, project: Project) -> Project:
        """Store a new project and return it as saved (with its final ID)."""
        ...

    def update(self, project: Project) -> Project:
        """Replace a stored project with the same ID."""
        ...

    def delete(self, project_id: str) -> None:
        """Remove a project."""
        ...


def slugify(text: str) -> str:
    """Lowercase, dash-separated ID from a project name."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.strip().lower()).strip("-")
    return slug or "project"


def _same_value(existing: Any, value: Any) -> bool:
    """Compare a loaded YAML value with a new one; unquoted days load as dates."""
    if isinstance(existing, date) and isinstance(value, str):
        return existing.isoformat() == value
    return bool(existing == value)


def _update_in_place(target: Any, new_values: dict[str, Any]) -> None:
    """Merge new_values into a ruamel mapping so untouched keys keep their formatting."""
    for key in [k for k in target if k not in new_values]:
        del target[key]
    for key, value in new_values.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _update_in_place(target[key], value)  # type: ignore[arg-type]
        elif key not in target or not _same_value(target[key], value):
            target[key] = value


class YamlProjectStore:
    """Projects kept in a single YAML file under a top-level ``projects`` key.

    Reads go through the validating parser. Writes round-trip the file with
    ruamel.yaml so comments and key order survive edits.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def list(self) -> list[Project]:
        if not self.path.exists():
            return []
        return parse_project_file(self.path)

    def get(self, project_id: str) -> Project:
        for project in self.list():
            if project.id == project_id:
                return project
        raise ProjectNotFoundError(f"Unknown project: {project_id}")

    def create(self, project: Project) -> Project:
        data = self._load_raw()
        projects = data["projects"]
        if project.id:
            if project.id in projects:
                raise DuplicateProjectError(f"Project '{project.id}' already exists")
            project_id = project.id
        else:
            project_id = self._unique_id(slugify(project.name), projects)

        projects[project_id] = project.to_dict()
        self._dump_raw(data)
        logger.changes(f"Created project {project_id}")
        return self.get(project_id)

    def update(self, project: Project) -> Project:
        data = self._load_raw()
        projects = data["projects"]
        if project.id not in projects:
            raise ProjectNotFoundError(f"Unknown project: {project.id}")
        _update_in_place(projects[project.id], project.to_dict())
        self._dump_raw(data)
        logger.changes(f"Updated project {project.id}")
        return self.get(project.id)

    def delete(self, project_id: str) -> None:
        data = self._load_raw()
        projects = data["projects"]
        if project_id not in projects:
            raise ProjectNotFoundError(f"Unknown project: {project_id}")
        del projects[project_id]
        self._dump_raw(data)
        logger.changes(f"Deleted project {project_id}")

    @staticmethod
    def _unique_id(base: str, taken: Any) -> str:
        candidate = base
        suffix = 2
        while candidate in taken:
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate

    def _yaml(self) -> YAML:
        yaml_rt = YAML()
        yaml_rt.preserve_quotes = True  # type: ignore[assignment]
        return yaml_rt

    def _load_raw(self) -> Any:
        data: Any = None
        if self.path.exists():
            with self.path.open(encoding="utf-8") as f:
                data = self._yaml().load(f)  # type: ignore[no-untyped-call]
        if data is None:
            data = CommentedMap()
        if data.get("projects") is None:
            data["projects"] = CommentedMap()
        return data

    def _dump_raw(self, data: Any) -> None:
        with self.path.open("w", encoding="utf-8") as f:
            self._yaml().dump(data, f)  # type: ignore[no-untyped-call]
