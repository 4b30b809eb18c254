"""Pydantic schemas for YAML data validation."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .dates import normalize_day
from .exceptions import InvalidDateFormat


class RangeSchema(BaseModel):
    """Schema for a start/end pair; either bound may be omitted."""

    start: str | None = None
    end: str | None = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_date_to_string(cls, v: Any) -> str | None:
        """YAML turns unquoted 2025-06-10 into a date; keep canonical ISO text instead."""
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            raise ValueError(f"expected a calendar day, got a timestamp: {v}")
        if not isinstance(v, str | date):
            raise ValueError(f"expected a YYYY-MM-DD day, got {v!r}")
        try:
            return normalize_day(v)
        except InvalidDateFormat as e:
            raise ValueError(str(e)) from e


class ProjectSchema(BaseModel):
    """Schema for one project entry."""

    name: str = ""
    confirmed: bool = True
    primary: RangeSchema
    fitting: RangeSchema | None = None
    prep: RangeSchema | None = None
    producer: str = ""
    contact: str = ""
    city: str = ""
    description: str = ""
    notes: str = ""
    budget: float | None = None
    team_budget: float | None = None

    @field_validator("name", "producer", "contact", "city", "description", "notes", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Treat null as blank and numbers as text."""
        if v is None:
            return ""
        return str(v)


class ProjectFileSchema(BaseModel):
    """Schema for the entire project file."""

    projects: dict[str, ProjectSchema] = Field(default_factory=dict)

    @field_validator("projects", mode="before")
    @classmethod
    def coerce_ids_to_string(cls, v: Any) -> Any:
        """Allow numeric project IDs."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(key): value for key, value in v.items()}  # type: ignore[misc]
        return v
