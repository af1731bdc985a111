"""Configuration schema for jsmsg-export using Pydantic models."""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExportConfig(BaseModel):
    """Settings for one export run."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    js: list[str] = Field(
        ...,
        description="Source file patterns; a leading '!' excludes matching files",
        min_length=1,
    )
    output: Path = Field(
        ...,
        description="PHP file containing the START/END CONTENT region",
    )
    project_id: str = Field(
        default="",
        description="Project scope mixed into message ids",
    )
    allow_missing_region: bool = Field(
        default=False,
        description="Rewrite the output unchanged instead of failing when no region is found",
    )
    base_dir: Path | None = Field(
        default=None,
        description="Directory source patterns are resolved against (default: working directory)",
    )

    @field_validator("js")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Reject empty patterns and a bare '!'."""
        for pattern in v:
            if not pattern.strip() or pattern.strip() == "!":
                raise ValueError(f"Invalid source pattern: {pattern!r}")
        return v
