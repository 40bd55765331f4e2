"""Specification storage configuration model."""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from specmerge.config._defaults import DEFAULT_SPECS_DIRECTORY


class SpecsConfig(BaseModel):
    """Specification storage section.

    Attributes:
        directory: Storage root for spec documents. Relative paths are
            resolved against the project root.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    directory: str = Field(default=DEFAULT_SPECS_DIRECTORY, min_length=1)

    def resolve_directory(self, project_root: Path) -> Path:
        """Return the storage root as an absolute path."""
        path = Path(self.directory).expanduser()
        if path.is_absolute():
            return path
        return project_root / path
