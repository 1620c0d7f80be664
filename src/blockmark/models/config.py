"""Configuration models for Blockmark."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


Flavor = Literal["html", "markdown"]
FrontMatterFormat = Literal["json", "yaml", "none"]


class PropertyConfig(BaseModel):
    """A document property copied into the front matter."""

    name: str = Field(
        ...,
        min_length=1,
        description="Name of the document property"
    )

    rename: Optional[str | list[str]] = Field(
        default=None,
        description="Front matter key, or list of keys for a nested location"
    )

    model_config = {"frozen": True}

    @property
    def path(self) -> tuple[str, ...]:
        """Front matter location of this property as a tuple of keys."""
        if self.rename is None:
            return (self.name,)
        if isinstance(self.rename, str):
            return (self.rename,)
        return tuple(self.rename)

    @field_validator("rename")
    @classmethod
    def validate_rename(cls, v: Optional[str | list[str]]) -> Optional[str | list[str]]:
        """Reject empty keys in the rename path."""
        if v is None:
            return v
        keys = [v] if isinstance(v, str) else v
        if not keys or any(not key for key in keys):
            raise ValueError("rename must be a non-empty key or list of non-empty keys")
        return v


class RenderConfig(BaseModel):
    """Root configuration for rendering documents."""

    flavor: Flavor = Field(
        default="html",
        description="Default render functions to use (html or markdown)"
    )

    front_matter: FrontMatterFormat = Field(
        default="yaml",
        description="How document properties are written ahead of the content"
    )

    skip_unsupported: bool = Field(
        default=False,
        description="Omit blocks without a renderer instead of failing"
    )

    properties: list[PropertyConfig] = Field(
        default_factory=list,
        description="Document properties to include in the front matter"
    )

    model_config = {"frozen": True}

    @classmethod
    def load(cls, path: Path) -> "RenderConfig":
        """
        Load configuration from YAML file.

        Args:
            path: Path to config.yaml file

        Returns:
            Validated RenderConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML is invalid or validation fails
        """
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found at {path}\n\n"
                f"Please create the file with the following format:\n\n"
                f"flavor: markdown\n"
                f"front_matter: yaml\n"
                f"properties:\n"
                f"  - name: Title\n"
                f"    rename: title\n"
            )

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

        return cls.model_validate(data)
