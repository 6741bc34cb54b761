"""Pydantic schemas for target definition files."""

from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

from target_platform.models import TargetEnvironment


class FeatureContainerConfig(BaseModel):
    """Bundles of one feature installed under a home directory."""

    type: Literal["feature"]
    home: str = Field(..., description="Install home; may contain ${...} variables")
    id: str = Field(..., description="Feature symbolic name")
    version: str | None = Field(None, description="Exact feature version (default: most recent)")

    @field_validator("version", mode="before")
    @classmethod
    def version_must_be_quoted(cls, value):
        # YAML reads "version: 1.10" as the float 1.1; converting back would lose digits
        if value is not None and not isinstance(value, str):
            raise ValueError(f"version must be a string, got {value!r}; quote it (version: \"1.10\")")
        return value


class DirectoryContainerConfig(BaseModel):
    """Every bundle in a directory."""

    type: Literal["directory"]
    path: str = Field(..., description="Directory; may contain ${...} variables")


ContainerConfig = Annotated[FeatureContainerConfig | DirectoryContainerConfig, Field(discriminator="type")]


class TargetDefinitionFile(BaseModel):
    """Complete target definition file."""

    name: str = Field(..., description="Target definition name")
    environment: TargetEnvironment = Field(default_factory=TargetEnvironment)
    containers: list[ContainerConfig] = Field(default_factory=list)


class SettingsFile(BaseModel):
    """Recognised sections of a settings file."""

    variables: dict[str, str] = Field(default_factory=dict, description="Extra ${name} values")
    platform: TargetEnvironment = Field(default_factory=TargetEnvironment, description="Running-platform overrides")
    environment: TargetEnvironment = Field(default_factory=TargetEnvironment, description="Default target environment")
