"""Pydantic models for the files the generator writes.

The validator reads the same files as raw JSON (it must report on broken
input rather than fail to load it); these models describe what a well-formed
project looks like and are what ``mercy init`` serialises.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

METADATA_FILE = "mercy-integration.json"
MANIFEST_FILE = "manifest.json"
SOURCE_FILE = "src/integration.py"
README_FILE = "README.md"
TEST_DIR = "test"

MODULE_TYPE = "module"
DEFAULT_VERSION = "1.0.0"

CATEGORIES = (
    "moderation",
    "utility",
    "entertainment",
    "automation",
    "analytics",
    "security",
)


class _StrictModel(BaseModel):
    """Shared strict model settings for integration file contracts."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, populate_by_name=True)


class DeveloperInfo(_StrictModel):
    name: str
    email: str
    github: str | None = None


class RepositoryInfo(_StrictModel):
    url: str = ""
    branch: str = "main"


class SettingSpec(_StrictModel):
    """One entry of the metadata ``settings`` mapping."""

    type: str
    default: Any = None
    description: str = ""


class IntegrationFlags(_StrictModel):
    premium: bool = False
    experimental: bool = False
    beta: bool = False


def _default_settings() -> dict[str, SettingSpec]:
    return {
        "enabled": SettingSpec(
            type="boolean", default=True, description="Enable/disable the integration"
        ),
        "prefix": SettingSpec(
            type="string", default="!", description="Command prefix for this integration"
        ),
    }


class IntegrationMetadata(_StrictModel):
    """The ``mercy-integration.json`` record."""

    id: str
    name: str
    version: str = DEFAULT_VERSION
    description: str = ""
    category: str = "utility"
    developer: DeveloperInfo
    repository: RepositoryInfo = Field(default_factory=RepositoryInfo)
    permissions: list[str] = Field(
        default_factory=lambda: ["ViewChannel", "SendMessages", "EmbedLinks"]
    )
    events: list[str] = Field(default_factory=lambda: ["messageCreate", "interactionCreate"])
    settings: dict[str, SettingSpec] = Field(default_factory=_default_settings)
    flags: IntegrationFlags = Field(default_factory=IntegrationFlags)

    def default_settings(self) -> dict[str, Any]:
        """Flatten ``settings`` into the ``{name: default}`` map the base class caches."""
        return {key: spec.default for key, spec in self.settings.items()}


class MercyPackageInfo(_StrictModel):
    integration_id: str = Field(alias="integrationId")
    version: str = DEFAULT_VERSION


class PackageManifest(_StrictModel):
    """The ``manifest.json`` record."""

    name: str
    version: str = DEFAULT_VERSION
    description: str = ""
    main: str = SOURCE_FILE
    type: str = MODULE_TYPE
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] = Field(default_factory=dict)
    author: str = ""
    license: str = "MIT"
    mercy: MercyPackageInfo


class IntegrationAnswers(_StrictModel):
    """Answers collected by the ``mercy init`` prompts."""

    name: str
    id: str = ""
    description: str = ""
    category: str = ""
    developer_name: str = ""
    developer_email: str = ""
    github_url: str = ""

    @field_validator(
        "name",
        "id",
        "description",
        "category",
        "developer_name",
        "developer_email",
        "github_url",
    )
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()
