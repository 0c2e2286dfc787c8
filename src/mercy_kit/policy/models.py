"""Pydantic models for the validation policy and its security rule table."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import ConfigDict, Field, PrivateAttr, field_validator

from mercy_kit.models import (
    CATEGORIES,
    MANIFEST_FILE,
    METADATA_FILE,
    MODULE_TYPE,
    README_FILE,
    SOURCE_FILE,
    _StrictModel,
)


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class SecurityRule(_StrictModel):
    """A forbidden source pattern, its severity and the message reported on a hit."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pattern: str
    severity: Severity
    message: str

    _compiled: re.Pattern[str] = PrivateAttr()

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, value: str) -> str:
        try:
            re.compile(value, re.MULTILINE)
        except re.error as exc:
            raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value

    @field_validator("message")
    @classmethod
    def normalize_message(cls, value: str) -> str:
        return value.strip()

    def model_post_init(self, __context: object) -> None:
        self._compiled = re.compile(self.pattern, re.MULTILINE)

    def count_matches(self, content: str) -> int:
        """Number of non-overlapping matches of the rule in *content*."""
        return sum(1 for _ in self._compiled.finditer(content))


class ValidationPolicy(_StrictModel):
    """Everything ``mercy validate`` checks against, loaded once per run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    required_files: tuple[str, ...] = (METADATA_FILE, MANIFEST_FILE, SOURCE_FILE, README_FILE)
    required_metadata_fields: tuple[str, ...] = (
        "id",
        "name",
        "version",
        "description",
        "category",
        "developer",
    )
    categories: tuple[str, ...] = CATEGORIES
    allowed_dependencies: tuple[str, ...] = Field(default_factory=tuple)
    module_type: str = MODULE_TYPE
    rules: tuple[SecurityRule, ...] = Field(default_factory=tuple)
