"""YAML validation-policy loading."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mercy_kit.errors import PolicyError
from mercy_kit.policy.models import ValidationPolicy

logger = logging.getLogger(__name__)

BUILTIN_POLICY_PATH = Path(__file__).with_name("builtin") / "default.yaml"


def load_policy_file(path: str | Path) -> ValidationPolicy:
    """Load and validate a policy YAML file.

    Raises PolicyError when the file is unreadable, is not a mapping, or
    fails model validation (including uncompilable rule patterns).
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise PolicyError(f"Cannot read policy file {path}: {exc}") from exc
    if raw_data is None:
        raise PolicyError(f"Empty policy YAML: {path}")
    if not isinstance(raw_data, dict):
        raise PolicyError(f"Policy YAML root must be a mapping: {path}")

    data: dict[str, Any] = raw_data
    try:
        policy = ValidationPolicy.model_validate(data)
    except ValidationError as exc:
        raise PolicyError(f"Invalid policy {path}: {exc}") from exc

    logger.debug("Loaded policy %s with %d rules", path, len(policy.rules))
    return policy


@lru_cache(maxsize=1)
def load_builtin_policy() -> ValidationPolicy:
    """The packaged default policy. Parsed once per process."""
    return load_policy_file(BUILTIN_POLICY_PATH)


def resolve_policy(policy_file: str | Path | None = None) -> ValidationPolicy:
    if policy_file is None:
        return load_builtin_policy()
    return load_policy_file(policy_file)
