"""Result types produced by ``validate_integration``."""

from __future__ import annotations

from dataclasses import dataclass, field

from mercy_kit.policy.models import Severity

STARTING_SCORE = 100


@dataclass
class RuleHit:
    """A security rule that matched the integration source at least once."""

    severity: Severity
    message: str
    count: int


@dataclass
class IntegrationValidationResult:
    """Outcome of one validator run.

    ``score`` starts at 100 and is only ever decremented; it is not floored,
    so a badly broken integration can score below zero.  ``is_valid`` is
    meaningful only after :meth:`finalize`.
    """

    directory: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    score: int = STARTING_SCORE
    is_valid: bool = False
    files: dict[str, bool] = field(default_factory=dict)
    rule_hits: list[RuleHit] = field(default_factory=list)
    complexity: int | None = None
    notes: list[str] = field(default_factory=list)

    def add_error(self, message: str, penalty: int) -> None:
        self.errors.append(message)
        self.score -= penalty

    def add_warning(self, message: str, penalty: int) -> None:
        self.warnings.append(message)
        self.score -= penalty

    def missing(self, path: str) -> bool:
        """True when *path* was a required file reported missing."""
        return self.files.get(path) is False
