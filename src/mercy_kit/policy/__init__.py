"""Validation policy: the security rule table and structural requirements."""

from mercy_kit.policy.loader import load_builtin_policy, load_policy_file, resolve_policy
from mercy_kit.policy.models import SecurityRule, Severity, ValidationPolicy

__all__ = [
    "SecurityRule",
    "Severity",
    "ValidationPolicy",
    "load_builtin_policy",
    "load_policy_file",
    "resolve_policy",
]
