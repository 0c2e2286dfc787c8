"""Kit configuration read from ``MERCY_*`` environment variables.

The CLI takes no flags, so everything tunable lives here::

    MERCY_POLICY_FILE=./strict.yaml MERCY_REPORT_FORMAT=json mercy validate
    MERCY_CODE_STYLE=template mercy init
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class CodeStyle(str, Enum):
    """How ``mercy init`` produces ``src/integration.py``."""

    SUBCLASS = "subclass"
    TEMPLATE = "template"


class ReportFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _choice(enum_cls: type[Enum], env_var: str, default: Enum) -> Enum:
    raw = os.environ.get(env_var, "").strip().lower()
    if not raw:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(
            f"Unknown {env_var} value '{raw}'. Use one of: {allowed}."
        ) from None


@dataclass
class KitConfig:
    """Runtime settings for the ``init`` and ``validate`` commands.

    Attributes:
        policy_file: YAML policy replacing the built-in rule table.  None
            means the packaged default policy.
        code_style: Which integration source variant the generator emits.
        report_format: Output format of the validation report.
        log_level: Root logging level used by the CLI.
    """

    policy_file: Path | None = None
    code_style: CodeStyle = CodeStyle.SUBCLASS
    report_format: ReportFormat = ReportFormat.TEXT
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> KitConfig:
        policy_file = os.environ.get("MERCY_POLICY_FILE", "").strip()
        log_level = os.environ.get("MERCY_LOG_LEVEL", "").strip().upper() or "WARNING"
        if log_level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown MERCY_LOG_LEVEL value '{log_level}'.")
        return cls(
            policy_file=Path(policy_file) if policy_file else None,
            code_style=_choice(CodeStyle, "MERCY_CODE_STYLE", CodeStyle.SUBCLASS),
            report_format=_choice(ReportFormat, "MERCY_REPORT_FORMAT", ReportFormat.TEXT),
            log_level=log_level,
        )


def configure_logging(level: str = "WARNING") -> None:
    """Route kit diagnostics to stderr; user-facing output stays on stdout."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
