"""CLI handler for ``mercy validate``."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from mercy_kit.config import KitConfig, ReportFormat
from mercy_kit.policy.loader import resolve_policy
from mercy_kit.validation.report import format_json, format_report
from mercy_kit.validation.validator import validate_integration

logger = logging.getLogger(__name__)


def run_validate(config: KitConfig, directory: Path | None = None) -> None:
    """Validate *directory* (default: the working directory) and exit non-zero on failure."""
    try:
        policy = resolve_policy(config.policy_file)
        result = validate_integration(directory or Path.cwd(), policy)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Validation run aborted", exc_info=exc)
        print(f"❌ Validation error: {exc}", file=sys.stderr)
        sys.exit(1)

    if config.report_format is ReportFormat.JSON:
        print(format_json(result))
    else:
        print(format_report(result))

    if not result.is_valid:
        sys.exit(1)
