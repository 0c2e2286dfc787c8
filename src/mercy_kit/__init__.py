"""M.E.R.C.Y Integration Kit -- scaffold, validate and build bot integrations.

Public API::

    from mercy_kit import IntegrationBase
    from mercy_kit.scaffold import generate_integration
    from mercy_kit.validation import validate_integration, format_report
"""

from mercy_kit.integration.base import IntegrationBase

__all__ = ["IntegrationBase"]
__version__ = "0.1.0"
