"""Integration base class and the host capability contract."""

from mercy_kit.integration.base import IntegrationBase
from mercy_kit.integration.host import (
    HOST_CAPABILITIES,
    OPTIONAL_CAPABILITIES,
    REQUIRED_CAPABILITIES,
    HostServices,
    OptionalHostServices,
    missing_capabilities,
)
from mercy_kit.integration.testing import InMemoryHost

__all__ = [
    "HOST_CAPABILITIES",
    "OPTIONAL_CAPABILITIES",
    "REQUIRED_CAPABILITIES",
    "HostServices",
    "InMemoryHost",
    "IntegrationBase",
    "OptionalHostServices",
    "missing_capabilities",
]
