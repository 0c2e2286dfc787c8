"""Host capability contract.

The M.E.R.C.Y runtime hands every loaded integration an object implementing
:class:`HostServices`.  Three members are required: an integration cannot
keep its settings or write its audit log without them.  The other three are
optional; integrations calling them on a host that lacks them get a
``HostCapabilityError`` at call time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

REQUIRED_CAPABILITIES = (
    "get_stored_settings",
    "update_stored_settings",
    "create_log_entry",
)
OPTIONAL_CAPABILITIES = (
    "send_webhook",
    "get_server_config",
    "check_permissions",
)
HOST_CAPABILITIES = REQUIRED_CAPABILITIES + OPTIONAL_CAPABILITIES


@runtime_checkable
class HostServices(Protocol):
    """Persistence, logging and platform services supplied by the host runtime."""

    async def get_stored_settings(self) -> Mapping[str, Any] | None:
        """Return the integration's persisted settings, or None if never saved."""
        raise NotImplementedError

    async def update_stored_settings(self, settings: Mapping[str, Any]) -> None:
        """Persist *settings*, replacing whatever was stored."""
        raise NotImplementedError

    async def create_log_entry(self, entry: Mapping[str, Any]) -> None:
        """Append *entry* to the host's integration audit log."""
        raise NotImplementedError


@runtime_checkable
class OptionalHostServices(Protocol):
    """Members a host may additionally provide."""

    async def send_webhook(self, webhook_url: str, data: Mapping[str, Any]) -> Any: ...

    async def get_server_config(self) -> Mapping[str, Any]: ...

    async def check_permissions(self, user_id: str, permissions: list[str]) -> bool: ...


def missing_capabilities(host: object, names: tuple[str, ...] = REQUIRED_CAPABILITIES) -> list[str]:
    """Names from *names* that *host* does not provide as callables."""
    return [name for name in names if not callable(getattr(host, name, None))]
