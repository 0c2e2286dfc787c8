"""In-memory host for integration tests and local runs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class InMemoryHost:
    """HostServices implementation that keeps everything in memory.

    Implements all six capabilities.  Webhook deliveries and log entries are
    recorded rather than sent; permissions are granted per user id.
    """

    def __init__(
        self,
        *,
        stored_settings: Mapping[str, Any] | None = None,
        server_config: Mapping[str, Any] | None = None,
        granted_permissions: Mapping[str, list[str]] | None = None,
    ) -> None:
        self.stored_settings: dict[str, Any] | None = (
            dict(stored_settings) if stored_settings is not None else None
        )
        self.server_config: dict[str, Any] = dict(server_config or {})
        self.granted_permissions: dict[str, set[str]] = {
            user_id: set(perms) for user_id, perms in (granted_permissions or {}).items()
        }
        self.log_entries: list[dict[str, Any]] = []
        self.webhooks: list[tuple[str, dict[str, Any]]] = []

    async def get_stored_settings(self) -> dict[str, Any] | None:
        return dict(self.stored_settings) if self.stored_settings is not None else None

    async def update_stored_settings(self, settings: Mapping[str, Any]) -> None:
        self.stored_settings = dict(settings)

    async def create_log_entry(self, entry: Mapping[str, Any]) -> None:
        self.log_entries.append(dict(entry))

    async def send_webhook(self, webhook_url: str, data: Mapping[str, Any]) -> None:
        self.webhooks.append((webhook_url, dict(data)))

    async def get_server_config(self) -> dict[str, Any]:
        return dict(self.server_config)

    async def check_permissions(self, user_id: str, permissions: list[str]) -> bool:
        return set(permissions) <= self.granted_permissions.get(user_id, set())
