"""Base class every M.E.R.C.Y integration extends.

The host runtime instantiates the integration class exported by
``src/integration.py`` (``__integration__ = MyIntegration``), attaches its
services with :meth:`IntegrationBase.attach_host`, injects the Discord client
and guild, then drives the coroutine hooks one event at a time::

    integration = MyIntegration({"name": "Cool Bot", "default_settings": {...}})
    integration.attach_host(host, client=bot, guild=guild)
    await integration.on_load()
    await integration.on_message(message)

Subclasses override :meth:`initialize`, :meth:`cleanup` and whichever event
hooks they need, usually calling ``super()`` first so the counters and
settings cache stay current.
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from mercy_kit.errors import HostCapabilityError
from mercy_kit.integration.embeds import STATS_COLOR, WELCOME_COLOR, build_embed
from mercy_kit.integration.host import HostServices, missing_capabilities

logger = logging.getLogger(__name__)

STATS_COMMAND = "integration-stats"
DEFAULT_WELCOME_MESSAGE = "Welcome to the server!"

# discord.py ComponentType values carried in interaction.data["component_type"]
_BUTTON_COMPONENT = 2
_STRING_SELECT_COMPONENT = 3


class IntegrationBase:
    """Lifecycle, event and settings shell for a host-managed integration."""

    version = "1.0.0"

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        *,
        host: HostServices | None = None,
    ) -> None:
        self.config: dict[str, Any] = dict(config or {})
        self.client: Any = None
        self.guild: Any = None
        self.settings: dict[str, Any] = {}
        self.start_time: float | None = None
        self.command_count = 0
        self.event_count = 0
        self._host: HostServices | None = None
        if host is not None:
            self.attach_host(host)

    @property
    def display_name(self) -> str:
        return self.config.get("name") or type(self).__name__

    def attach_host(
        self, host: HostServices, *, client: Any = None, guild: Any = None
    ) -> None:
        """Bind host services; raises HostCapabilityError if a required one is absent."""
        missing = missing_capabilities(host)
        if missing:
            raise HostCapabilityError(
                ", ".join(missing), "host does not implement the required members"
            )
        self._host = host
        if client is not None:
            self.client = client
        if guild is not None:
            self.guild = guild

    # ── lifecycle ─────────────────────────────────────────────────

    async def on_load(self) -> bool:
        """Called when the integration is loaded and activated."""
        logger.info("[%s] Integration loaded successfully", self.display_name)
        await self.load_settings()
        await self.initialize()
        return True

    async def on_unload(self) -> bool:
        """Called when the integration is unloaded or disabled."""
        logger.info("[%s] Integration unloaded", self.display_name)
        await self.cleanup()
        return True

    async def initialize(self) -> None:
        """Set up per-load state. Override with your initialization logic."""
        self.start_time = time.monotonic()
        self.command_count = 0
        self.event_count = 0

    async def cleanup(self) -> None:
        """Release per-load state. Override with your cleanup logic."""
        self.command_count = 0
        self.event_count = 0

    # ── settings ──────────────────────────────────────────────────

    async def load_settings(self) -> None:
        """Fill the cache from host storage, falling back to configured defaults."""
        try:
            saved = await self.get_stored_settings()
            if saved:
                self.settings = dict(saved)
            else:
                self.settings = dict(self.config.get("default_settings") or {})
        except Exception:  # noqa: BLE001
            logger.exception("[%s] Failed to load settings", self.display_name)
            self.settings = {}

    async def save_settings(self) -> None:
        try:
            await self.update_stored_settings(dict(self.settings))
        except Exception:  # noqa: BLE001
            logger.exception("[%s] Failed to save settings", self.display_name)

    def get_setting(self, key: str, default: Any = None) -> Any:
        value = self.settings.get(key)
        return default if value is None else value

    async def set_setting(self, key: str, value: Any) -> None:
        self.settings[key] = value
        await self.save_settings()

    # ── events ────────────────────────────────────────────────────

    async def on_message(self, message: Any) -> None:
        """Handle a new message. Bot authors are ignored; mentions get a reply."""
        self.event_count += 1
        if message.author.bot:
            return
        if self.client is not None and self.client.user in message.mentions:
            await self.handle_mention(message)

    async def on_member_join(self, member: Any) -> None:
        """Post the configured welcome message, if a welcome channel is set."""
        self.event_count += 1
        welcome_channel = self.get_setting("welcomeChannel")
        welcome_message = self.get_setting("welcomeMessage") or DEFAULT_WELCOME_MESSAGE
        if not welcome_channel or self.guild is None:
            return
        try:
            channel_id = int(welcome_channel)
        except (TypeError, ValueError):
            logger.warning(
                "[%s] welcomeChannel setting is not a channel id: %r",
                self.display_name,
                welcome_channel,
            )
            return
        channel = self.guild.get_channel(channel_id)
        if channel is None:
            return
        await channel.send(
            content=welcome_message.replace("{user}", member.mention),
            embed=self.create_welcome_embed(member),
        )

    async def on_member_leave(self, member: Any) -> None:
        self.event_count += 1
        logger.info("[%s] Member left: %s", self.display_name, member)

    async def on_moderation_action(self, action: Any) -> None:
        self.event_count += 1
        logger.info(
            "[%s] Moderation action: %s by %s on %s",
            self.display_name,
            getattr(action, "type", "unknown"),
            getattr(action, "moderator", "unknown"),
            getattr(action, "target", "unknown"),
        )

    async def on_interaction(self, interaction: Any) -> None:
        """Dispatch slash commands, buttons and select menus to their handlers."""
        self.command_count += 1
        kind = getattr(interaction.type, "name", str(interaction.type))
        data = interaction.data or {}
        if kind == "application_command":
            await self.handle_slash_command(interaction)
        elif kind == "component":
            component_type = data.get("component_type")
            if component_type == _BUTTON_COMPONENT:
                await self.handle_button(interaction)
            elif component_type == _STRING_SELECT_COMPONENT:
                await self.handle_select_menu(interaction)

    async def handle_slash_command(self, interaction: Any) -> None:
        """Override to implement custom commands."""
        if (interaction.data or {}).get("name") == STATS_COMMAND:
            await self.send_stats(interaction)

    async def handle_button(self, interaction: Any) -> None:
        """Override to implement button responses."""
        custom_id = (interaction.data or {}).get("custom_id")
        logger.info("[%s] Button pressed: %s", self.display_name, custom_id)
        await interaction.response.send_message(content="Button handled!", ephemeral=True)

    async def handle_select_menu(self, interaction: Any) -> None:
        """Override to implement select menu responses."""
        data = interaction.data or {}
        logger.info(
            "[%s] Select menu: %s, values: %s",
            self.display_name,
            data.get("custom_id"),
            data.get("values", []),
        )
        await interaction.response.send_message(content="Selection processed!", ephemeral=True)

    async def handle_mention(self, message: Any) -> None:
        embed = build_embed(
            f"{self.display_name} Integration",
            description="This is an example response from a M.E.R.C.Y integration!",
            fields=[
                ("Version", self.version, True),
                ("Uptime", self.get_uptime(), True),
                ("Events Processed", str(self.event_count), True),
            ],
        )
        await message.reply(embed=embed)

    async def send_stats(self, interaction: Any) -> None:
        embed = build_embed(
            f"📊 {self.display_name} Statistics",
            color=STATS_COLOR,
            fields=[
                ("Commands Executed", str(self.command_count), True),
                ("Events Processed", str(self.event_count), True),
                ("Uptime", self.get_uptime(), True),
            ],
            footer="M.E.R.C.Y Integration Statistics",
        )
        await interaction.response.send_message(embed=embed, ephemeral=True)

    def create_welcome_embed(self, member: Any) -> Any:
        guild_name = getattr(self.guild, "name", "the server")
        member_count = getattr(self.guild, "member_count", None)
        created_at: datetime = member.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return build_embed(
            "Welcome!",
            description=f"Welcome to {guild_name}, {member}!",
            color=WELCOME_COLOR,
            fields=[
                ("Member #", str(member_count), True),
                ("Account Created", f"<t:{int(created_at.timestamp())}:R>", True),
            ],
            thumbnail_url=str(member.display_avatar.url),
        )

    # ── helpers ───────────────────────────────────────────────────

    def get_uptime(self) -> str:
        """Time since :meth:`initialize` as ``"<hours>h <minutes>m"``."""
        if self.start_time is None:
            return "0h 0m"
        elapsed = int(time.monotonic() - self.start_time)
        hours, remainder = divmod(elapsed, 3600)
        return f"{hours}h {remainder // 60}m"

    async def log_event(self, event: str, data: Mapping[str, Any] | None = None) -> None:
        try:
            await self.create_log_entry(
                {
                    "integration": self.display_name,
                    "event": event,
                    "data": dict(data or {}),
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "guild": getattr(self.guild, "id", None),
                }
            )
        except Exception:  # noqa: BLE001
            logger.exception("[%s] Failed to log event", self.display_name)

    # ── host capabilities ─────────────────────────────────────────
    # Provided by the M.E.R.C.Y runtime through attach_host(); a host may also
    # assign replacements directly on the instance.

    async def _call_host(self, name: str, *args: Any) -> Any:
        method = getattr(self._host, name, None) if self._host is not None else None
        if not callable(method):
            raise HostCapabilityError(name)
        result = method(*args)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def get_stored_settings(self) -> Mapping[str, Any] | None:
        return await self._call_host("get_stored_settings")

    async def update_stored_settings(self, settings: Mapping[str, Any]) -> None:
        await self._call_host("update_stored_settings", settings)

    async def create_log_entry(self, entry: Mapping[str, Any]) -> None:
        await self._call_host("create_log_entry", entry)

    async def send_webhook(self, webhook_url: str, data: Mapping[str, Any]) -> Any:
        return await self._call_host("send_webhook", webhook_url, data)

    async def get_server_config(self) -> Mapping[str, Any]:
        return await self._call_host("get_server_config")

    async def check_permissions(self, user_id: str, permissions: list[str]) -> bool:
        return await self._call_host("check_permissions", user_id, permissions)
