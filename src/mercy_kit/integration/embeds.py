"""Discord embed construction.

discord.py is an optional extra (``pip install mercy-integration-kit[discord]``)
and is imported only when an embed is actually built.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

BRAND_COLOR = 0x6366F1
STATS_COLOR = 0x10B981
WELCOME_COLOR = 0x00FF00


def build_embed(
    title: str,
    *,
    description: str | None = None,
    color: int = BRAND_COLOR,
    fields: list[tuple[str, str, bool]] | None = None,
    footer: str | None = None,
    thumbnail_url: str | None = None,
) -> Any:
    """Return a timestamped ``discord.Embed``; *fields* are ``(name, value, inline)``."""
    import discord

    embed = discord.Embed(
        title=title,
        description=description,
        color=color,
        timestamp=datetime.now(timezone.utc),
    )
    for name, value, inline in fields or []:
        embed.add_field(name=name, value=value, inline=inline)
    if footer:
        embed.set_footer(text=footer)
    if thumbnail_url:
        embed.set_thumbnail(url=thumbnail_url)
    return embed
