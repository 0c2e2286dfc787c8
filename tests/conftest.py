"""Test fixtures and builders for mercy_kit tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from mercy_kit.models import IntegrationAnswers

CLEAN_SOURCE = '''\
from mercy_kit.integration import IntegrationBase


class Demo(IntegrationBase):
    async def on_load(self):
        return await super().on_load()


__integration__ = Demo
'''

LONG_README = "# Demo\n\n" + "A demo integration used by the validator tests. " * 4


def make_metadata(**overrides: Any) -> dict[str, Any]:
    """A complete, valid mercy-integration.json payload."""
    data: dict[str, Any] = {
        "id": "demo-bot",
        "name": "Demo Bot",
        "version": "1.0.0",
        "description": "Demo integration",
        "category": "utility",
        "developer": {"name": "Dev", "email": "dev@example.com"},
        "permissions": ["ViewChannel"],
        "events": ["messageCreate"],
        "settings": {},
        "flags": {"premium": False, "experimental": False, "beta": False},
    }
    data.update(overrides)
    return data


def make_manifest(**overrides: Any) -> dict[str, Any]:
    """A complete, valid manifest.json payload."""
    data: dict[str, Any] = {
        "name": "demo-bot",
        "version": "1.0.0",
        "main": "src/integration.py",
        "type": "module",
        "dependencies": {"discord.py": ">=2.3.2", "aiohttp": ">=3.9.0"},
    }
    data.update(overrides)
    return data


def write_integration(
    root: Path,
    *,
    metadata: dict[str, Any] | str | None = None,
    manifest: dict[str, Any] | str | None = None,
    source: str | None = CLEAN_SOURCE,
    readme: str | None = LONG_README,
    with_tests: bool = True,
) -> Path:
    """Write an integration project; pass None to leave a file out.

    ``metadata``/``manifest`` default to the valid payloads; a string is
    written verbatim (for malformed JSON cases).
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, payload, default in (
        ("mercy-integration.json", metadata, make_metadata()),
        ("manifest.json", manifest, make_manifest()),
    ):
        if payload is None:
            payload = default
        if isinstance(payload, str):
            (root / name).write_text(payload, encoding="utf-8")
        else:
            (root / name).write_text(json.dumps(payload), encoding="utf-8")
    if source is not None:
        (root / "src").mkdir(exist_ok=True)
        (root / "src" / "integration.py").write_text(source, encoding="utf-8")
    if readme is not None:
        (root / "README.md").write_text(readme, encoding="utf-8")
    if with_tests:
        (root / "test").mkdir(exist_ok=True)
    return root


def make_answers(**overrides: Any) -> IntegrationAnswers:
    data: dict[str, Any] = {
        "name": "Cool Bot",
        "id": "",
        "description": "Keeps the server cool",
        "category": "utility",
        "developer_name": "Ada Lovelace",
        "developer_email": "ada@example.com",
        "github_url": "",
    }
    data.update(overrides)
    return IntegrationAnswers(**data)


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A valid integration project scoring 100."""
    return write_integration(tmp_path / "demo-bot")


@pytest.fixture(autouse=True)
def _clear_mercy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("MERCY_POLICY_FILE", "MERCY_CODE_STYLE", "MERCY_REPORT_FORMAT", "MERCY_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
