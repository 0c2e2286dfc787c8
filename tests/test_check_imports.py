"""Tests for the optional-dependency import guard in scripts/check_imports.py."""

from __future__ import annotations

import importlib.util
from pathlib import Path

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "check_imports.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("check_imports", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_package_is_clean():
    assert _load_script().check() == []


def test_flags_eager_and_misplaced_imports(tmp_path: Path):
    (tmp_path / "integration").mkdir()
    (tmp_path / "integration" / "embeds.py").write_text("import discord\n")
    (tmp_path / "base.py").write_text(
        "def f():\n    from discord.ext import commands\n    return commands\n"
    )
    (tmp_path / "ok.py").write_text("import json\nimport discordant\n")
    violations = _load_script().check(tmp_path)
    assert violations == [
        "base.py:2: import discord.ext",
        "integration/embeds.py:1: module-level import discord",
    ]
