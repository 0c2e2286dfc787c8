#!/usr/bin/env python3
"""CI enforcement: discord.py stays an optional extra.

Only integration/embeds.py may import ``discord``, and only inside a
function body, so ``mercy init`` and ``mercy validate`` run without it.
Exits 1 on any violation.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

OPTIONAL_MODULES = ("discord",)
ALLOWED_FILES = {Path("integration") / "embeds.py"}
SRC_DIR = Path(__file__).resolve().parent.parent / "src" / "mercy_kit"


def _imported_names(node: ast.AST) -> list[str]:
    if isinstance(node, ast.Import):
        return [alias.name for alias in node.names]
    if isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
        return [node.module]
    return []


def _is_optional(name: str) -> bool:
    return any(name == mod or name.startswith(f"{mod}.") for mod in OPTIONAL_MODULES)


def check(src_dir: Path = SRC_DIR) -> list[str]:
    violations: list[str] = []
    for py_file in sorted(src_dir.rglob("*.py")):
        rel = py_file.relative_to(src_dir)
        tree = ast.parse(py_file.read_text(encoding="utf-8"))
        # Module-level statements only; function bodies are walked separately.
        top_level = {id(node) for node in tree.body}
        for node in ast.walk(tree):
            for name in _imported_names(node):
                if not _is_optional(name):
                    continue
                if rel not in ALLOWED_FILES:
                    violations.append(f"{rel}:{node.lineno}: import {name}")
                elif id(node) in top_level:
                    violations.append(f"{rel}:{node.lineno}: module-level import {name}")
    return violations


def main() -> None:
    violations = check()
    if violations:
        print("ERROR: optional dependency imported outside its lazy-import site:")
        for v in violations:
            print(f"  {v}")
        sys.exit(1)
    print("OK: discord is only imported lazily in integration/embeds.py")


if __name__ == "__main__":
    main()
