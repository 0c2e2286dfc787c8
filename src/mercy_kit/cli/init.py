"""CLI handler for ``mercy init``: interactive integration generator."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

from mercy_kit.config import KitConfig
from mercy_kit.models import CATEGORIES, IntegrationAnswers
from mercy_kit.naming import default_integration_id
from mercy_kit.scaffold.generator import generate_integration

Ask = Callable[[str], str]


def prompt_answers(ask: Ask = input) -> IntegrationAnswers:
    """Ask the seven init questions, in order."""
    name = ask("Integration Name: ").strip()
    suggested_id = default_integration_id(name)
    integration_id = ask(f"Integration ID [{suggested_id}]: ").strip() or suggested_id
    description = ask("Description: ")
    category = ask(f"Category ({'/'.join(CATEGORIES)}): ")
    developer_name = ask("Your Name: ")
    developer_email = ask("Your Email: ")
    github_url = ask("Your GitHub URL (optional): ")
    return IntegrationAnswers(
        name=name,
        id=integration_id,
        description=description,
        category=category,
        developer_name=developer_name,
        developer_email=developer_email,
        github_url=github_url,
    )


def _print_summary(root: Path) -> None:
    print("✅ Integration created successfully!")
    print()
    print("📁 Project structure:")
    print(f"   {root}/")
    print("   ├── src/")
    print("   │   ├── integration.py")
    print("   │   ├── commands/")
    print("   │   ├── events/")
    print("   │   └── utils/")
    print("   ├── test/")
    print("   │   └── test_integration.py")
    print("   ├── mercy-integration.json")
    print("   ├── manifest.json")
    print("   ├── README.md")
    print("   └── LICENSE")
    print()
    print("🚀 Next steps:")
    print(f"   1. cd {root.name}")
    print("   2. Install the dependencies listed in README.md")
    print("   3. Edit src/integration.py with your logic")
    print("   4. python -m pytest test")
    print("   5. mercy validate")


def run_init(config: KitConfig, ask: Ask = input, cwd: Path | None = None) -> None:
    print("🚀 M.E.R.C.Y Integration Creator")
    print("=" * 35)
    print()

    try:
        answers = prompt_answers(ask)
        print()
        print("📝 Creating integration structure...")
        root = generate_integration(
            answers, cwd or Path.cwd(), code_style=config.code_style
        )
    except Exception as exc:  # noqa: BLE001
        print(f"❌ Error creating integration: {exc}", file=sys.stderr)
        sys.exit(1)

    _print_summary(root)
