"""Integration project generator behind ``mercy init``.

``generate_integration`` is deterministic for a given set of answers: two
runs differ only in the directory they write to and the LICENSE year.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from pydantic import BaseModel

from mercy_kit.config import CodeStyle
from mercy_kit.errors import ScaffoldError
from mercy_kit.models import (
    DEFAULT_VERSION,
    MANIFEST_FILE,
    METADATA_FILE,
    MODULE_TYPE,
    README_FILE,
    SOURCE_FILE,
    TEST_DIR,
    DeveloperInfo,
    IntegrationAnswers,
    IntegrationMetadata,
    MercyPackageInfo,
    PackageManifest,
)
from mercy_kit.naming import default_integration_id, integration_class_name
from mercy_kit.scaffold import templates

logger = logging.getLogger(__name__)

SUBDIRECTORIES = ("src", "src/commands", "src/events", "src/utils", TEST_DIR)
TEST_STUB_FILE = f"{TEST_DIR}/test_integration.py"
LICENSE_FILE = "LICENSE"

DEFAULT_DEPENDENCIES: dict[str, str] = {
    "discord.py": ">=2.3.2",
    "aiohttp": ">=3.9.0",
    "pydash": ">=7.0.0",
    "arrow": ">=1.3.0",
    "shortuuid": ">=1.0.11",
}

DEFAULT_SCRIPTS: dict[str, str] = {
    "test": f"python -m pytest {TEST_DIR}",
    "validate": "mercy validate",
}


def resolve_answers(answers: IntegrationAnswers) -> IntegrationAnswers:
    """Fill the derived ID and the default category."""
    integration_id = answers.id or default_integration_id(answers.name)
    if not integration_id:
        raise ScaffoldError("Integration ID cannot be empty")
    if "/" in integration_id or "\\" in integration_id or integration_id in {".", ".."}:
        raise ScaffoldError(f"Integration ID '{integration_id}' is not a directory name")
    return answers.model_copy(
        update={"id": integration_id, "category": answers.category or "utility"}
    )


def build_metadata(answers: IntegrationAnswers) -> IntegrationMetadata:
    return IntegrationMetadata(
        id=answers.id,
        name=answers.name,
        version=DEFAULT_VERSION,
        description=answers.description,
        category=answers.category,
        developer=DeveloperInfo(
            name=answers.developer_name,
            email=answers.developer_email,
            github=answers.github_url or None,
        ),
    )


def build_manifest(answers: IntegrationAnswers) -> PackageManifest:
    return PackageManifest(
        name=answers.id,
        version=DEFAULT_VERSION,
        description=answers.description,
        main=SOURCE_FILE,
        type=MODULE_TYPE,
        scripts=dict(DEFAULT_SCRIPTS),
        dependencies=dict(DEFAULT_DEPENDENCIES),
        author=f"{answers.developer_name} <{answers.developer_email}>",
        license="MIT",
        mercy=MercyPackageInfo(integration_id=answers.id, version=DEFAULT_VERSION),
    )


def _docstring_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


def render_integration_source(
    answers: IntegrationAnswers, code_style: CodeStyle = CodeStyle.SUBCLASS
) -> str:
    class_name = integration_class_name(answers.name)
    if code_style is CodeStyle.TEMPLATE:
        source = templates.TEMPLATE_SOURCE_PATH.read_text(encoding="utf-8")
        source = source.replace(templates.TEMPLATE_CLASS_NAME, class_name)
        return source.replace(templates.TEMPLATE_NAME_REFERENCE, repr(answers.name))
    return templates.SUBCLASS_SOURCE.format(
        name=_docstring_text(answers.name),
        description=_docstring_text(answers.description),
        class_name=class_name,
        name_literal=repr(answers.name),
    )


def render_readme(answers: IntegrationAnswers, metadata: IntegrationMetadata) -> str:
    settings = "\n".join(
        f"- **{key}**: {spec.description}" for key, spec in metadata.settings.items()
    )
    requirements = " ".join(f'"{name}{spec}"' for name, spec in DEFAULT_DEPENDENCIES.items())
    github_line = f"- **GitHub**: {answers.github_url}" if answers.github_url else ""
    return templates.README.format(
        name=answers.name,
        description=answers.description,
        requirements=requirements,
        settings=settings,
        developer_name=answers.developer_name,
        developer_email=answers.developer_email,
        github_line=github_line,
    )


def render_license(answers: IntegrationAnswers, year: int) -> str:
    return templates.LICENSE.format(year=year, developer_name=answers.developer_name)


def render_test_stub(answers: IntegrationAnswers) -> str:
    return templates.TEST_STUB.format(
        name=_docstring_text(answers.name),
        class_name=integration_class_name(answers.name),
        name_literal=repr(answers.name),
    )


def _dump_json(model: BaseModel) -> str:
    payload = model.model_dump(by_alias=True, exclude_none=True)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def generate_integration(
    answers: IntegrationAnswers,
    parent_dir: str | Path,
    *,
    code_style: CodeStyle = CodeStyle.SUBCLASS,
    year: int | None = None,
) -> Path:
    """Write a new integration project under *parent_dir* and return its root.

    Existing files are overwritten; nothing is rolled back if a write fails
    part-way.
    """
    answers = resolve_answers(answers)
    root = Path(parent_dir).resolve() / answers.id
    metadata = build_metadata(answers)

    for sub in SUBDIRECTORIES:
        (root / sub).mkdir(parents=True, exist_ok=True)

    files = {
        MANIFEST_FILE: _dump_json(build_manifest(answers)),
        METADATA_FILE: _dump_json(metadata),
        SOURCE_FILE: render_integration_source(answers, code_style),
        README_FILE: render_readme(answers, metadata),
        TEST_STUB_FILE: render_test_stub(answers),
        LICENSE_FILE: render_license(answers, year or date.today().year),
    }
    for rel_path, content in files.items():
        (root / rel_path).write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", root / rel_path)

    logger.info("Generated integration '%s' at %s", answers.id, root)
    return root
