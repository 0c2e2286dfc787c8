"""Tests for integration validation phases, scoring and verdict."""

from __future__ import annotations

from pathlib import Path

from conftest import CLEAN_SOURCE, make_manifest, make_metadata, write_integration

from mercy_kit.policy.models import SecurityRule, Severity, ValidationPolicy
from mercy_kit.validation.scoring import compute_complexity
from mercy_kit.validation.validator import validate_integration

EVERY_RULE_SOURCE = CLEAN_SOURCE + '''
import subprocess
from subprocess import run
import os
key = os.environ["X"]
eval("1")
exec("x = 1")
os.system("ls")
os.spawnl(0, "ls")
open("out.txt", "w")
os.remove("a")
shutil.rmtree("b")
__import__("json")
importlib.import_module("json")
while True:
    break
for i in count():
    break
'''


class TestCleanProject:
    def test_scores_full_marks(self, project: Path):
        result = validate_integration(project)
        assert result.errors == []
        assert result.warnings == []
        assert result.score == 100
        assert result.is_valid is True

    def test_records_file_presence_and_complexity(self, project: Path):
        result = validate_integration(project)
        assert all(result.files.values())
        assert list(result.files) == [
            "mercy-integration.json",
            "manifest.json",
            "src/integration.py",
            "README.md",
        ]
        assert result.complexity == compute_complexity(CLEAN_SOURCE)
        assert result.directory == "demo-bot"

    def test_repeated_runs_are_identical(self, tmp_path: Path):
        root = write_integration(
            tmp_path / "noisy",
            metadata=make_metadata(id="Bad Id", version="1.0"),
            manifest=make_manifest(dependencies={"requests": "1", "flask": "2"}),
            source=CLEAN_SOURCE + "eval(x)\nwhile True:\n    pass\n",
            readme="short",
            with_tests=False,
        )
        first = validate_integration(root)
        second = validate_integration(root)
        assert first.errors == second.errors
        assert first.warnings == second.warnings
        assert first.score == second.score


class TestRequiredFiles:
    def test_empty_directory(self, tmp_path: Path):
        empty = tmp_path / "empty"
        empty.mkdir()
        result = validate_integration(empty)
        assert result.errors == [
            "Missing required file: mercy-integration.json",
            "Missing required file: manifest.json",
            "Missing required file: src/integration.py",
            "Missing required file: README.md",
        ]
        # 4 x 20 for the files, 5 for the missing test directory
        assert result.score == 15
        assert result.score <= 20
        assert result.is_valid is False
        assert result.warnings == ["No test directory found, consider adding tests"]
        assert result.notes == ["README.md missing or unreadable"]

    def test_missing_metadata_skips_metadata_phase(self, project: Path):
        (project / "mercy-integration.json").unlink()
        result = validate_integration(project)
        assert result.errors == ["Missing required file: mercy-integration.json"]
        assert result.score == 80

    def test_missing_source_skips_security_scan(self, project: Path):
        (project / "src" / "integration.py").unlink()
        result = validate_integration(project)
        assert result.errors == ["Missing required file: src/integration.py"]
        assert result.complexity is None
        assert result.rule_hits == []


class TestMetadata:
    def test_missing_category_costs_ten(self, tmp_path: Path):
        complete = validate_integration(write_integration(tmp_path / "a"))
        metadata = make_metadata()
        del metadata["category"]
        partial = validate_integration(write_integration(tmp_path / "b", metadata=metadata))
        assert complete.score - partial.score == 10
        assert partial.errors == ["Missing required config field: category"]

    def test_every_missing_field_is_reported(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata={"flags": {}})
        result = validate_integration(root)
        assert result.errors == [
            f"Missing required config field: {name}"
            for name in ("id", "name", "version", "description", "category", "developer")
        ]
        assert result.score == 40

    def test_blank_values_count_as_missing(self, tmp_path: Path):
        root = write_integration(
            tmp_path / "p", metadata=make_metadata(description="", name=None)
        )
        result = validate_integration(root)
        assert "Missing required config field: description" in result.errors
        assert "Missing required config field: name" in result.errors

    def test_empty_developer_object_counts_as_present(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata=make_metadata(developer={}))
        result = validate_integration(root)
        assert result.errors == []

    def test_id_with_capitals_and_punctuation_is_an_error(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata=make_metadata(id="My Integration!"))
        result = validate_integration(root)
        assert result.errors == [
            "Invalid ID format, use lowercase letters, numbers, hyphens, "
            "and underscores only"
        ]
        assert result.score == 85
        assert result.is_valid is False

    def test_slug_id_passes(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata=make_metadata(id="my-integration"))
        assert validate_integration(root).errors == []

    def test_underscore_id_passes(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata=make_metadata(id="my_integration_2"))
        assert validate_integration(root).errors == []

    def test_non_semver_version_is_a_warning(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata=make_metadata(version="1.0"))
        result = validate_integration(root)
        assert result.warnings == ["Invalid version format, use semantic versioning (x.y.z)"]
        assert result.score == 95
        assert result.is_valid is True

    def test_version_with_trailing_newline_is_rejected(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata=make_metadata(version="1.0.0\n"))
        result = validate_integration(root)
        assert len(result.warnings) == 1

    def test_unknown_category_is_a_warning(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata=make_metadata(category="games"))
        result = validate_integration(root)
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Invalid category: games. Use one of: moderation")
        assert result.score == 95

    def test_malformed_json(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata="{not json")
        result = validate_integration(root)
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Invalid mercy-integration.json:")
        assert result.score == 75

    def test_non_object_root(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", metadata="[1, 2]")
        result = validate_integration(root)
        assert result.errors == ["Invalid mercy-integration.json: root must be a JSON object"]
        assert result.score == 75


class TestManifest:
    def test_unauthorized_dependency_fails_validation(self, tmp_path: Path):
        root = write_integration(
            tmp_path / "p", manifest=make_manifest(dependencies={"request": "^1.0.0"})
        )
        result = validate_integration(root)
        assert result.errors == ["Unauthorized dependency: request"]
        assert result.score == 85
        assert result.is_valid is False

    def test_each_unauthorized_dependency_is_charged(self, tmp_path: Path):
        deps = {"requests": "1", "discord.py": "2", "flask": "3", "django": "4"}
        root = write_integration(tmp_path / "p", manifest=make_manifest(dependencies=deps))
        result = validate_integration(root)
        assert result.errors == [
            "Unauthorized dependency: requests",
            "Unauthorized dependency: flask",
            "Unauthorized dependency: django",
        ]
        assert result.score == 55

    def test_missing_fields_and_wrong_type_are_warnings(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", manifest={"dependencies": {}})
        result = validate_integration(root)
        assert result.warnings == [
            "Missing package name",
            "Missing package version",
            'Package should declare type "module"',
        ]
        assert result.score == 85
        assert result.is_valid is True

    def test_non_mapping_dependencies(self, tmp_path: Path):
        root = write_integration(
            tmp_path / "p", manifest=make_manifest(dependencies=["discord.py"])
        )
        result = validate_integration(root)
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Unauthorized dependency declaration")
        assert result.score == 85

    def test_malformed_json(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", manifest="")
        result = validate_integration(root)
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Invalid manifest.json:")
        assert result.score == 80


class TestSecurityScan:
    def test_single_eval(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", source=CLEAN_SOURCE + "value = eval(x)\n")
        result = validate_integration(root)
        assert result.errors == ["CRITICAL: Code evaluation forbidden (1 instances)"]
        assert result.score == 70
        assert result.is_valid is False

    def test_eval_without_export(self, tmp_path: Path):
        source = CLEAN_SOURCE.replace("__integration__ = Demo\n", "") + "value = eval(x)\n"
        root = write_integration(tmp_path / "p", source=source)
        result = validate_integration(root)
        assert result.errors == [
            "CRITICAL: Code evaluation forbidden (1 instances)",
            "Integration must export its class via __integration__",
        ]
        assert result.score == 45
        assert result.is_valid is False

    def test_penalty_is_per_rule_not_per_match(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", source=CLEAN_SOURCE + "eval(a)\n" * 5)
        result = validate_integration(root)
        assert result.errors == ["CRITICAL: Code evaluation forbidden (5 instances)"]
        assert result.score == 70
        assert result.rule_hits[0].count == 5

    def test_literal_eval_is_not_eval(self, tmp_path: Path):
        source = CLEAN_SOURCE + "value = ast.literal_eval(text)\n"
        result = validate_integration(write_integration(tmp_path / "p", source=source))
        assert result.rule_hits == []

    def test_high_severity_is_an_error(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", source=CLEAN_SOURCE + 'os.system("ls")\n')
        result = validate_integration(root)
        assert result.errors == ["HIGH: Process execution forbidden (1 instances)"]
        assert result.score == 80

    def test_medium_severity_is_a_warning(self, tmp_path: Path):
        root = write_integration(
            tmp_path / "p", source=CLEAN_SOURCE + "while True:\n    pass\n"
        )
        result = validate_integration(root)
        assert result.errors == []
        assert result.warnings == ["MEDIUM: Infinite loops detected (1 instances)"]
        assert result.score == 90
        assert result.is_valid is True

    def test_every_rule_can_fire_at_once(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", source=EVERY_RULE_SOURCE)
        result = validate_integration(root)
        assert len(result.rule_hits) == 15
        assert len(result.errors) == 10
        assert len(result.warnings) == 5
        assert result.score == 100 - 5 * 30 - 5 * 20 - 5 * 10
        assert result.is_valid is False

    def test_missing_load_hook_is_a_warning(self, tmp_path: Path):
        source = "class Demo:\n    pass\n\n\n__integration__ = Demo\n"
        result = validate_integration(write_integration(tmp_path / "p", source=source))
        assert result.warnings == ["Integration should implement on_load() method"]
        assert result.score == 95

    def test_high_complexity_is_a_warning(self, tmp_path: Path):
        source = CLEAN_SOURCE + "\n" * 1000
        result = validate_integration(write_integration(tmp_path / "p", source=source))
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("High code complexity:")
        assert result.score == 90

    def test_undecodable_source(self, tmp_path: Path):
        root = write_integration(tmp_path / "p")
        (root / "src" / "integration.py").write_bytes(b"\xff\xfe\xfa")
        result = validate_integration(root)
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Cannot read integration code:")
        assert result.score == 70


class TestAuxiliary:
    def test_short_readme_and_no_tests(self, tmp_path: Path):
        root = write_integration(tmp_path / "p", readme="# Hi", with_tests=False)
        result = validate_integration(root)
        assert result.warnings == [
            "README.md is very short, consider adding more documentation",
            "No test directory found, consider adding tests",
        ]
        assert result.score == 90
        assert result.is_valid is True


def test_compute_complexity_counts_lines_and_functions():
    assert compute_complexity("def a():\n    return lambda: 1\n") == 3 + 2 * 2
    assert compute_complexity("") == 1
    assert compute_complexity("undefined = 1") == 1


def test_custom_policy(tmp_path: Path):
    root = write_integration(
        tmp_path / "p",
        manifest=make_manifest(dependencies={"requests": "2"}),
        source=CLEAN_SOURCE + "print('hi')\n",
    )
    policy = ValidationPolicy(
        allowed_dependencies=("requests",),
        rules=(
            SecurityRule(pattern=r"\bprint\s*\(", severity=Severity.HIGH, message="No printing"),
        ),
    )
    result = validate_integration(root, policy)
    assert result.errors == ["HIGH: No printing (1 instances)"]
    assert result.score == 80
