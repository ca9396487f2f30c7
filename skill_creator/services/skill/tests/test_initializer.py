"""
Tests for the skill initializer.
"""

import os
from collections.abc import Generator
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from pytest_mock import MockerFixture

from skill_creator.services.skill.initializer import (
    EXECUTABLE_MODE,
    init_skill,
    render_template,
    title_case_skill_name,
)
from skill_creator.services.skill.validator import validate_skill

TEST_SKILL = "my-tool"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Creates a temporary directory for testing."""
    with TemporaryDirectory() as temp_dir_path:
        yield Path(temp_dir_path)


@pytest.fixture
def output_lines() -> list[str]:
    """Collects progress lines instead of printing them."""
    return []


class TestTitleCaseSkillName:
    """Tests for the title_case_skill_name function."""

    @pytest.mark.parametrize(
        ("skill_name", "expected"),
        [
            ("my-tool", "My Tool"),
            ("pdf", "Pdf"),
            ("data-analyzer-v2", "Data Analyzer V2"),
            ("my--tool", "My  Tool"),
            ("-tool", " Tool"),
        ],
    )
    def test_title_case(self, skill_name: str, expected: str) -> None:
        """Test that each hyphen-separated word is capitalized."""
        assert title_case_skill_name(skill_name) == expected


class TestRenderTemplate:
    """Tests for the render_template function."""

    def test_skill_manifest_template(self) -> None:
        """Test that both placeholders are substituted."""
        content = render_template("SKILL.md.template", skill_name=TEST_SKILL, skill_title="My Tool")
        assert content.startswith("---\nname: my-tool\ndescription: ")
        assert "\n# My Tool\n" in content
        assert "{skill_name}" not in content
        assert "{skill_title}" not in content

    def test_script_template(self) -> None:
        """Test the example script template."""
        content = render_template("example_script.py.template", skill_name=TEST_SKILL)
        assert content.startswith("#!/usr/bin/env python3")
        assert 'print("This is an example script for my-tool")' in content

    def test_template_without_placeholders(self) -> None:
        """Test rendering a template that has nothing to substitute."""
        content = render_template("example_asset.txt.template")
        assert content.startswith("# Example Asset File")

    def test_literal_braces_are_kept(self, mocker: MockerFixture, temp_dir: Path) -> None:
        """Test that braces other than the placeholders survive rendering."""
        (temp_dir / "braces.template").write_text('data = {"key": "{skill_name}"}\n', encoding="utf-8")
        mocker.patch("skill_creator.services.skill.initializer.TEMPLATES_DIR", temp_dir)

        content = render_template("braces.template", skill_name=TEST_SKILL)
        assert content == 'data = {"key": "my-tool"}\n'


class TestInitSkill:
    """Tests for the main init_skill function."""

    def test_successful_initialization(self, temp_dir: Path, output_lines: list[str]) -> None:
        """Test that the skill directory and all example files are created."""
        result = init_skill(TEST_SKILL, temp_dir, echo=output_lines.append)

        skill_dir = temp_dir / TEST_SKILL
        assert result == skill_dir
        assert result.is_absolute()

        manifest = (skill_dir / "SKILL.md").read_text(encoding="utf-8")
        assert "name: my-tool" in manifest
        assert "# My Tool" in manifest

        assert (skill_dir / "scripts" / "example.py").is_file()
        assert (skill_dir / "references" / "api_reference.md").is_file()
        assert (skill_dir / "assets" / "example_asset.txt").is_file()

        reference = (skill_dir / "references" / "api_reference.md").read_text(encoding="utf-8")
        assert reference.startswith("# Reference Documentation for My Tool")

    def test_example_script_is_executable(self, temp_dir: Path, output_lines: list[str]) -> None:
        """Test that the example script gets the executable mode."""
        init_skill(TEST_SKILL, temp_dir, echo=output_lines.append)

        script_path = temp_dir / TEST_SKILL / "scripts" / "example.py"
        assert os.stat(script_path).st_mode & 0o777 == EXECUTABLE_MODE

    def test_progress_output(self, temp_dir: Path, output_lines: list[str]) -> None:
        """Test the progress line printed for each created artifact."""
        init_skill(TEST_SKILL, temp_dir, echo=output_lines.append)

        skill_dir = temp_dir / TEST_SKILL
        assert output_lines[:5] == [
            f"✅ Created skill directory: {skill_dir}",
            "✅ Created SKILL.md",
            "✅ Created scripts/example.py",
            "✅ Created references/api_reference.md",
            "✅ Created assets/example_asset.txt",
        ]
        assert output_lines[5] == f"\n✅ Skill 'my-tool' initialized successfully at {skill_dir}"
        assert "\nNext steps:" in output_lines

    def test_creates_missing_parent_directories(self, temp_dir: Path, output_lines: list[str]) -> None:
        """Test a target path that does not exist yet."""
        result = init_skill(TEST_SKILL, temp_dir / "skills" / "public", echo=output_lines.append)
        assert result == temp_dir / "skills" / "public" / TEST_SKILL
        assert (result / "SKILL.md").is_file()

    def test_relative_path(self, temp_dir: Path, output_lines: list[str], monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a relative target path is resolved against the working directory."""
        monkeypatch.chdir(temp_dir)

        result = init_skill(TEST_SKILL, "skills", echo=output_lines.append)
        assert result == Path.cwd() / "skills" / TEST_SKILL
        assert (result / "SKILL.md").is_file()

    def test_already_exists(self, temp_dir: Path, output_lines: list[str]) -> None:
        """Test that an existing skill directory is never overwritten."""
        skill_dir = temp_dir / TEST_SKILL
        skill_dir.mkdir()
        (skill_dir / "keep.txt").write_text("untouched")

        result = init_skill(TEST_SKILL, temp_dir, echo=output_lines.append)

        assert result is None
        assert output_lines == [f"❌ Error: Skill directory already exists: {skill_dir}"]
        assert not (skill_dir / "SKILL.md").exists()
        assert (skill_dir / "keep.txt").read_text() == "untouched"

    def test_directory_creation_failure(self, temp_dir: Path, output_lines: list[str], mocker: MockerFixture) -> None:
        """Test a failure while creating the skill directory."""
        mocker.patch.object(Path, "mkdir", side_effect=PermissionError("Permission denied"))

        result = init_skill(TEST_SKILL, temp_dir, echo=output_lines.append)

        assert result is None
        assert output_lines == ["❌ Error creating directory: Permission denied"]

    def test_manifest_write_failure_keeps_directory(
        self, temp_dir: Path, output_lines: list[str], mocker: MockerFixture
    ) -> None:
        """Test that a failed SKILL.md write leaves the created directory in place."""
        mocker.patch(
            "skill_creator.services.skill.initializer._write_file", side_effect=OSError("No space left on device")
        )

        result = init_skill(TEST_SKILL, temp_dir, echo=output_lines.append)

        assert result is None
        assert output_lines[-1] == "❌ Error creating SKILL.md: No space left on device"
        assert (temp_dir / TEST_SKILL).is_dir()

    def test_resource_failure_keeps_partial_skill(
        self, temp_dir: Path, output_lines: list[str], mocker: MockerFixture
    ) -> None:
        """Test a failure while writing the example resources."""
        mocker.patch(
            "skill_creator.services.skill.initializer.render_template",
            side_effect=["---\nname: my-tool\n---\n", "script", OSError("Read-only file system")],
        )

        result = init_skill(TEST_SKILL, temp_dir, echo=output_lines.append)

        skill_dir = temp_dir / TEST_SKILL
        assert result is None
        assert output_lines[-1] == "❌ Error creating resource directories: Read-only file system"
        assert (skill_dir / "SKILL.md").is_file()
        assert (skill_dir / "scripts" / "example.py").is_file()
        assert not (skill_dir / "assets").exists()

    @pytest.mark.parametrize("skill_name", ["my-tool", "pdf", "a1-b2", "x" * 64])
    def test_initialized_skill_is_valid(self, skill_name: str, temp_dir: Path, output_lines: list[str]) -> None:
        """Test that a freshly initialized skill passes validation."""
        skill_dir = init_skill(skill_name, temp_dir, echo=output_lines.append)

        assert skill_dir is not None
        assert validate_skill(skill_dir) == (True, "Skill is valid!")
