"""
Utilities for scaffolding new skill directories from templates.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

import typer

from skill_creator.core.exceptions import SkillAlreadyExistsError, SkillError, SkillInitializationError
from skill_creator.services.skill.validator import SKILL_MANIFEST

# Constants
TEMPLATES_DIR = Path(__file__).parent / "templates"
EXAMPLE_SCRIPT = Path("scripts") / "example.py"
EXAMPLE_REFERENCE = Path("references") / "api_reference.md"
EXAMPLE_ASSET = Path("assets") / "example_asset.txt"
EXECUTABLE_MODE = 0o755
logger = logging.getLogger(__name__)


def title_case_skill_name(skill_name: str) -> str:
    """Turn ``my-new-skill`` into ``My New Skill``."""
    return " ".join(word[:1].upper() + word[1:] for word in skill_name.split("-"))


def render_template(template_name: str, **values: str) -> str:
    """
    Render one of the bundled templates.

    Args:
        template_name: File name inside the templates directory
        **values: Placeholder values, e.g. ``skill_name="my-skill"``

    Returns:
        The rendered template contents
    """
    template_path = TEMPLATES_DIR / template_name

    with open(template_path, encoding="utf-8") as template_file:
        template_content = template_file.read()

    # Escape literal curly braces in the template by doubling them
    template_content = template_content.replace("{", "{{").replace("}", "}}")

    # Un-escape the placeholders we want to replace
    for placeholder in values:
        template_content = template_content.replace(f"{{{{{placeholder}}}}}", f"{{{placeholder}}}")

    return template_content.format(**values)


def _write_file(file_path: Path, content: str) -> None:
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(content)


def create_skill_directory(skill_dir: Path) -> None:
    """
    Create the root directory of a new skill.

    Raises:
        SkillAlreadyExistsError: If the directory is already there
        SkillInitializationError: If the directory cannot be created
    """
    if skill_dir.is_dir():
        raise SkillAlreadyExistsError(f"Error: Skill directory already exists: {skill_dir}")

    try:
        skill_dir.mkdir(parents=True)
    except OSError as e:
        raise SkillInitializationError(f"Error creating directory: {str(e)}") from e


def write_skill_manifest(skill_dir: Path, skill_name: str, skill_title: str) -> Path:
    """Render SKILL.md into the skill directory."""
    manifest_path = skill_dir / SKILL_MANIFEST

    try:
        content = render_template("SKILL.md.template", skill_name=skill_name, skill_title=skill_title)
        _write_file(manifest_path, content)
    except OSError as e:
        raise SkillInitializationError(f"Error creating {SKILL_MANIFEST}: {str(e)}") from e

    return manifest_path


def create_example_resources(
    skill_dir: Path, skill_name: str, skill_title: str, echo: Callable[[str], None] = typer.echo
) -> None:
    """
    Create scripts/, references/ and assets/ with one example file each.

    Files written before a failure are left on disk.
    """
    try:
        # Example script
        script_path = skill_dir / EXAMPLE_SCRIPT
        script_path.parent.mkdir(parents=True, exist_ok=True)
        _write_file(script_path, render_template("example_script.py.template", skill_name=skill_name))
        os.chmod(script_path, EXECUTABLE_MODE)
        echo(f"✅ Created {EXAMPLE_SCRIPT.as_posix()}")

        # Example reference doc
        reference_path = skill_dir / EXAMPLE_REFERENCE
        reference_path.parent.mkdir(parents=True, exist_ok=True)
        _write_file(reference_path, render_template("api_reference.md.template", skill_title=skill_title))
        echo(f"✅ Created {EXAMPLE_REFERENCE.as_posix()}")

        # Example asset placeholder
        asset_path = skill_dir / EXAMPLE_ASSET
        asset_path.parent.mkdir(parents=True, exist_ok=True)
        _write_file(asset_path, render_template("example_asset.txt.template"))
        echo(f"✅ Created {EXAMPLE_ASSET.as_posix()}")
    except OSError as e:
        raise SkillInitializationError(f"Error creating resource directories: {str(e)}") from e


def init_skill(skill_name: str, path: str | Path, echo: Callable[[str], None] = typer.echo) -> Path | None:
    """
    Create a new skill directory from the bundled templates.

    The skill name is not validated here; run the validator afterwards.

    Args:
        skill_name: Hyphen-case skill identifier, also the directory name
        path: Directory the skill is created in
        echo: Writer for progress lines

    Returns:
        Absolute path of the new skill directory, or None on failure
    """
    skill_dir = Path(os.path.abspath(Path(path) / skill_name))
    logger.info(f"Initializing skill {skill_name} at {skill_dir}")

    try:
        create_skill_directory(skill_dir)
        echo(f"✅ Created skill directory: {skill_dir}")

        skill_title = title_case_skill_name(skill_name)
        write_skill_manifest(skill_dir, skill_name, skill_title)
        echo(f"✅ Created {SKILL_MANIFEST}")

        create_example_resources(skill_dir, skill_name, skill_title, echo=echo)
    except SkillError as e:
        logger.debug(f"Failed to initialize skill {skill_name}: {e.code}", exc_info=True)
        echo(f"❌ {e.message}")
        return None

    echo(f"\n✅ Skill '{skill_name}' initialized successfully at {skill_dir}")
    echo("\nNext steps:")
    echo(f"1. Edit {SKILL_MANIFEST} to complete the TODO items and update the description")
    echo("2. Customize or delete the example files in scripts/, references/, and assets/")
    echo("3. Run the validator when ready to check the skill structure")

    return skill_dir
