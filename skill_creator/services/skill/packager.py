"""
Utilities for packaging skills into distributable .skill archives.
"""

import logging
import os
import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path

import typer

from skill_creator.core.exceptions import (
    MissingManifestError,
    PackagingError,
    SkillError,
    SkillNotFoundError,
    SkillValidationError,
)
from skill_creator.services.skill.validator import SKILL_MANIFEST, validate_skill

# Constants
SKILL_ARCHIVE_EXTENSION = ".skill"
logger = logging.getLogger(__name__)


def iter_skill_files(skill_path: Path) -> Iterator[Path]:
    """Yield every file below the skill directory in a stable order."""
    for root, dirs, files in os.walk(skill_path):
        dirs.sort()
        root_path = Path(root)
        for file in sorted(files):
            yield root_path / file


def resolve_output_dir(output_dir: str | Path | None) -> Path:
    """Return the absolute output directory, creating it when one was given."""
    if not output_dir:
        return Path.cwd()

    output_path = Path(os.path.abspath(output_dir))
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


def check_skill_structure(skill_path: Path) -> None:
    """
    Fast pre-checks before running the validator.

    Raises:
        SkillNotFoundError: If the directory does not exist
        MissingManifestError: If SKILL.md is missing
    """
    if not skill_path.is_dir():
        raise SkillNotFoundError(f"Error: Skill folder not found: {skill_path}")

    if not (skill_path / SKILL_MANIFEST).is_file():
        raise MissingManifestError(f"Error: {SKILL_MANIFEST} not found in {skill_path}")


def create_skill_archive(skill_path: Path, archive_path: Path, echo: Callable[[str], None] = typer.echo) -> Path:
    """
    Zip a skill directory.

    Entries are stored relative to the skill directory's parent, so the
    skill directory itself is the single top-level entry. An existing archive
    at ``archive_path`` is replaced. A partially written archive is left in
    place when an error occurs.

    Args:
        skill_path: Absolute path of the skill directory
        archive_path: Absolute path of the .skill file to write
        echo: Writer for progress lines

    Returns:
        The archive path

    Raises:
        PackagingError: If reading a file or writing the archive fails
    """
    base_path = skill_path.parent

    try:
        if archive_path.exists():
            logger.debug(f"Replacing existing archive {archive_path}")
            archive_path.unlink()

        with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as zip_out:
            for file_path in iter_skill_files(skill_path):
                # The archive may be written inside the skill directory
                if file_path == archive_path:
                    continue

                arc_name = file_path.relative_to(base_path)
                zip_out.write(file_path, arcname=arc_name.as_posix())
                echo(f"  Added: {arc_name}")
    except (OSError, ValueError) as e:
        raise PackagingError(f"Error creating {SKILL_ARCHIVE_EXTENSION} file: {str(e)}") from e

    return archive_path


def package_skill(
    skill_path: str | Path, output_dir: str | Path | None = None, echo: Callable[[str], None] = typer.echo
) -> Path | None:
    """
    Validate a skill directory and package it into ``<skill-name>.skill``.

    Args:
        skill_path: Path to the skill directory
        output_dir: Where to write the archive, defaults to the current directory
        echo: Writer for progress lines

    Returns:
        Absolute path of the archive, or None on failure
    """
    skill_path = Path(os.path.abspath(skill_path))
    logger.info(f"Packaging skill at {skill_path}")

    try:
        check_skill_structure(skill_path)

        echo("🔍 Validating skill...")
        is_valid, message = validate_skill(skill_path)
        if not is_valid:
            raise SkillValidationError(f"Validation failed: {message}")
        echo(f"✅ {message}\n")

        try:
            output_path = resolve_output_dir(output_dir)
        except OSError as e:
            raise PackagingError(f"Error creating {SKILL_ARCHIVE_EXTENSION} file: {str(e)}") from e

        archive_path = output_path / f"{skill_path.name}{SKILL_ARCHIVE_EXTENSION}"
        create_skill_archive(skill_path, archive_path, echo=echo)
    except SkillValidationError as e:
        echo(f"❌ {e.message}")
        echo("   Please fix the validation errors before packaging.")
        return None
    except SkillError as e:
        logger.debug(f"Failed to package skill {skill_path}: {e.code}", exc_info=True)
        echo(f"❌ {e.message}")
        return None

    echo(f"\n✅ Successfully packaged skill to: {archive_path}")
    logger.info(f"Completed packaging of {skill_path.name}")
    return archive_path
