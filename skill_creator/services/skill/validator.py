"""
Validation utilities for skill manifests.
"""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

# Constants for validation
SKILL_MANIFEST = "SKILL.md"
FRONTMATTER_DELIMITER = "---"
MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024
REQUIRED_PROPERTIES: tuple[str, ...] = ("name", "description")
ALLOWED_PROPERTIES: set[str] = {
    "name",
    "description",
    "license",
    "allowed-tools",
    "metadata",
}

FRONTMATTER_PATTERN = re.compile(r"^---\r?\n(.*?)\r?\n---", re.DOTALL)
KEY_LINE_PATTERN = re.compile(r"^([a-z][a-z0-9-]*):\s*(.*)$")
NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")


def parse_frontmatter(frontmatter_text: str) -> dict[str, str]:
    """
    Parse the restricted ``key: value`` frontmatter grammar.

    A key line starts a new value; any other non-blank line is appended to
    the current value. Fragments are trimmed and joined with a single space.
    Lines before the first key are ignored. This is deliberately not YAML.
    """
    frontmatter: dict[str, str] = {}
    current_key: str | None = None
    current_value: list[str] = []

    for line in frontmatter_text.split("\n"):
        line = line.rstrip("\r")

        key_match = KEY_LINE_PATTERN.match(line)
        if key_match:
            if current_key is not None:
                frontmatter[current_key] = " ".join(current_value).strip()

            current_key = key_match.group(1)
            current_value = [key_match.group(2).strip()]
        elif current_key is not None and line.strip():
            current_value.append(line.strip())

    if current_key is not None:
        frontmatter[current_key] = " ".join(current_value).strip()

    return frontmatter


def _check_manifest_exists(manifest_file: Path) -> tuple[bool, str]:
    """Check if SKILL.md exists."""
    if not manifest_file.is_file():
        return False, f"{SKILL_MANIFEST} not found"
    return True, ""


def _extract_frontmatter(content: str) -> tuple[bool, str]:
    """Locate the delimited frontmatter block, returning its text on success."""
    if not content.startswith(FRONTMATTER_DELIMITER):
        return False, "No YAML frontmatter found"

    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return False, "Invalid frontmatter format"
    return True, match.group(1)


def _check_allowed_properties(frontmatter: dict[str, str]) -> tuple[bool, str]:
    """Check that every key belongs to the allowed set."""
    unexpected_keys = set(frontmatter) - ALLOWED_PROPERTIES
    if unexpected_keys:
        return False, (
            f"Unexpected key(s) in {SKILL_MANIFEST} frontmatter: {', '.join(sorted(unexpected_keys))}. "
            f"Allowed properties are: {', '.join(sorted(ALLOWED_PROPERTIES))}"
        )
    return True, ""


def _check_required_properties(frontmatter: dict[str, str]) -> tuple[bool, str]:
    """Check that name and description are present."""
    for key in REQUIRED_PROPERTIES:
        if key not in frontmatter:
            return False, f"Missing '{key}' in frontmatter"
    return True, ""


def _check_name(name: str) -> tuple[bool, str]:
    """Check that the name is hyphen-case and short enough."""
    if not NAME_PATTERN.match(name):
        return False, f"Name '{name}' should be hyphen-case (lowercase letters, digits, and hyphens only)"
    if name.startswith("-") or name.endswith("-") or "--" in name:
        return False, f"Name '{name}' cannot start/end with hyphen or contain consecutive hyphens"
    if len(name) > MAX_NAME_LENGTH:
        return False, f"Name is too long ({len(name)} characters). Maximum is {MAX_NAME_LENGTH} characters."
    return True, ""


def _check_description(description: str) -> tuple[bool, str]:
    """Check the description for angle brackets and length."""
    if "<" in description or ">" in description:
        return False, "Description cannot contain angle brackets (< or >)"
    if len(description) > MAX_DESCRIPTION_LENGTH:
        return False, (
            f"Description is too long ({len(description)} characters). "
            f"Maximum is {MAX_DESCRIPTION_LENGTH} characters."
        )
    return True, ""


def validate_skill(skill_path: str | Path) -> tuple[bool, str]:
    """
    Validate the SKILL.md manifest of a skill directory.

    Checks run in a fixed order and the first failure is returned.

    Args:
        skill_path: Path to the skill directory

    Returns:
        tuple of (is_valid, message)
    """
    manifest_file = Path(skill_path) / SKILL_MANIFEST

    is_valid, message = _check_manifest_exists(manifest_file)
    if not is_valid:
        return False, message

    try:
        # utf-8-sig drops a leading byte order mark
        content = manifest_file.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {manifest_file}", exc_info=True)
        return False, f"Error reading {SKILL_MANIFEST}: {str(e)}"

    is_valid, frontmatter_text = _extract_frontmatter(content)
    if not is_valid:
        return False, frontmatter_text

    frontmatter = parse_frontmatter(frontmatter_text)
    logger.debug(f"Parsed frontmatter keys for {skill_path}: {sorted(frontmatter)}")

    is_valid, message = _check_allowed_properties(frontmatter)
    if not is_valid:
        return False, message

    is_valid, message = _check_required_properties(frontmatter)
    if not is_valid:
        return False, message

    name = frontmatter["name"].strip()
    if name:
        is_valid, message = _check_name(name)
        if not is_valid:
            return False, message

    description = frontmatter["description"].strip()
    if description:
        is_valid, message = _check_description(description)
        if not is_valid:
            return False, message

    return True, "Skill is valid!"
