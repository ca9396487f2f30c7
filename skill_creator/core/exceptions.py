"""
Errors raised while initializing or packaging a skill.

Each error carries a stable ``code`` so callers can tell failures apart
without parsing the message.
"""


class SkillError(Exception):
    """Base class for skill tooling failures."""

    code = "SKILL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SkillAlreadyExistsError(SkillError):
    code = "ALREADY_EXISTS"


class SkillInitializationError(SkillError):
    code = "INITIALIZATION_ERROR"


class SkillNotFoundError(SkillError):
    code = "SKILL_NOT_FOUND"


class MissingManifestError(SkillError):
    code = "MISSING_MANIFEST"


class SkillValidationError(SkillError):
    code = "VALIDATION_FAILED"


class PackagingError(SkillError):
    code = "PACKAGING_ERROR"
