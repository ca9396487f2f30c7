"""
Skill scaffolding, validation and packaging services.
"""

from skill_creator.services.skill.initializer import init_skill
from skill_creator.services.skill.packager import package_skill
from skill_creator.services.skill.validator import validate_skill

__all__ = ["init_skill", "package_skill", "validate_skill"]
