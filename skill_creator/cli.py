"""
Command-line entry points.

Each tool is its own single-command typer application so it can be exposed
as a standalone console script; ``skill-creator`` groups all three.
"""

import logging
from typing import Annotated

import click
import sentry_sdk
import typer
from pydantic import ValidationError
from typer.core import TyperCommand

from skill_creator.core.config import ENV_PREFIX, Settings, get_settings
from skill_creator.core.response import build_validation_response, send_response
from skill_creator.services.skill import init_skill, package_skill, validate_skill

logger = logging.getLogger(__name__)

# Argument shape is checked by the commands so usage errors exit with 1
CONTEXT_SETTINGS = {"allow_extra_args": True, "ignore_unknown_options": True}

INIT_USAGE = """Usage: init-skill <skill-name> --path <path>

Skill name requirements:
  - Hyphen-case identifier (e.g., 'data-analyzer')
  - Lowercase letters, digits, and hyphens only
  - Max 64 characters
  - Must match directory name exactly

Examples:
  init-skill my-new-skill --path skills/public
  init-skill my-api-helper --path skills/private
  init-skill custom-skill --path /custom/location"""

PACKAGE_USAGE = """Usage: package-skill <path/to/skill-folder> [output-directory]

Example:
  package-skill skills/public/my-skill
  package-skill skills/public/my-skill ./dist"""

VALIDATE_USAGE = "Usage: quick-validate <skill_directory>"


class UsageErrorCommand(TyperCommand):
    """
    Command that answers arguments click cannot parse with its own usage text.

    A missing option value or a value given to a flag exits with 1, the same
    as every usage error the command body detects.
    """

    usage_text = ""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError:
            typer.echo(self.usage_text)
            raise typer.Exit(code=1) from None


class InitSkillCommand(UsageErrorCommand):
    usage_text = INIT_USAGE


class PackageSkillCommand(UsageErrorCommand):
    usage_text = PACKAGE_USAGE


class QuickValidateCommand(UsageErrorCommand):
    usage_text = VALIDATE_USAGE


def _load_settings() -> Settings:
    """Return the settings, exiting with 1 when the environment holds invalid values."""
    try:
        return get_settings()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            typer.echo(f"❌ Invalid configuration: {ENV_PREFIX}{field}: {error['msg']}")
        raise typer.Exit(code=1) from None


def _init_error_reporting() -> None:
    """Send unexpected errors to Sentry when a DSN is configured."""
    settings = _load_settings()
    if not settings.SENTRY_DSN:
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        release=f"skill-creator@{settings.VERSION}",
        traces_sample_rate=1.0,
    )


def _usage_error(usage: str) -> typer.Exit:
    typer.echo(usage)
    return typer.Exit(code=1)


def init_skill_command(
    ctx: typer.Context,
    skill_name: Annotated[str | None, typer.Argument(help="Hyphen-case name of the new skill")] = None,
    path: Annotated[str | None, typer.Option("--path", help="Directory to create the skill in")] = None,
) -> None:
    """Create a new skill directory from the bundled template."""
    if not skill_name or not path or ctx.args:
        raise _usage_error(INIT_USAGE)

    _init_error_reporting()

    typer.echo(f"🚀 Initializing skill: {skill_name}")
    typer.echo(f"   Location: {path}")
    typer.echo()

    result = init_skill(skill_name, path)
    raise typer.Exit(code=0 if result else 1)


def package_skill_command(
    skill_folder: Annotated[str | None, typer.Argument(help="Path to the skill folder")] = None,
    output_directory: Annotated[str | None, typer.Argument(help="Where to write the .skill file")] = None,
) -> None:
    """Validate a skill and package it into a distributable .skill file."""
    if not skill_folder:
        raise _usage_error(PACKAGE_USAGE)

    _init_error_reporting()

    typer.echo(f"📦 Packaging skill: {skill_folder}")
    if output_directory:
        typer.echo(f"   Output directory: {output_directory}")
    typer.echo()

    result = package_skill(skill_folder, output_directory)
    raise typer.Exit(code=0 if result else 1)


def quick_validate_command(
    ctx: typer.Context,
    skill_directory: Annotated[str | None, typer.Argument(help="Path to the skill directory")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print the result as a JSON line")] = False,
) -> None:
    """Validate the SKILL.md frontmatter of a skill directory."""
    if not skill_directory or ctx.args:
        raise _usage_error(VALIDATE_USAGE)

    _init_error_reporting()

    is_valid, message = validate_skill(skill_directory)
    logger.debug(f"Validation of {skill_directory} finished: {is_valid}")

    if json_output:
        typer.echo(send_response(build_validation_response(skill_directory, is_valid, message)))
    else:
        typer.echo(message)

    raise typer.Exit(code=0 if is_valid else 1)


def _version_callback(value: bool) -> None:
    if value:
        settings = _load_settings()
        typer.echo(f"{settings.PROJECT_NAME} {settings.VERSION}")
        raise typer.Exit()


init_app = typer.Typer(add_completion=False)
init_app.command(cls=InitSkillCommand, context_settings=CONTEXT_SETTINGS)(init_skill_command)

package_app = typer.Typer(add_completion=False)
package_app.command(cls=PackageSkillCommand, context_settings=CONTEXT_SETTINGS)(package_skill_command)

validate_app = typer.Typer(add_completion=False)
validate_app.command(cls=QuickValidateCommand, context_settings=CONTEXT_SETTINGS)(quick_validate_command)

app = typer.Typer(add_completion=False, no_args_is_help=True)
app.command("init", cls=InitSkillCommand, context_settings=CONTEXT_SETTINGS)(init_skill_command)
app.command("package", cls=PackageSkillCommand, context_settings=CONTEXT_SETTINGS)(package_skill_command)
app.command("validate", cls=QuickValidateCommand, context_settings=CONTEXT_SETTINGS)(quick_validate_command)


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit")
    ] = False,
) -> None:
    """Scaffold, validate and package skill bundles."""


if __name__ == "__main__":
    app()
