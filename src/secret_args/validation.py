"""Semantic validation for command files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .template_parser import FormatError, count_placeholders, parse_template
from .token_engine import TOKEN_PATTERN

if TYPE_CHECKING:
    from .models import ArgumentSpec, CommandSpec
    from .types import Errors


def semantic_validate(spec: CommandSpec, strict: bool = False) -> Errors:
    """
    Perform semantic validation on a command file.

    Unlike building the command, this does not resolve any secret source,
    so it can run without access to the secrets themselves.

    Args:
        spec: The command file to validate
        strict: Whether to perform strict validation

    Returns:
        A list of validation errors, empty if valid
    """
    errors = []

    # Validate templates against their secret counts
    errors.extend(validate_templates(spec))

    # Additional strict validations
    if strict:
        errors.extend(validate_strict_rules(spec))

    return errors


def validate_templates(spec: CommandSpec) -> Errors:
    """
    Validate template syntax and placeholder counts.

    Rules:
    - Templates must parse
    - Every placeholder needs a secret
    - Secrets beyond the last placeholder are reported, since they would be ignored
    """
    errors = []

    for position, argument in enumerate(spec.arguments, start=1):
        if argument.kind != "template":
            continue

        try:
            needed = count_placeholders(parse_template(argument.template))
        except FormatError as e:
            errors.append(f"Argument {position}: invalid template '{argument.template}': {e}")
            continue

        given = len(argument.secrets)
        if given < needed:
            errors.append(
                f"Argument {position}: template '{argument.template}' needs {needed} "
                f"secret(s) but {given} given"
            )
        elif given > needed:
            errors.append(
                f"Argument {position}: template '{argument.template}' uses {needed} "
                f"secret(s), {given - needed} extra would be ignored"
            )

    return errors


def validate_strict_rules(spec: CommandSpec) -> Errors:
    """
    Perform additional strict validations.

    Rules:
    - Secrets should come from a ${...} source rather than being written inline
    - Templated arguments should contain at least one placeholder
    """
    errors = []

    for position, argument in enumerate(spec.arguments, start=1):
        for index, source in enumerate(argument.sources, start=1):
            if not _is_token_source(source):
                errors.append(f"Argument {position}: secret {index} is written inline in the command file")

        if argument.kind == "template" and not _has_placeholder(argument):
            errors.append(
                f"Argument {position}: template '{argument.template}' has no placeholder, use a literal instead"
            )

    return errors


def _is_token_source(source: str) -> bool:
    """Return whether a secret source refers to a ${...} token."""
    return TOKEN_PATTERN.search(source) is not None


def _has_placeholder(argument: ArgumentSpec) -> bool:
    """Return whether a template argument contains a placeholder."""
    try:
        return count_placeholders(argument.template) > 0
    except FormatError:
        # Already reported by validate_templates
        return True
