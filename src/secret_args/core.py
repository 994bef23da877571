"""Loading command files and building secret argument lists from them."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .command import Builder, SecretArgumentList
from .logging import get_logger
from .models import ArgumentSpec, CommandSpec
from .template_parser import FormatError
from .token_engine import TokenEngine
from .types import PLACEHOLDER, EnvMap, Errors, RuntimeContext

logger = get_logger(__name__)


@dataclass
class BuildResult:
    """Result of building a command from a command file."""

    command: Optional[SecretArgumentList]
    errors: Errors = field(default_factory=list)


def load_spec(path: Path) -> CommandSpec:
    """Load YAML command file."""
    data = yaml.safe_load(path.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"Command file {path} must contain a mapping")
    return CommandSpec(**data)


def build_runtime_context(*, env: Optional[EnvMap] = None, home: Optional[str] = None) -> RuntimeContext:
    """Build runtime context for resolving secret sources."""
    if env is None:
        env = dict(os.environ)

    return RuntimeContext(
        env=env,
        home=home if home is not None else str(Path.home()),
    )


def resolve_secrets(argument: ArgumentSpec, token_engine: TokenEngine) -> tuple[list[str], Errors]:
    """Expand the secret sources of an argument."""
    values = []
    errors = []
    for source in argument.sources:
        value, warnings = token_engine.try_expand(source)
        errors.extend(warnings)
        values.append(value)
    return values, errors


def add_argument(builder: Builder, argument: ArgumentSpec, secrets: list[str]) -> None:
    """Append an argument to the builder according to its kind."""
    if argument.kind == "literal":
        builder.add_literal(argument.literal)
    elif argument.kind == "secret":
        builder.add(PLACEHOLDER, *secrets)
    else:
        builder.add(argument.template, *secrets)


def build_command(spec: CommandSpec, context: RuntimeContext) -> BuildResult:
    """Build a SecretArgumentList from a command file.

    Errors from every argument are collected before giving up, so a single
    run reports all of them. No command is returned if any error occurred.
    """
    token_engine = TokenEngine(context)
    builder = SecretArgumentList.builder()
    errors: Errors = []

    for position, argument in enumerate(spec.arguments, start=1):
        secrets, secret_errors = resolve_secrets(argument, token_engine)
        if secret_errors:
            errors.extend(f"Argument {position}: {error}" for error in secret_errors)
            continue

        try:
            add_argument(builder, argument, secrets)
        except FormatError as e:
            errors.append(f"Argument {position}: {e}")

    if errors:
        logger.warning("command_build_failed", error_count=len(errors))
        return BuildResult(command=None, errors=errors)

    command = builder.build().mask(spec.mask).alt(spec.alt)
    logger.debug("command_built", argument_count=len(command), command=str(command))
    return BuildResult(command=command)
