"""Command file models for secret argument lists."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from .types import DEFAULT_MASK, contains_quote_trigger

ArgumentKind = Literal["literal", "template", "secret"]


class ArgumentSpec(BaseModel):
    """One argument of a command file.

    Exactly one of ``literal``, ``template`` or ``secret`` is set. A plain
    string in the file is read as a literal.
    """

    literal: str | None = None
    template: str | None = None
    secrets: list[str] = Field(default_factory=list)  # sources, before token expansion
    secret: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_plain_string(cls, data: Any) -> Any:
        """Treat a bare string as a literal argument."""
        if isinstance(data, str):
            return {"literal": data}
        return data

    @model_validator(mode="after")
    def _check_single_kind(self) -> ArgumentSpec:
        """Validate that the argument has exactly one kind."""
        given = [name for name in ("literal", "template", "secret") if getattr(self, name) is not None]
        if len(given) != 1:
            raise ValueError(
                f"Argument must set exactly one of literal, template or secret (got: {given or 'none'})"
            )
        if self.secrets and self.template is None:
            raise ValueError("'secrets' can only be used together with 'template'")
        return self

    @property
    def kind(self) -> ArgumentKind:
        """Return which kind of argument this is."""
        if self.literal is not None:
            return "literal"
        if self.template is not None:
            return "template"
        return "secret"

    @property
    def sources(self) -> list[str]:
        """Return the secret sources of this argument."""
        if self.secret is not None:
            return [self.secret]
        return list(self.secrets)


class CommandSpec(BaseModel):
    """Main command file specification."""

    version: str
    mask: str = DEFAULT_MASK
    alt: str | None = None
    arguments: list[ArgumentSpec] = Field(default_factory=list)

    @field_validator("mask")
    @classmethod
    def _check_mask(cls, v: str) -> str:
        """Validate that the mask keeps display words intact."""
        if contains_quote_trigger(v):
            raise ValueError(f"Mask '{v}' must not contain whitespace or double quotes")
        return v
