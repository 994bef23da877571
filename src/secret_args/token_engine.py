"""Token engine for expanding ${...} expressions in secret sources."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import RuntimeContext

TOKEN_PATTERN = re.compile(r"\$\{([^}]+)\}")


class TokenEngine:
    """Engine for expanding ${...} tokens in strings."""

    def __init__(self, context: RuntimeContext):
        self.context = context

    def expand(self, template: str) -> str:
        """Expand all tokens in a template string, ignoring warnings."""
        value, _warnings = self.try_expand(template)
        return value

    def try_expand(self, template: str) -> tuple[str, list[str]]:
        """Expand tokens and return value with warnings.

        A warning means a token could not be resolved and was replaced with
        an empty string.
        """
        warnings: list[str] = []

        def _replace(match: re.Match) -> str:
            expanded_value, token_warnings = self._expand_token(match.group(1))
            warnings.extend(token_warnings)
            return expanded_value

        # Single pass so secret values that look like tokens are left alone
        result = TOKEN_PATTERN.sub(_replace, template)
        return result, warnings

    def _expand_token(self, token_content: str) -> tuple[str, list[str]]:
        """Expand a single token."""
        # Handle fallback syntax: ${TOKEN|fallback}
        if "|" in token_content:
            token_part, fallback = token_content.split("|", 1)
            value, _token_warnings = self._expand_single_token(token_part.strip())
            if value is None or value == "":
                return fallback.strip(), []
            return value, []

        value, warnings = self._expand_single_token(token_content)
        return value or "", warnings

    def _expand_single_token(self, token: str) -> tuple[str | None, list[str]]:
        """Expand a single token without fallback."""
        warnings = []

        # Environment variables: ${ENV:VAR}
        if token.startswith("ENV:"):
            var_name = token[4:]
            value = self.context.env.get(var_name)
            if value is None:
                warnings.append(f"Environment variable '{var_name}' not found")
            return value, warnings

        # File contents: ${FILE:path}
        if token.startswith("FILE:"):
            raw_path = token[5:].strip()
            if raw_path == "~" or raw_path.startswith("~/"):
                path = Path(self.context.home) / raw_path[2:]
            else:
                path = Path(raw_path)
            try:
                return path.read_text(encoding="utf-8").rstrip("\r\n"), warnings
            except OSError as e:
                warnings.append(f"Cannot read secret file '{path}': {e.strerror or e}")
                return None, warnings

        if token == "HOME":
            return self.context.home, warnings

        # Unknown token
        warnings.append(f"Unknown token: {token}")
        return None, warnings
