"""Tests for secret source token expansion."""

import tempfile
from pathlib import Path

from secret_args.core import build_runtime_context
from secret_args.token_engine import TokenEngine


def _engine(env=None, home="/test/home"):
    return TokenEngine(build_runtime_context(env=env or {}, home=home))


def test_env_token():
    """Test expanding environment variables."""
    engine = _engine({"DB_PASSWORD": "s3cret"})

    assert engine.try_expand("${ENV:DB_PASSWORD}") == ("s3cret", [])
    assert engine.expand("user:${ENV:DB_PASSWORD}") == "user:s3cret"


def test_missing_env_token():
    """Test that a missing variable produces a warning."""
    engine = _engine()

    value, warnings = engine.try_expand("${ENV:MISSING}")

    assert value == ""
    assert warnings == ["Environment variable 'MISSING' not found"]


def test_fallback():
    """Test fallback values for missing tokens."""
    engine = _engine({"EMPTY": ""})

    assert engine.try_expand("${ENV:MISSING|default}") == ("default", [])
    assert engine.try_expand("${ENV:EMPTY|default}") == ("default", [])


def test_home_token():
    """Test the HOME token."""
    assert _engine().expand("${HOME}/.token") == "/test/home/.token"


def test_unknown_token():
    """Test that unknown tokens produce a warning."""
    value, warnings = _engine().try_expand("${NOPE}")

    assert value == ""
    assert warnings == ["Unknown token: NOPE"]


def test_plain_string_unchanged():
    """Test that strings without tokens are returned as-is."""
    assert _engine().try_expand("P@ssw0rd") == ("P@ssw0rd", [])


def test_values_are_not_expanded_again():
    """Test that a value which looks like a token is left alone."""
    engine = _engine({"TRICKY": "${ENV:OTHER}", "OTHER": "leaked"})

    assert engine.expand("${ENV:TRICKY}") == "${ENV:OTHER}"


def test_file_token():
    """Test reading a secret from a file, without its trailing newline."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False) as f:
        f.write("file-secret\n")
        secret_path = Path(f.name)

    try:
        assert _engine().try_expand(f"${{FILE:{secret_path}}}") == ("file-secret", [])
    finally:
        secret_path.unlink()


def test_file_token_relative_to_home():
    """Test that '~' in file tokens refers to the context home."""
    with tempfile.TemporaryDirectory() as home:
        (Path(home) / ".token").write_text("home-secret")

        assert _engine(home=home).expand("${FILE:~/.token}") == "home-secret"


def test_missing_file_token():
    """Test that an unreadable file produces a warning."""
    value, warnings = _engine().try_expand("${FILE:/nonexistent/secret}")

    assert value == ""
    assert len(warnings) == 1
    assert "Cannot read secret file '/nonexistent/secret'" in warnings[0]
