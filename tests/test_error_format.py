"""Tests for error message formatting and Rich markup escaping."""

from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from target_platform.errors import ErrorKind
from target_platform.errors import InvalidDescriptorError
from target_platform.errors import InvalidLocationError
from target_platform.errors import NotFoundError
from target_platform.errors import TargetResolutionError
from target_platform.utils.error_format import escape_markup
from target_platform.utils.error_format import format_error_message


class TestFormatErrorMessage:
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (NotFoundError("Feature 'x' not found in /opt"), "Not found: Feature 'x' not found in /opt"),
            (InvalidLocationError("Unknown variable 'x'"), "Invalid location: Unknown variable 'x'"),
            (InvalidDescriptorError("No feature.xml"), "Invalid feature descriptor: No feature.xml"),
        ],
    )
    def test_resolution_errors_use_kind_label(self, error, expected):
        assert format_error_message(error) == expected

    def test_explicit_kind_wins_over_class(self):
        error = TargetResolutionError("bad", kind=ErrorKind.INVALID_LOCATION)

        assert format_error_message(error) == "Invalid location: bad"

    def test_plain_exception(self):
        assert format_error_message(ValueError("invalid input")) == "ValueError: invalid input"

    def test_without_type(self):
        assert format_error_message(ValueError("invalid input"), include_type=False) == "invalid input"

    def test_empty_message_uses_friendly_text(self):
        assert format_error_message(TimeoutError()) == "TimeoutError: Operation timed out."

    def test_empty_unknown_exception(self):
        assert format_error_message(RuntimeError()) == "RuntimeError: (no additional details)"


class TestEscapeMarkup:
    def test_preserves_plain_text(self):
        assert escape_markup("Connection refused") == "Connection refused"

    def test_handles_non_string_input(self):
        assert escape_markup(ValueError("boom")) == "boom"
        assert escape_markup(42) == "42"

    def test_bracketed_path_renders_literally(self):
        buf = StringIO()
        c = Console(file=buf, force_terminal=False, no_color=True)

        c.print(f"[red]Error:[/red] {escape_markup('Missing [/opt/eclipse/features]')}")

        assert "[/opt/eclipse/features]" in buf.getvalue()
