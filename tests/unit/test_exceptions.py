"""Tests for introspector.exceptions module."""

from __future__ import annotations

import pytest

from introspector.exceptions import (
    CommandError,
    IntrospectorError,
    PatternConfigError,
    SessionError,
    SessionFinalizedError,
    SessionMismatchError,
)


class TestHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_type",
        [PatternConfigError, SessionError, SessionFinalizedError, SessionMismatchError, CommandError],
    )
    def test_all_inherit_from_base(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, IntrospectorError)

    def test_session_errors(self) -> None:
        assert issubclass(SessionFinalizedError, SessionError)
        assert issubclass(SessionMismatchError, SessionError)


class TestSessionFinalizedError:
    """Tests for SessionFinalizedError."""

    def test_message_and_attribute(self) -> None:
        err = SessionFinalizedError("s-1")
        assert err.session_id == "s-1"
        assert "'s-1'" in str(err)
        assert "finalized" in str(err)


class TestSessionMismatchError:
    """Tests for SessionMismatchError."""

    def test_attributes(self) -> None:
        err = SessionMismatchError("mine", "theirs")
        assert err.session_id == "mine"
        assert err.finding_session_id == "theirs"
        assert "theirs" in str(err)


class TestCommandError:
    """Tests for CommandError exception."""

    def test_user_message_stored(self) -> None:
        err = CommandError("Target must look like 'module:attribute'")
        assert err.user_message == "Target must look like 'module:attribute'"

    def test_str_representation(self) -> None:
        assert str(CommandError("Invalid input")) == "Invalid input"
