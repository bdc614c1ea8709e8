"""Custom exceptions for introspector package."""


class IntrospectorError(Exception):
    """Base exception class for all introspector errors."""


class PatternConfigError(IntrospectorError):
    """Raised when a governance pattern file cannot be loaded or compiled."""


class SessionError(IntrospectorError):
    """Raised when a session operation violates the session lifecycle."""


class SessionFinalizedError(SessionError):
    """Raised when appending a finding to a session that has been finalized.

    Finalization computes the governance summary once. Accepting further
    findings would leave that summary describing a different set of findings
    than the session holds, so the session is sealed for writes instead.

    Attributes:
        session_id: Identifier of the sealed session.
    """

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id!r} is finalized and no longer accepts findings")
        self.session_id = session_id


class SessionMismatchError(SessionError):
    """Raised when a finding built for one session is appended to another."""

    def __init__(self, session_id: str, finding_session_id: str) -> None:
        super().__init__(
            f"Finding belongs to session {finding_session_id!r}, not {session_id!r}"
        )
        self.session_id = session_id
        self.finding_session_id = finding_session_id


class CommandError(IntrospectorError):
    """Expected command failure with a user-facing message.

    The CLI displays user_message cleanly without traceback.

    Example:
        raise CommandError("Target must look like 'module:attribute'")
    """

    def __init__(self, user_message: str) -> None:
        self.user_message = user_message
        super().__init__(user_message)
