"""Typed domain exceptions for scoreboard rule violations.

Recoverable rule violations use subclasses of GameRuleError so callers can
catch them at the service boundary. Caller contract violations raise
SessionPreconditionError, which is not a GameRuleError and is fatal to the
core.
"""


class GameRuleError(Exception):
    """Base exception for game rule violations."""


class InvalidConfigurationError(GameRuleError):
    """Game configuration contains values the engine cannot play."""


class SessionPreconditionError(Exception):
    """Raised when an operation is invoked on a session in the wrong state.

    Examples: committing a turn on a terminal session, addressing an unknown
    game id, or starting a game with a participant missing from the roster.

    Attributes:
        operation: The operation that was attempted (e.g. "commit_turn").
        reason: Human-readable explanation of the violated precondition.

    """

    def __init__(self, *, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} rejected: {reason}")
