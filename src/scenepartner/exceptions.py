"""Custom exception hierarchy for ScenePartner with helpful error messages."""

from __future__ import annotations

from typing import Any


class ScenePartnerError(Exception):
    """Base exception with helpful formatting for all ScenePartner errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScenePartnerError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ParseError(ScenePartnerError):
    """Screenplay parsing errors raised outside the heuristic parser itself."""

    pass


class DocumentDecodeError(ParseError):
    """The source document could not be read or its text extracted."""

    pass


class ValidationError(ScenePartnerError):
    """Input validation errors with details about what was expected."""

    pass


class InvalidTransitionError(ScenePartnerError):
    """A rehearsal session transition was rejected.

    Raised for cursor moves on a completed session and for jumps outside the
    element sequence. Callers are expected to recover, usually by ignoring the
    request.
    """

    def __init__(
        self,
        action: str,
        status: str,
        cursor: int,
        reason: str | None = None,
        total_elements: int | None = None,
    ) -> None:
        """Initialize transition error.

        Args:
            action: Name of the rejected transition
            status: Session status at the time of the request
            cursor: Session cursor at the time of the request
            reason: Optional human readable explanation
            total_elements: Length of the element sequence, if relevant
        """
        self.action = action
        self.status = status
        self.cursor = cursor
        details: dict[str, Any] = {"action": action, "status": status, "cursor": cursor}
        if total_elements is not None:
            details["total_elements"] = total_elements
        super().__init__(
            message=reason or f"Cannot {action} a {status} session",
            hint="Ignore the request or start a new rehearsal session",
            details=details,
        )


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "lookback": "context_lookback",
        "lookahead": "context_lookahead",
        "silence_threshold": "silence_threshold_ms",
        "post_speech_delay": "post_speech_delay_ms",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
