"""
Unified error handling for the xdeployment function.

Exceptions raised while decoding a request or composing resources carry an
exit code so the CLI can report them consistently. The function handler
turns the same exceptions into response conditions instead.

Exit Codes:
- 0: Success
- 1: Warning (the response carries a fatal result)
- 10: Configuration error
- 12: Decode error (malformed request or observed resource)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    WARNING = 1
    CONFIG_ERROR = 10
    DECODE_ERROR = 12
    UNKNOWN_ERROR = 127


class XDeploymentError(Exception):
    """Base exception for function errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(XDeploymentError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class InputDecodeError(XDeploymentError):
    """Raised when part of a request cannot be decoded."""

    exit_code = ExitCode.DECODE_ERROR


class ObservedResourceError(XDeploymentError):
    """Raised when an observed resource exists but has an unexpected shape."""

    exit_code = ExitCode.DECODE_ERROR


class CompositionError(XDeploymentError):
    """Raised when a built resource cannot be turned into a desired resource."""


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI commands that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - XDeploymentError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except XDeploymentError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130  # Standard exit code for SIGINT
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator
