"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for appendtree.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Tree operations over valid keys never fail; these errors cover input
that is not a valid key or digest, bad configuration, and root
mismatches reported by the CLI.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input Errors
    INVALID_KEY = "INVALID_KEY"
    INVALID_DIGEST = "INVALID_DIGEST"
    INVALID_HEX = "INVALID_HEX"

    # Commitment Errors
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AppendTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to be reported as data (e.g. in CLI JSON
    output) rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_KEY],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "AppendTreeException":
        """Convert this error model to a raised exception."""
        return AppendTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


class RootMismatchError(AppendTreeError):
    """Error model for a computed root that differs from the expected one."""

    code: str = Field(default=ErrorCodes.ROOT_MISMATCH)
    expected_root: str | None = Field(
        default=None,
        description="Expected root digest (hex)",
    )
    actual_root: str | None = Field(
        default=None,
        description="Computed root digest (hex), or None for an empty tree",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AppendTreeException(Exception):
    """
    Base exception for all appendtree errors.

    This exception carries structured error information and can be
    converted to/from AppendTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "APPENDTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AppendTreeError:
        """Convert this exception to an AppendTreeError model."""
        return AppendTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidKeyException(AppendTreeException):
    """Exception raised when a key is not an unsigned 64-bit integer."""

    def __init__(
        self,
        message: str,
        key: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key is not None:
            full_details["key"] = repr(key)
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_KEY,
            details=full_details,
            retryable=False,
        )


class InvalidDigestException(AppendTreeException):
    """Exception raised when a digest operand has the wrong size or type."""

    def __init__(
        self,
        message: str,
        actual_length: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if actual_length is not None:
            full_details["actual_length"] = actual_length
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_DIGEST,
            details=full_details,
            retryable=False,
        )


class HexDecodeException(AppendTreeException):
    """Exception raised when a hex string cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_HEX,
            details=details,
            retryable=False,
        )


class RootMismatchException(AppendTreeException):
    """Exception raised when a computed root differs from the expected root."""

    def __init__(
        self,
        message: str,
        expected_root: str | None = None,
        actual_root: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["expected_root"] = expected_root
        full_details["actual_root"] = actual_root
        super().__init__(
            message=message,
            code=ErrorCodes.ROOT_MISMATCH,
            details=full_details,
            retryable=False,
        )
        self.expected_root = expected_root
        self.actual_root = actual_root

    def to_error_model(self) -> RootMismatchError:
        return RootMismatchError(
            message=self.message,
            details=self.details,
            expected_root=self.expected_root,
            actual_root=self.actual_root,
        )


class ConfigurationException(AppendTreeException):
    """Exception raised when configuration values are invalid."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
