"""
Validation module for the airport dataset.

This module provides the error types raised by the query engine and the
loader, and the ValidationResult used to collect per-row problems while a
shard is being parsed.
"""

from dataclasses import dataclass, field
from typing import List, Any, Optional


class ValidationError(ValueError):
    """
    Raised when a caller supplies an out-of-domain input.

    Examples are a latitude outside [-90, 90], a radius that is not
    positive, or an unknown search filter key.
    """

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.field}: {self.message} (value: {self.value})"
        return f"{self.field}: {self.message}"


class NotInitializedError(RuntimeError):
    """Raised when the dataset is queried before it has been loaded."""


@dataclass
class RowError:
    """Represents a single row that was rejected while parsing a shard."""

    index: int
    message: str
    row_id: Optional[int] = None

    def __str__(self) -> str:
        if self.row_id is not None:
            return f"row {self.index} (id {self.row_id}): {self.message}"
        return f"row {self.index}: {self.message}"


@dataclass
class ValidationResult:
    """Result of validating the rows of one shard."""

    errors: List[RowError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no errors)."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        """Check if validation has warnings."""
        return len(self.warnings) > 0

    def add_error(self, index: int, message: str, row_id: Optional[int] = None) -> None:
        """Add a row error."""
        self.errors.append(RowError(index, message, row_id))

    def add_warning(self, message: str) -> None:
        """Add a validation warning."""
        self.warnings.append(message)

    def __str__(self) -> str:
        if self.is_valid:
            if self.has_warnings:
                return f"Valid (with {len(self.warnings)} warnings)"
            return "Valid"
        return f"Invalid ({len(self.errors)} errors)"

    def get_error_messages(self) -> List[str]:
        """Get all error messages as strings."""
        return [str(error) for error in self.errors]


class ShardLoadError(Exception):
    """Exception raised when a shard cannot be read or yields no valid rows."""

    def __init__(self, message: str, shard: Optional[str] = None,
                 validation_result: Optional[ValidationResult] = None):
        """
        Initialize the load error.

        Args:
            message: Error message
            shard: Name of the shard that failed (e.g. 'codes')
            validation_result: Optional ValidationResult with row details
        """
        super().__init__(message)
        self.shard = shard
        self.validation_result = validation_result

    def __str__(self) -> str:
        if self.validation_result and not self.validation_result.is_valid:
            error_messages = "\n  - ".join(self.validation_result.get_error_messages()[:10])
            return f"{super().__str__()}\nErrors:\n  - {error_messages}"
        return super().__str__()
