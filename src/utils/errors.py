"""Error taxonomy for the meal creation workflow.

Every failure aborts the run and reaches the caller as one of these:
- InputValidationError: malformed meal context, raised before any model call
- ExternalCallError: a generative model call failed or returned nothing
- SchemaConformanceError: structured output did not match its schema
"""

from typing import Any, Optional


class MealCreationError(Exception):
    """Base class for workflow failures."""

    def __init__(self, message: str, step: Optional[str] = None) -> None:
        super().__init__(message)
        self.step = step


class InputValidationError(MealCreationError, ValueError):
    """Raised when the caller-supplied meal context is invalid."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None) -> None:
        super().__init__(message, step="validate-context")
        self.errors = errors or []


class ExternalCallError(MealCreationError):
    """Raised when a generative model invocation fails."""


class SchemaConformanceError(MealCreationError):
    """Raised when schema-constrained output fails validation."""
