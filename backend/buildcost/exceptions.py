"""Custom exception hierarchy for the BuildCost service."""

from __future__ import annotations

from typing import Any


class BuildCostError(Exception):
    """Base exception for all BuildCost errors."""


class EstimateValidationError(BuildCostError):
    """Raised when estimation input is malformed or out of range.

    ``errors`` carries one entry per offending field so the API layer can
    report them all at once.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class CostEstimationError(BuildCostError):
    """Raised when cost estimation fails for a valid request."""


class RateLimitExceededError(BuildCostError):
    """Raised when a client exceeds its request allowance."""

    def __init__(self, message: str, error_code: str, retry_after: int) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.retry_after = retry_after
