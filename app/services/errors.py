"""Typed failures raised by the patent services."""

from __future__ import annotations

from typing import Iterable, Optional


class PatentServiceError(Exception):
    """Base class for whole-request failures."""


class ConfigurationError(PatentServiceError):
    """Raised when a required upstream credential is not configured."""


class InvalidIncludeError(PatentServiceError, ValueError):
    """Raised for an inclusion value outside the recognised set."""

    def __init__(self, value: str, valid: Iterable[str]) -> None:
        self.value = value
        self.valid = list(valid)
        super().__init__(
            f'Invalid include value: "{value}". Valid values are: {", ".join(self.valid)}'
        )


class PatentNotFoundError(PatentServiceError):
    """Raised when the upstream query yields no identifying data."""

    def __init__(self, patent_id: str, message: Optional[str] = None) -> None:
        self.patent_id = patent_id
        super().__init__(
            message
            or (
                f"No patent data found for patent ID: {patent_id}. "
                "The patent may not exist in the database or may not be accessible."
            )
        )


class UpstreamTimeoutError(PatentServiceError):
    """Raised when an upstream call exceeds its timeout."""

    def __init__(self, target: str, timeout: float) -> None:
        self.target = target
        self.timeout = timeout
        super().__init__(f"Request to {target} timed out after {timeout:g}s")


class UpstreamRequestError(PatentServiceError):
    """Raised for non-success upstream responses and transport failures."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
