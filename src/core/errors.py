# src/core/errors.py — v1
"""Failure taxonomy for the extraction pipeline.

Every externally visible failure carries a cause class and a one-line
reason so callers can decide whether to retry the whole request, show an
error, or treat the page as "not a recipe".
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from recipextract.core.recipe import Recipe


class FailureCause(str, Enum):
    """Cause class attached to every ExtractionError."""

    TRANSPORT = "transport"
    BLOCKED = "blocked"
    PARSE_ERROR = "parse_error"
    VALIDATION = "validation"
    RETRY_EXHAUSTED = "retry_exhausted"


class ClientErrorCode(str, Enum):
    """Result codes of a single LLM endpoint call."""

    SUCCESS = "SUCCESS"
    BLOCKED = "BLOCKED"
    OTHER = "OTHER"
    PARSE_ERROR = "PARSE_ERROR"


class ExtractionError(Exception):
    """Base class for pipeline failures."""

    cause: FailureCause = FailureCause.TRANSPORT

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)

    def to_dict(self) -> dict[str, Any]:
        """Serializable summary for API responses and logs."""
        return {"cause": self.cause.value, "reason": self.reason}


class TransportFailure(ExtractionError):
    """Network/HTTP failure reaching the LLM endpoint or the HTML source.

    Retryable by the caller, never by the pipeline itself.
    """

    cause = FailureCause.TRANSPORT
    code = ClientErrorCode.OTHER

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(reason)


class BlockedContent(ExtractionError):
    """The model's safety filter blocked the prompt or the candidate."""

    cause = FailureCause.BLOCKED
    code = ClientErrorCode.BLOCKED

    def __init__(self, block_reason: str) -> None:
        self.block_reason = block_reason
        super().__init__(f"Content blocked by safety filter: {block_reason}")


class ParseError(ExtractionError):
    """The response did not decode against the declared output schema."""

    cause = FailureCause.PARSE_ERROR
    code = ClientErrorCode.PARSE_ERROR

    def __init__(self, reason: str, payload_length: int = 0) -> None:
        self.payload_length = payload_length
        super().__init__(reason)


class ValidationFailure(ExtractionError):
    """A decoded recipe is semantically incomplete. Drives the feedback retry."""

    cause = FailureCause.VALIDATION

    def __init__(self, reason: str, recipe: Recipe | None = None) -> None:
        self.recipe = recipe
        super().__init__(reason)


class RetryExhausted(ExtractionError):
    """The feedback loop hit its attempt ceiling. Never cached."""

    cause = FailureCause.RETRY_EXHAUSTED

    def __init__(self, attempts: int, last_reason: str) -> None:
        self.attempts = attempts
        self.last_reason = last_reason
        super().__init__(
            f"Validation still failing after {attempts} attempt(s): {last_reason}"
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["attempts"] = self.attempts
        return data


class StorageError(Exception):
    """Raised by storage providers when an upload cannot be completed."""
