# src/quire/errors.py
"""Exception hierarchy for Quire.

Every error raised on purpose by the library derives from QuireError, so
callers (the commands layer, the CLI, embedding applications) can catch the
whole family in one place while still telling the cases apart:

- ValidationError: rejected input, raised before any side effect
- ExtractionError: the document bytes could not be read as text
- ProviderError and subclasses: failures talking to the embedding/chat API
- AnswerGenerationError: the answer could not be produced
- DocumentNotFoundError: unknown document id
"""

from __future__ import annotations


class QuireError(Exception):
    """Base class for all Quire errors."""


class ValidationError(QuireError):
    """Input was rejected before processing started."""


class ExtractionError(QuireError):
    """Document could not be parsed into text."""


class ProviderError(QuireError):
    """Base class for embedding/chat provider failures."""


class TransientProviderError(ProviderError):
    """A provider failure worth retrying (HTTP 429, 5xx, transport errors).

    Attributes:
        retry_after: Server-requested delay in seconds, if the response
            carried a Retry-After header.
        status_code: HTTP status, or None for transport-level failures.
    """

    def __init__(
        self,
        message: str,
        *,
        retry_after: float | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.retry_after = retry_after
        self.status_code = status_code


class FatalProviderError(ProviderError):
    """A provider failure that retrying cannot fix (other 4xx, bad response body)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderRetriesExhaustedError(ProviderError):
    """Transient failures persisted through every allowed attempt."""

    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class AnswerGenerationError(QuireError):
    """The answer for a question could not be generated."""


class DocumentNotFoundError(QuireError):
    """No document exists with the requested id."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document not found: {document_id}")
        self.document_id = document_id
