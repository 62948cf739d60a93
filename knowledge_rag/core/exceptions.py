"""
Exception hierarchy for the knowledge RAG core.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KnowledgeRagError(Exception):
    """Base exception for all knowledge RAG errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(KnowledgeRagError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(KnowledgeRagError):
    """Raised when pipeline configuration is invalid (e.g. overlap >= chunk size)."""

    pass


class EmbeddingModelMismatchError(ConfigurationError):
    """Raised when an embedding model differs from the one the corpus was built with."""

    def __init__(
        self,
        configured_model: str,
        corpus_models: list[str],
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize model mismatch error.

        Args:
            configured_model: "provider/model" of the active embedding client
            corpus_models: "provider/model" values already stored in the corpus
            details: Additional context
        """
        details = details or {}
        details["configured_model"] = configured_model
        details["corpus_models"] = corpus_models
        super().__init__(
            f"Embedding model {configured_model} does not match corpus model(s) "
            f"{', '.join(corpus_models)}",
            details,
        )


class DocumentProcessingError(KnowledgeRagError):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        source_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            source_id: ID of the source that failed
            details: Additional context
        """
        details = details or {}
        if source_id:
            details["source_id"] = source_id
        super().__init__(message, details)


class UnsupportedFormatError(DocumentProcessingError):
    """Raised when a source kind or media type has no registered handler."""

    def __init__(
        self,
        source_type: str,
        mime_type: str | None = None,
        source_id: str | None = None,
    ) -> None:
        """
        Initialize unsupported format error.

        Args:
            source_type: Source kind that was dispatched on
            mime_type: Declared media type, if the kind has one
            source_id: ID of the source
        """
        details: dict[str, Any] = {"source_type": source_type}
        if mime_type is not None:
            details["mime_type"] = mime_type
            message = f"Unsupported {source_type} with media type {mime_type}"
        else:
            message = f"Unsupported source type {source_type}"
        super().__init__(message, source_id, details)


class ExtractionError(DocumentProcessingError):
    """Raised when a supported document cannot be turned into text."""

    pass


class ExternalProviderError(KnowledgeRagError):
    """Raised when an embedding provider call fails (rate limits and auth included)."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Provider identifier (openai, bedrock)
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class StorageNotFoundError(KnowledgeRagError):
    """Raised when a stored-file location does not exist."""

    def __init__(self, location: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize not found error.

        Args:
            location: Storage location that was requested
            details: Additional context
        """
        details = details or {}
        details["location"] = location
        super().__init__(f"Stored file not found: {location}", details)


class PersistenceError(KnowledgeRagError):
    """Raised when a database transaction fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            operation: Operation that failed (store_knowledge, save_query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class InvalidJobStateError(KnowledgeRagError):
    """Raised when a job is not in the state an operation requires."""

    def __init__(
        self,
        job_id: str,
        status: str | None,
        expected: str,
    ) -> None:
        """
        Initialize invalid job state error.

        Args:
            job_id: ID of the job
            status: Status the job was found in
            expected: Status the operation requires
        """
        super().__init__(
            f"Job {job_id} is {status}, expected {expected}",
            {"job_id": job_id, "status": status, "expected": expected},
        )


class JobNotFoundError(KnowledgeRagError):
    """Raised when a knowledge job cannot be found."""

    def __init__(self, job_id: str) -> None:
        super().__init__(f"Knowledge job not found: {job_id}", {"job_id": job_id})


class SourceNotFoundError(KnowledgeRagError):
    """Raised when a source cannot be found."""

    def __init__(self, source_id: str) -> None:
        super().__init__(f"Source not found: {source_id}", {"source_id": source_id})
