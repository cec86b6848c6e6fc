"""
Custom exceptions for MDB_INDEXER.

Annotation and planning failures share one base class. Errors raised by the
MongoDB driver while creating indexes are not wrapped: they reach the caller
exactly as the driver raised them.
"""

from typing import Any, Dict, List, Optional


class IndexerError(RuntimeError):
    """
    Base exception for MDB_INDEXER errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (field,
                 annotation, token, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class AnnotationParseError(IndexerError, ValueError):
    """
    Raised when an index annotation string cannot be parsed.

    Attributes:
        message: Error message
        annotation: The raw annotation being parsed (if available)
        token: The offending token (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        annotation: Optional[str] = None,
        token: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if annotation is not None:
            context["annotation"] = annotation
        if token is not None:
            context["token"] = token
        super().__init__(message, context=context)
        self.annotation = annotation
        self.token = token


class ConflictingDirectionError(AnnotationParseError):
    """Raised when an annotation asks for both ``asc`` and ``desc``."""


class InvalidTTLValueError(AnnotationParseError):
    """Raised when a ``ttl=`` value is not a non-negative integer in range."""


class InvalidNameError(AnnotationParseError):
    """Raised when a ``name=`` value is empty or padded with whitespace."""


class UnknownOptionError(AnnotationParseError):
    """Raised for a token outside the annotation grammar."""


class ConflictingOptionsError(AnnotationParseError):
    """
    Raised when tokens cannot be combined.

    TTL indexes are always ascending and non-unique, so ``ttl=`` next to
    ``desc`` or ``unique`` is rejected, as are repeated ``ttl=``/``name=``
    tokens with different values.
    """


class FieldIndexError(IndexerError):
    """
    Raised when a record field carries an invalid index annotation.

    Attributes:
        message: Error message
        field: Attribute name of the field on the record type
        storage_field: Persisted document key of the field
        cause: The underlying AnnotationParseError
        context: Additional context information
    """

    def __init__(
        self,
        field: str,
        cause: AnnotationParseError,
        storage_field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        context["field"] = field
        if storage_field is not None and storage_field != field:
            context["storage_field"] = storage_field
        super().__init__(f"Invalid index annotation on field '{field}': {cause}", context=context)
        self.field = field
        self.storage_field = storage_field
        self.cause = cause


class IndexPlanningError(IndexerError):
    """
    Raised by collect-all planning when one or more fields are invalid.

    Attributes:
        errors: Every FieldIndexError found, in field declaration order
    """

    def __init__(self, errors: List[FieldIndexError]) -> None:
        fields = [error.field for error in errors]
        super().__init__(
            f"{len(errors)} field(s) have invalid index annotations",
            context={"fields": fields},
        )
        self.errors = errors


class RecordDescriptorError(IndexerError, TypeError):
    """
    Raised when a record type cannot be described as indexable fields.

    Attributes:
        record: The record type or value that could not be described
    """

    def __init__(
        self,
        message: str,
        record: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if record is not None:
            context["record"] = getattr(record, "__name__", type(record).__name__)
        super().__init__(message, context=context)
        self.record = record


class ConfigurationError(IndexerError):
    """
    Raised when configuration is invalid or missing.

    Attributes:
        message: Error message
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the configuration error.

        Args:
            message: Error message
            config_key: Configuration key that caused the error (if available)
            config_value: Configuration value that caused the error (if available)
            context: Additional context information
        """
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value
