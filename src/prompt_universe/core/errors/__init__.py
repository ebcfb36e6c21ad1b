"""Error handling module with RFC 7807 Problem Details."""

from prompt_universe.core.errors.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    DocumentStoreError,
    ExecutionError,
    InvalidDocumentError,
    MetadataAnalysisError,
    NotFoundError,
    ServiceUnavailableError,
    TemplateRenderError,
)
from prompt_universe.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    "ConflictError",
    "DocumentStoreError",
    "ExecutionError",
    # Handlers
    "FieldError",
    "InvalidDocumentError",
    "MetadataAnalysisError",
    "NotFoundError",
    "ProblemDetail",
    "ServiceUnavailableError",
    "TemplateRenderError",
    "register_exception_handlers",
]
