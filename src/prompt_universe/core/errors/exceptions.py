"""Application exceptions.

Read flows and executions raise these and the API renders them as
Problem Details; mutating flows catch them and return a failed
``OperationResult`` instead. ``message`` is shown to end users (Chinese);
``error_code`` is the stable identifier clients match on.
"""

from typing import Any


class AppException(Exception):
    """Base of every error the API turns into a Problem Details response.

    Attributes:
        message: User-facing message, also the response ``detail``
        error_code: Stable identifier, the last segment of the response ``type``
        status_code: HTTP status of the response
        details: Extra members merged into the response body
    """

    message: str = "发生了意外错误。"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested document does not exist.

    Example:
        raise NotFoundError("找不到该提示词。", resource="prompts", resource_id=prompt_id)
    """

    message = "请求的资源不存在。"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when a change conflicts with the current state of a document.

    Example:
        raise ConflictError("订单状态不允许此变更。", details={"from": "已完成"})
    """

    message = "资源状态冲突。"
    error_code = "conflict"
    status_code = 409


class BadRequestError(AppException):
    """Raised for general client errors."""

    message = "请求无效。"
    error_code = "bad_request"
    status_code = 400


class ServiceUnavailableError(AppException):
    """Raised when a required service or configuration is unavailable."""

    message = "服务暂时不可用。"
    error_code = "service_unavailable"
    status_code = 503


class DocumentStoreError(ServiceUnavailableError):
    """Raised when a call to the document database fails.

    Example:
        raise DocumentStoreError(details={"collection": "tenants"})
    """

    message = "数据库操作失败，请稍后重试。"
    error_code = "document_store_error"


class TemplateRenderError(BadRequestError):
    """Raised when a prompt template cannot be compiled or rendered."""

    message = "提示词模板语法无效。"
    error_code = "template_render_error"


class ExecutionError(AppException):
    """Raised when a prompt execution fails for any reason.

    Unknown connections, provider failures and malformed provider
    responses all surface as this single error; the message carries
    the underlying cause.
    """

    message = "调用模型时发生错误，请稍后重试或联系管理员。"
    error_code = "prompt_execution_failed"
    status_code = 502


class MetadataAnalysisError(ExecutionError):
    """Raised when the model returns no usable structured metadata."""

    message = "AI返回的元数据格式无效，无法解析。"
    error_code = "metadata_analysis_failed"


class InvalidDocumentError(ConflictError):
    """Raised when a stored document no longer matches its schema.

    Example:
        raise InvalidDocumentError(resource="orders", resource_id=order_id)
    """

    message = "该记录数据不完整或格式无效，无法处理。"
    error_code = "invalid_document"

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)
