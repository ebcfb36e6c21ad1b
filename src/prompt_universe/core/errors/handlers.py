"""Problem Details (RFC 7807) responses for every error the API returns.

Application errors put their localized message in ``detail`` and merge
their ``details`` into the body. Request validation failures list the
offending fields, by their camelCase wire names, under ``errors``.

See: https://tools.ietf.org/html/rfc7807
"""

from http import HTTPStatus
from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from prompt_universe.config import settings
from prompt_universe.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()

_TITLES: dict[int, str] = {
    400: "请求无效",
    404: "资源不存在",
    409: "资源状态冲突",
    422: "数据校验失败",
    500: "服务器内部错误",
    502: "模型调用失败",
    503: "服务暂时不可用",
}

# Location prefixes FastAPI adds in front of the field path
_LOCATION_PARTS = frozenset({"body", "query", "path", "header"})


class FieldError(BaseModel):
    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """Error response body.

    Attributes:
        type: URI identifying the error code
        title: Short summary of the status
        status: HTTP status code
        detail: Message for this occurrence, shown to end users
        instance: Request path
        errors: Field errors of a validation failure
        trace_id: Request ID, for matching the response to logs
    """

    model_config = ConfigDict(extra="allow")

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    trace_id: str | None = None


def problem_response(
    request: Request,
    status_code: int,
    error_code: str,
    detail: str,
    errors: list[FieldError] | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ProblemDetail(
        type=f"{settings.api_docs_base_url}/errors/{error_code}",
        title=_TITLES.get(status_code) or HTTPStatus(status_code).phrase,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors,
        trace_id=getattr(request.state, "trace_id", None),
    ).model_dump(exclude_none=True)

    # Extra keys never replace the standard members
    for key, value in (extra or {}).items():
        body.setdefault(key, value)

    return JSONResponse(status_code=status_code, content=body)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an ``AppException`` raised by a read flow or an execution."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app_exception",
        error_code=exc.error_code,
        status_code=exc.status_code,
        path=request.url.path,
        details=exc.details,
    )
    return problem_response(
        request,
        exc.status_code,
        exc.error_code,
        exc.message,
        extra=exc.details,
    )


def _field_errors(exc: RequestValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        parts = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PARTS]
        errors.append(
            FieldError(
                field=".".join(parts) or "request",
                message=error.get("msg", "Invalid value"),
                type=error.get("type"),
            )
        )
    return errors


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = _field_errors(exc)
    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        fields=[error.field for error in errors],
    )
    return problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "validation_error",
        "输入数据校验失败。",
        errors=errors,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure with its traceback and answer with a generic 500."""
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        AppException.error_code,
        AppException.message,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
