import logging

from fastapi import Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from userapi.core.domain.errors import UserErrorKind, UserRepositoryError
from userapi.interfaces.api.schemas import ErrorBody

logger = logging.getLogger("users")

METHOD_NOT_ALLOWED = "method not allowed"
INTERNAL_ERROR = "internal server error"

ERROR_STATUS = {
    UserErrorKind.INVALID_DATA: status.HTTP_400_BAD_REQUEST,
    UserErrorKind.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    UserErrorKind.USER_EXISTS: status.HTTP_409_CONFLICT,
    UserErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    UserErrorKind.FETCH_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UserErrorKind.UNMARSHAL_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UserErrorKind.MARSHAL_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UserErrorKind.WRITE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UserErrorKind.DELETE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(kind: UserErrorKind) -> int:
    return ERROR_STATUS.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def user_error_handler(_: Request, exc: UserRepositoryError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc.kind),
        content=ErrorBody(error=exc.message).model_dump(),
    )


async def method_not_allowed_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Only 405 is reshaped; every other HTTP error keeps FastAPI's default body.
    if exc.status_code != status.HTTP_405_METHOD_NOT_ALLOWED:
        return await http_exception_handler(request, exc)
    logger.warning(
        "Unhandled method",
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content=ErrorBody(error=METHOD_NOT_ALLOWED).model_dump(),
        headers=getattr(exc, "headers", None),
    )
