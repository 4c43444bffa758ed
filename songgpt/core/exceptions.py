"""Application exceptions and their envelope handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from songgpt.common.schemas.responses import ResponseDto

logger = logging.getLogger(__name__)


class SongGptException(Exception):
    """Base exception for all SongGPT errors."""
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


# Token
class TokenNotFoundError(SongGptException):
    def __init__(self, message: str = "토큰이 없습니다."):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class InvalidTokenError(SongGptException):
    def __init__(self, message: str = "토큰이 유효하지 않습니다."):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class UnauthenticatedError(SongGptException):
    def __init__(self, message: str = "인증이 유효하지 않습니다."):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


# Member
class DuplicateEmailError(SongGptException):
    def __init__(self, message: str = "이미 등록된 회원입니다."):
        super().__init__(message, status_code=status.HTTP_409_CONFLICT)


class DuplicateNicknameError(SongGptException):
    def __init__(self, message: str = "이미 사용중인 닉네임입니다."):
        super().__init__(message, status_code=status.HTTP_409_CONFLICT)


class MemberNotFoundError(SongGptException):
    def __init__(self, message: str = "등록되지 않은 회원입니다."):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class PasswordMismatchError(SongGptException):
    def __init__(self, message: str = "비밀번호가 일치하지 않습니다."):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


# Post / Like
class PostNotFoundError(SongGptException):
    def __init__(self, message: str = "존재하지 않는 게시글입니다."):
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class ForbiddenError(SongGptException):
    def __init__(self, message: str = "작성자만 삭제할 수 있습니다."):
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN)


class DuplicateLikeError(SongGptException):
    def __init__(self, message: str = "이미 처리된 좋아요 요청입니다."):
        super().__init__(message, status_code=status.HTTP_409_CONFLICT)


# GPT
class GptApiError(SongGptException):
    def __init__(self, message: str = "GPT 서버 요청에 실패했습니다."):
        super().__init__(message, status_code=status.HTTP_502_BAD_GATEWAY)


UNHANDLED_ERROR_MESSAGE = "서버 내부 오류가 발생했습니다."
VALIDATION_ERROR_MESSAGE = "요청 값이 올바르지 않습니다."


async def songgpt_exception_handler(request: Request, exc: SongGptException) -> JSONResponse:
    logger.warning(
        "Request failed",
        extra={"path": request.url.path, "status_code": exc.status_code, "error": exc.message},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ResponseDto.set_failed(exc.message).model_dump(),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Request validation failed", extra={"path": request.url.path})
    # 어떤 필드가 틀렸는지 data 에 loc / msg 로 전달
    errors = [{"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()]
    return JSONResponse(
        status_code=422,
        content=ResponseDto.set_failed(VALIDATION_ERROR_MESSAGE, errors).model_dump(),
    )


# DB / Redis 장애 등 예상 못한 예외도 envelope 으로 응답
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ResponseDto.set_failed(UNHANDLED_ERROR_MESSAGE).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SongGptException, songgpt_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
