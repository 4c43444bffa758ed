from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import logging
import uuid

from fastapi import Request, Response
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel

from songgpt.core.config import (
    JWT_SECRET_KEY,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    REFRESH_TOKEN_EXPIRE_DAYS,
)

logger = logging.getLogger(__name__)

# header / cookie 이름
ACCESS_TOKEN = "Access_Token"
REFRESH_TOKEN = "Refresh_Token"
BEARER_PREFIX = "Bearer "

# payload type 값
ACCESS = "access"
REFRESH = "refresh"


class TokenDto(BaseModel):
    access_token: str
    refresh_token: str


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _lifetime(token_type: str) -> timedelta:
    if token_type == REFRESH:
        return timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)
    return timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)


def _encode(email: str, token_type: str, issued_at: datetime, expires_at: datetime) -> str:
    payload: dict[str, Any] = {
        "sub": email,
        "type": token_type,
        "jti": uuid.uuid4().hex,
        "iat": int(issued_at.timestamp()),
        "exp": expires_at,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


# access / refresh 공통 생성
def create_token(email: str, token_type: str) -> str:
    now = _now()
    return _encode(email, token_type, now, now + _lifetime(token_type))


def create_all_token(email: str) -> TokenDto:
    return TokenDto(
        access_token=create_token(email, ACCESS),
        refresh_token=create_token(email, REFRESH),
    )


# LOGOUT :: 이미 만료된 token 재발급
def create_expired_token(email: str, token_type: str, expired_at: datetime) -> str:
    return _encode(email, token_type, expired_at, expired_at)


# 사용/만료 검증 (실패 시 JWTError)
def decode_token(token: str, verify_exp: bool = True) -> dict[str, Any]:
    return jwt.decode(
        token,
        JWT_SECRET_KEY,
        algorithms=[JWT_ALGORITHM],
        options={"verify_exp": verify_exp},
    )


def validate_token(token: str) -> bool:
    try:
        decode_token(token)
        return True
    except ExpiredSignatureError:
        logger.info("Expired JWT token")
    except JWTError as e:
        logger.info("Invalid JWT token", extra={"reason": str(e)})
    return False


def get_user_info_from_token(token: str, verify_exp: bool = True) -> str:
    return decode_token(token, verify_exp=verify_exp)["sub"]


# header 값에서 "Bearer " 제거
def strip_bearer(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    if value.startswith(BEARER_PREFIX):
        return value[len(BEARER_PREFIX):] or None
    return None


def resolve_token(request: Request, header_name: str) -> Optional[str]:
    return strip_bearer(request.headers.get(header_name))


def set_header_access_token(response: Response, access_token: str) -> None:
    response.headers[ACCESS_TOKEN] = BEARER_PREFIX + access_token


def set_header_refresh_token(response: Response, refresh_token: str) -> None:
    response.headers[REFRESH_TOKEN] = BEARER_PREFIX + refresh_token


# refresh 는 HttpOnly / Secure 쿠키, path "/"
def set_refresh_cookie(response: Response, refresh_token: str, secure: bool = True) -> None:
    response.set_cookie(
        key=REFRESH_TOKEN,
        value=refresh_token,
        httponly=True,
        secure=secure,
        samesite="lax",
        path="/",
        max_age=int(_lifetime(REFRESH).total_seconds()),
    )


# redis TTL 계산 사용
def exp_seconds_left(payload: dict[str, Any]) -> int:
    exp = payload.get("exp")
    now_ts = int(_now().timestamp())
    if isinstance(exp, (int, float)):
        return max(0, int(exp) - now_ts)
    if isinstance(exp, datetime):
        return max(0, int(exp.timestamp()) - now_ts)
    return 0
