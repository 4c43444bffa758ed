from typing import Optional

from fastapi import Depends, Request
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.orm import Session

from songgpt.core.database import get_db
from songgpt.core.exceptions import InvalidTokenError, TokenNotFoundError
from songgpt.core.security.jwt import ACCESS, ACCESS_TOKEN, decode_token, resolve_token
from songgpt.models.member import Member


def _load_member(db: Session, token: str) -> Member:
    try:
        payload = decode_token(token)
    except JWTError:
        raise InvalidTokenError()
    if payload.get("type") != ACCESS:
        raise InvalidTokenError()

    member = db.execute(
        select(Member).where(Member.email == payload.get("sub"))
    ).scalar_one_or_none()
    if member is None:
        raise InvalidTokenError()
    return member


# 현재 user 인증 관련 로직 (Access_Token: Bearer <token>)
def get_current_member(request: Request, db: Session = Depends(get_db)) -> Member:
    token = resolve_token(request, ACCESS_TOKEN)
    if token is None:
        raise TokenNotFoundError()
    return _load_member(db, token)


# 조회 API :: 비로그인 허용 (token 없거나 유효하지 않으면 None)
def get_optional_member(request: Request, db: Session = Depends(get_db)) -> Optional[Member]:
    token = resolve_token(request, ACCESS_TOKEN)
    if token is None:
        return None
    try:
        return _load_member(db, token)
    except InvalidTokenError:
        return None
