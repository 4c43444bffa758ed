from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import logging

from jose import JWTError
from redis.exceptions import RedisError
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from songgpt.core.exceptions import (
    InvalidTokenError,
    MemberNotFoundError,
    PasswordMismatchError,
    TokenNotFoundError,
    UnauthenticatedError,
)
from songgpt.core.security.jwt import (
    ACCESS,
    REFRESH,
    TokenDto,
    create_all_token,
    create_expired_token,
    decode_token,
    exp_seconds_left,
    validate_token,
)
from songgpt.core.security.password import verify_password
from songgpt.features.auth import token_store
from songgpt.models.member import Member
from songgpt.models.refresh_token import RefreshToken

logger = logging.getLogger(__name__)


# token hash 저장 / 비교
def _hash(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _exp_to_dt(exp) -> datetime:
    if isinstance(exp, (int, float)):
        return datetime.fromtimestamp(exp, tz=timezone.utc)
    return exp


def _find_refresh_row(db: Session, email: str) -> Optional[RefreshToken]:
    return db.execute(
        select(RefreshToken).where(RefreshToken.email == email)
    ).scalar_one_or_none()


# insert / update 있으면 수정 없으면 생성 (email 당 1 row)
def _upsert_refresh(db: Session, email: str, refresh_token: str) -> None:
    payload = decode_token(refresh_token)
    token_hash = _hash(refresh_token)
    expires_at = _exp_to_dt(payload["exp"])

    row = _find_refresh_row(db, email)
    if row:
        row.update_token(token_hash, expires_at)
    else:
        db.add(RefreshToken(email=email, refresh_token=token_hash, expires_at=expires_at))

    # redis 저장 성공 후에만 commit
    try:
        token_store.save_refresh(email, token_hash, exp_seconds_left(payload))
    except RedisError:
        db.rollback()
        logger.error("Refresh token mirror write failed", extra={"email": email})
        raise
    db.commit()


# db / redis refresh 모두 제거
def _revoke_refresh(db: Session, email: str) -> None:
    db.execute(delete(RefreshToken).where(RefreshToken.email == email))
    db.commit()
    token_store.delete_refresh(email)


def _token_null_check(token: Optional[str]) -> str:
    if token is None:
        raise TokenNotFoundError()
    return token


def _token_validate_check(token: str) -> None:
    if not validate_token(token):
        raise InvalidTokenError()


# 인증
def authenticate_member(db: Session, email: str, password: str) -> Member:
    member = db.execute(select(Member).where(Member.email == email)).scalar_one_or_none()
    if member is None:
        raise MemberNotFoundError()
    if not verify_password(password, member.password):
        raise PasswordMismatchError()
    return member


# LOGIN :: token 발급 + refresh upsert
def login(db: Session, email: str, password: str) -> tuple[Member, TokenDto]:
    member = authenticate_member(db, email, password)

    tokens = create_all_token(member.email)
    _upsert_refresh(db, member.email, tokens.refresh_token)

    logger.info("Member logged in", extra={"member_id": member.member_id})
    return member, tokens


# refresh token 검증 :: 서명/만료 + type + 저장된 token 일치
def refresh_token_validation(db: Session, refresh_token: str) -> str:
    try:
        payload = decode_token(refresh_token)
    except JWTError:
        raise InvalidTokenError()
    if payload.get("type") != REFRESH:
        raise InvalidTokenError()

    email = payload["sub"]
    token_hash = _hash(refresh_token)

    row = _find_refresh_row(db, email)
    saved_hash = token_store.get_refresh(email)
    if row is None or row.refresh_token != token_hash or saved_hash != token_hash:
        # 서명은 유효한데 저장된 refresh와 다름 -> 탈취/이전 token 재사용 가능성
        logger.warning("Refresh token mismatch, revoking session", extra={"email": email})
        _revoke_refresh(db, email)
        raise InvalidTokenError()
    return email


# REFRESH :: access + refresh 재발급 (rotate)
def refresh_rotate_tokens(db: Session, access_token: Optional[str], refresh_token: Optional[str]) -> TokenDto:
    access_token = _token_null_check(access_token)
    refresh_token = _token_null_check(refresh_token)

    email = refresh_token_validation(db, refresh_token)

    # access 는 만료 여부 무시, 서명 + subject 만 확인
    try:
        access_payload = decode_token(access_token, verify_exp=False)
    except JWTError:
        raise InvalidTokenError()
    if access_payload.get("type") != ACCESS or access_payload.get("sub") != email:
        raise InvalidTokenError()

    tokens = create_all_token(email)
    _upsert_refresh(db, email, tokens.refresh_token)

    logger.info("Tokens rotated", extra={"email": email})
    return tokens


# LOGOUT :: 만료된 access 재발급 + refresh 제거
def logout(db: Session, access_token: Optional[str]) -> str:
    access_token = _token_null_check(access_token)
    _token_validate_check(access_token)

    payload = decode_token(access_token)
    if payload.get("type") != ACCESS:
        raise InvalidTokenError()
    email = payload["sub"]

    member = db.execute(select(Member).where(Member.email == email)).scalar_one_or_none()
    if member is None:
        raise UnauthenticatedError()

    # 만료시간을 기존 token 발급시간 이전으로 설정
    issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
    expired_token = create_expired_token(email, ACCESS, issued_at - timedelta(seconds=1))

    _revoke_refresh(db, email)

    logger.info("Member logged out", extra={"member_id": member.member_id})
    return expired_token
