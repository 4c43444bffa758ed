import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from songgpt.core.exceptions import DuplicateEmailError, DuplicateNicknameError
from songgpt.core.security.password import hash_password
from songgpt.features.member.schemas import SignupRequestDto
from songgpt.models.member import Member

logger = logging.getLogger(__name__)


def is_email_registered(db: Session, email: str) -> bool:
    exists = db.execute(
        select(Member.member_id).where(Member.email == email)
    ).scalar_one_or_none()

    return exists is not None


# 회원가입 :: email / nickname 중복 체크 후 등록
def signup(db: Session, payload: SignupRequestDto) -> Member:
    if is_email_registered(db, payload.email):
        raise DuplicateEmailError()

    if not is_nickname_available(db, payload.nickname):
        raise DuplicateNicknameError()

    member = Member(
        email=payload.email,
        password=hash_password(payload.password),
        nickname=payload.nickname,
    )
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        # 동시 가입으로 unique 충돌 :: rollback 후 어느 컬럼인지 다시 조회
        db.rollback()
        if is_email_registered(db, payload.email):
            raise DuplicateEmailError()
        raise DuplicateNicknameError()
    db.refresh(member)

    logger.info("Member signed up", extra={"member_id": member.member_id})
    return member


# NickName 체크 로직 // True / False
def is_nickname_available(db: Session, nickname: str) -> bool:
    exists = db.execute(
        select(Member.member_id).where(Member.nickname == nickname)
    ).scalar_one_or_none()

    return exists is None
