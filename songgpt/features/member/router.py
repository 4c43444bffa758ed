from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from songgpt.common.schemas.responses import NicknameCheckResponse, ResponseDto
from songgpt.core.database import get_db
from songgpt.core.security.deps import get_current_member
from songgpt.models.member import Member
from . import schemas, service

router = APIRouter(prefix="/member", tags=["member"])


# 일반 유저 계정 생성
@router.post("/signup", response_model=ResponseDto[None])
def signup(payload: schemas.SignupRequestDto, db: Session = Depends(get_db)):
    service.signup(db, payload)
    return ResponseDto.set_success("Success")


# nickname 사용 가능 여부
@router.get("/nickname-check", response_model=ResponseDto[NicknameCheckResponse])
def nickname_check(nickname: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    available = service.is_nickname_available(db, nickname)
    message = "사용 가능한 닉네임입니다." if available else "이미 사용중인 닉네임입니다."
    return ResponseDto.set_success(message, NicknameCheckResponse(available=available, message=message))


# 현재 USER 정보
@router.get("/info", response_model=ResponseDto[schemas.MemberResponseDto])
def get_member(current: Member = Depends(get_current_member)):
    return ResponseDto.set_success("Success", schemas.MemberResponseDto.model_validate(current))
