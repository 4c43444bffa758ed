from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from songgpt.common.schemas.responses import ResponseDto
from songgpt.core.database import get_db
from songgpt.core.security.deps import get_current_member, get_optional_member
from songgpt.models.member import Member
from . import schemas, service

router = APIRouter(prefix="/like", tags=["like"])


@router.post("/{post_id}", response_model=ResponseDto[schemas.LikeResponseDto])
def toggle_like(post_id: int, db: Session = Depends(get_db), current: Member = Depends(get_current_member)):
    return ResponseDto.set_success("Success", service.toggle_like(db, post_id, current))


@router.get("/{post_id}", response_model=ResponseDto[schemas.LikeResponseDto])
def get_like(post_id: int, db: Session = Depends(get_db), viewer: Optional[Member] = Depends(get_optional_member)):
    return ResponseDto.set_success("Success", service.get_like(db, post_id, viewer))
