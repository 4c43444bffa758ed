from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from songgpt.common.schemas.responses import ResponseDto
from songgpt.core.database import get_db
from songgpt.core.security.deps import get_current_member, get_optional_member
from songgpt.models.member import Member
from . import schemas, service

router = APIRouter(prefix="/post", tags=["post"])


@router.post("", response_model=ResponseDto[schemas.PostResponseDto])
def create_post(payload: schemas.PostRequestDto, db: Session = Depends(get_db), current: Member = Depends(get_current_member)):
    return ResponseDto.set_success("Success", service.create_post(db, current, payload))


@router.get("", response_model=ResponseDto[list[schemas.PostResponseDto]])
def list_posts(db: Session = Depends(get_db), viewer: Optional[Member] = Depends(get_optional_member)):
    return ResponseDto.set_success("Success", service.get_posts(db, viewer))


@router.get("/{post_id}", response_model=ResponseDto[schemas.PostResponseDto])
def get_post(post_id: int, db: Session = Depends(get_db), viewer: Optional[Member] = Depends(get_optional_member)):
    return ResponseDto.set_success("Success", service.get_post(db, post_id, viewer))


@router.delete("/{post_id}", response_model=ResponseDto[None])
def delete_post(post_id: int, db: Session = Depends(get_db), current: Member = Depends(get_current_member)):
    service.delete_post(db, post_id, current)
    return ResponseDto.set_success("Success")
