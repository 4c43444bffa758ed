from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from songgpt.common.schemas.responses import ResponseDto
from songgpt.core.config import COOKIE_SECURE
from songgpt.core.database import get_db
from songgpt.core.security import jwt
from songgpt.features.auth import service, schemas

router = APIRouter(prefix="/auth", tags=["auth"])


# LOGIN
@router.post("/login", response_model=ResponseDto[schemas.LoginResponseDto])
def login(payload: schemas.LoginRequestDto, response: Response, db: Session = Depends(get_db)):
    member, tokens = service.login(db, email=payload.email, password=payload.password)

    # 응답 헤더에 access, refresh token 추가 + refresh는 HttpOnly 쿠키
    jwt.set_header_access_token(response, tokens.access_token)
    jwt.set_header_refresh_token(response, tokens.refresh_token)
    jwt.set_refresh_cookie(response, tokens.refresh_token, secure=COOKIE_SECURE)

    return ResponseDto.set_success("Success", schemas.LoginResponseDto.model_validate(member))


# REFRESH TOKEN 재발급
@router.post("/refresh", response_model=ResponseDto[None])
def refresh(request: Request, response: Response, db: Session = Depends(get_db)):
    access_token = jwt.resolve_token(request, jwt.ACCESS_TOKEN)

    # cookie 우선, 없으면 header
    refresh_token = request.cookies.get(jwt.REFRESH_TOKEN) or jwt.resolve_token(request, jwt.REFRESH_TOKEN)

    tokens = service.refresh_rotate_tokens(db, access_token, refresh_token)

    jwt.set_header_access_token(response, tokens.access_token)
    jwt.set_refresh_cookie(response, tokens.refresh_token, secure=COOKIE_SECURE)
    return ResponseDto.set_success("Success")


# LOGOUT
@router.post("/logout", response_model=ResponseDto[None])
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    access_token = jwt.resolve_token(request, jwt.ACCESS_TOKEN)
    expired_token = service.logout(db, access_token)

    # 만료된 access 전달, refresh 쿠키 삭제
    jwt.set_header_access_token(response, expired_token)
    response.delete_cookie(jwt.REFRESH_TOKEN, path="/")
    return ResponseDto.set_success("Success")
