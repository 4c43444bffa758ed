from pydantic import BaseModel, EmailStr

from songgpt.common.schemas.responses import ORMBase


# signup 과 같은 EmailStr 정규화 (domain 소문자)
class LoginRequestDto(BaseModel):
    email: EmailStr
    password: str


class LoginResponseDto(ORMBase):
    email: str
    nickname: str
