from pydantic import BaseModel, EmailStr, Field

from songgpt.common.schemas.responses import ORMBase


class SignupRequestDto(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)  # bcrypt 72 bytes 제한
    nickname: str = Field(min_length=1, max_length=50)


class MemberResponseDto(ORMBase):
    member_id: int
    email: str
    nickname: str
