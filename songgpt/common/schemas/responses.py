from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

# 공통 schema

T = TypeVar("T")


# orm 객체 -> schema 변환용
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# 공통 응답 envelope { result, message, data }
class ResponseDto(BaseModel, Generic[T]):
    result: bool
    message: str
    data: Optional[T] = None

    @classmethod
    def set_success(cls, message: str = "Success", data=None) -> "ResponseDto":
        return cls(result=True, message=message, data=data)

    @classmethod
    def set_failed(cls, message: str, data=None) -> "ResponseDto":
        return cls(result=False, message=message, data=data)


# nickname 조회 / 체크
class NicknameCheckResponse(BaseModel):
    available: bool
    message: str
