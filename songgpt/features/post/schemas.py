from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PostRequestDto(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1)


class PostResponseDto(BaseModel):
    post_id: int
    title: str
    content: str
    nickname: str
    like_count: int
    like_status: bool
    create_post: Optional[datetime] = None
