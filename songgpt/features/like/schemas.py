from pydantic import BaseModel

from songgpt.models.post import Post


class LikeResponseDto(BaseModel):
    like_status: bool
    like_count: int

    @classmethod
    def of(cls, post: Post, like_status: bool) -> "LikeResponseDto":
        return cls(like_status=like_status, like_count=len(post.likes))
