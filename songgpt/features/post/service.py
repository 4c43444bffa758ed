import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from songgpt.core.exceptions import ForbiddenError
from songgpt.features.like.service import get_post_or_raise, is_liked
from songgpt.features.post.schemas import PostRequestDto, PostResponseDto
from songgpt.models.member import Member
from songgpt.models.post import Post

logger = logging.getLogger(__name__)


def _to_response(post: Post, viewer: Optional[Member]) -> PostResponseDto:
    return PostResponseDto(
        post_id=post.post_id,
        title=post.title,
        content=post.content,
        nickname=post.member.nickname,
        like_count=len(post.likes),
        like_status=is_liked(post, viewer),
        create_post=post.create_post,
    )


# 등록
def create_post(db: Session, member: Member, payload: PostRequestDto) -> PostResponseDto:
    post = Post(title=payload.title, content=payload.content, member_id=member.member_id)
    db.add(post)
    db.commit()
    db.refresh(post)

    logger.info("Post created", extra={"post_id": post.post_id, "member_id": member.member_id})
    return _to_response(post, member)


# 전체 조회 (최신순)
def get_posts(db: Session, viewer: Optional[Member]) -> list[PostResponseDto]:
    posts = db.execute(select(Post).order_by(Post.post_id.desc())).scalars().all()
    return [_to_response(p, viewer) for p in posts]


# 단건 조회
def get_post(db: Session, post_id: int, viewer: Optional[Member]) -> PostResponseDto:
    return _to_response(get_post_or_raise(db, post_id), viewer)


# 삭제 (작성자만)
def delete_post(db: Session, post_id: int, member: Member) -> None:
    post = get_post_or_raise(db, post_id)
    if post.member_id != member.member_id:
        raise ForbiddenError()

    db.delete(post)
    db.commit()
    logger.info("Post deleted", extra={"post_id": post_id, "member_id": member.member_id})
