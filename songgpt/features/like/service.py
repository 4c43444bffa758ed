import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from songgpt.core.exceptions import DuplicateLikeError, PostNotFoundError
from songgpt.features.like.schemas import LikeResponseDto
from songgpt.models.like import Like
from songgpt.models.member import Member
from songgpt.models.post import Post

logger = logging.getLogger(__name__)


def get_post_or_raise(db: Session, post_id: int) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise PostNotFoundError()
    return post


def find_like(post: Post, member: Optional[Member]) -> Optional[Like]:
    if member is None:
        return None
    return next((like for like in post.likes if like.member_id == member.member_id), None)


def is_liked(post: Post, member: Optional[Member]) -> bool:
    return find_like(post, member) is not None


# 좋아요 조회 (비로그인 시 like_status False)
def get_like(db: Session, post_id: int, viewer: Optional[Member]) -> LikeResponseDto:
    post = get_post_or_raise(db, post_id)
    return LikeResponseDto.of(post, is_liked(post, viewer))


# 좋아요 toggle :: 없으면 추가, 있으면 취소
def toggle_like(db: Session, post_id: int, member: Member) -> LikeResponseDto:
    post = get_post_or_raise(db, post_id)

    like = find_like(post, member)
    if like is None:
        post.likes.append(Like(member_id=member.member_id))
        like_status = True
    else:
        post.likes.remove(like)  # delete-orphan
        like_status = False
    try:
        db.commit()
    except IntegrityError:
        # 같은 회원의 동시 요청으로 unique(post_id, member_id) 충돌
        db.rollback()
        raise DuplicateLikeError()
    db.refresh(post)

    logger.info(
        "Like toggled",
        extra={"post_id": post_id, "member_id": member.member_id, "like_status": like_status},
    )
    return LikeResponseDto.of(post, like_status)
