from fastapi import APIRouter

from .features.auth.router import router as auth_router
from .features.member.router import router as member_router
from .features.gpt.router import router as gpt_router
from .features.post.router import router as post_router
from .features.like.router import router as like_router

# router 전체 관리
api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(member_router)
api_router.include_router(gpt_router)
api_router.include_router(post_router)
api_router.include_router(like_router)
