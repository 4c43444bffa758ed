from .member import Member
from .refresh_token import RefreshToken
from .post import Post
from .like import Like

__all__ = ["Member", "RefreshToken", "Post", "Like"]
