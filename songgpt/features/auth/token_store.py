from typing import Optional

from songgpt.core.cache.redis import redis_client


def refresh_key(email: str) -> str:
    return f"refresh:{email}"


# refresh token hash 를 만료시간(TTL) 만큼 보관
def save_refresh(email: str, token_hash: str, ttl_seconds: int) -> None:
    if ttl_seconds <= 0:
        return
    redis_client.set(refresh_key(email), token_hash, ex=ttl_seconds)


def get_refresh(email: str) -> Optional[str]:
    return redis_client.get(refresh_key(email))


def delete_refresh(email: str) -> None:
    redis_client.delete(refresh_key(email))
