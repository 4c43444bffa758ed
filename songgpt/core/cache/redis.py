import redis

from songgpt.core.config import REDIS_HOST, REDIS_PORT, REDIS_DB

# 연결은 첫 명령 실행 시점에 맺어짐
redis_client = redis.Redis(
    host=REDIS_HOST,
    port=REDIS_PORT,
    db=REDIS_DB,
    decode_responses=True,
)
