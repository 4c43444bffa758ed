import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.middleware.cors import CORSMiddleware

from .api_router import api_router
from .core import config
from .core.database import init_db
from .core.exceptions import register_exception_handlers
from .core.logging import setup_logging
from .core.security.jwt import ACCESS_TOKEN, REFRESH_TOKEN
from .features.gpt.client import close_gpt_client

setup_logging(config.LOG_LEVEL, config.LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.AUTO_CREATE_TABLES:
        init_db()
        logger.info("Database tables created")
    yield
    # 재사용 중인 GPT http client 정리
    close_gpt_client()


app = FastAPI(title="SongGPT API", lifespan=lifespan)


class ForceUTF8Middleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        ct = response.headers.get("content-type", "")
        # JSON 응답에 charset이 없으면 강제로 붙임
        if ct.startswith("application/json") and "charset=" not in ct:
            response.headers["content-type"] = "application/json; charset=utf-8"
        return response


app.add_middleware(ForceUTF8Middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,  # 쿠키 전송 허용
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[ACCESS_TOKEN, REFRESH_TOKEN],  # front 에서 token header 읽기
)

register_exception_handlers(app)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/favicon.ico", include_in_schema=False)
def favicon():
    return Response(status_code=204)


app.include_router(api_router)
