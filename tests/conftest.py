"""Pytest fixtures for SongGPT tests."""

import os

# songgpt import 전에 설정 (config 는 import 시점에 읽음)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["GPT_API_KEY"] = "test-gpt-key"
os.environ["COOKIE_SECURE"] = "true"

import json

import fakeredis
import httpx
import pytest
import redis
import requests
from requests.adapters import BaseAdapter
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from songgpt.core.database import Base, get_db
from songgpt.features.auth import token_store
from songgpt.features.gpt.client import GptClient, get_gpt_client
from songgpt.main import app
from songgpt import models  # noqa: F401

GPT_URL = "https://gpt.test/v1/chat/completions"
GPT_MODEL_INFO_URL = "https://gpt.test/v1/models/"
GPT_MODEL = "gpt-3.5-turbo"


# =============================================================================
# DB / Redis
# =============================================================================


@pytest.fixture
def db():
    """테이블이 매번 새로 만들어지는 in-memory SQLite session"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """token_store 가 fakeredis 를 사용하도록 교체"""
    server = fakeredis.FakeRedis(decode_responses=True)
    server.flushall()
    monkeypatch.setattr(token_store, "redis_client", server)
    return server


class DownRedis:
    """모든 명령이 ConnectionError 를 내는 redis client"""

    def _fail(self, *args, **kwargs):
        raise redis.ConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    set = get = delete = _fail


@pytest.fixture
def redis_down(monkeypatch, fake_redis):
    """호출 시점부터 token_store 의 redis 를 장애 상태로 교체"""

    def _down() -> None:
        monkeypatch.setattr(token_store, "redis_client", DownRedis())

    return _down


# =============================================================================
# GPT
# =============================================================================


class GptStub(BaseAdapter):
    """requests Session 에 mount 해서 요청을 기록하고 정해진 응답을 돌려준다"""

    def __init__(self):
        super().__init__()
        self.requests: list[requests.PreparedRequest] = []
        self.status_code = 200
        self.body = {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "model": GPT_MODEL,
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": "아이유 - 밤편지를 추천합니다."},
                    "finish_reason": "stop",
                }
            ],
        }
        self.error: Exception | None = None

    def send(self, request, **kwargs):
        self.requests.append(request)
        if self.error is not None:
            raise self.error

        if request.path_url.startswith("/v1/models/"):
            body = {"id": GPT_MODEL, "object": "model"}
        else:
            body = self.body

        response = requests.Response()
        response.status_code = self.status_code
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture
def gpt_stub():
    return GptStub()


@pytest.fixture
def gpt_client(gpt_stub):
    session = requests.Session()
    session.mount("https://gpt.test/", gpt_stub)
    client = GptClient(
        api_key="test-gpt-key",
        model=GPT_MODEL,
        url=GPT_URL,
        model_info_url=GPT_MODEL_INFO_URL,
        session=session,
    )
    yield client
    client.close()


# =============================================================================
# API client
# =============================================================================


@pytest.fixture
def client(db, gpt_client):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_gpt_client] = lambda: gpt_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def signup_and_login(client):
    """회원가입 + 로그인 후 응답을 돌려주는 helper"""

    def _run(email: str = "a@x.com", password: str = "p", nickname: str = "n") -> httpx.Response:
        res = client.post(
            "/member/signup",
            json={"email": email, "password": password, "nickname": nickname},
        )
        assert res.status_code == 200
        res = client.post("/auth/login", json={"email": email, "password": password})
        assert res.status_code == 200
        return res

    return _run
