"""게시글 / 좋아요 API 테스트"""

import pytest

from songgpt.core.security import jwt
from songgpt.features.like import service as like_service


@pytest.fixture
def auth(signup_and_login):
    login = signup_and_login()
    return {jwt.ACCESS_TOKEN: login.headers[jwt.ACCESS_TOKEN]}


@pytest.fixture
def other_auth(signup_and_login):
    login = signup_and_login(email="b@x.com", password="p", nickname="m")
    return {jwt.ACCESS_TOKEN: login.headers[jwt.ACCESS_TOKEN]}


@pytest.fixture
def post_id(client, auth):
    res = client.post("/post", json={"title": "오늘의 노래", "content": "밤편지"}, headers=auth)
    assert res.status_code == 200
    return res.json()["data"]["post_id"]


class TestPost:
    def test_create_requires_token(self, client) -> None:
        res = client.post("/post", json={"title": "t", "content": "c"})
        assert res.status_code == 401

    def test_create_and_get(self, client, auth, post_id) -> None:
        data = client.get(f"/post/{post_id}").json()["data"]

        assert data["title"] == "오늘의 노래"
        assert data["nickname"] == "n"
        assert data["like_count"] == 0
        assert data["like_status"] is False

    def test_list_newest_first(self, client, auth, post_id) -> None:
        client.post("/post", json={"title": "두번째", "content": "c"}, headers=auth)

        titles = [p["title"] for p in client.get("/post").json()["data"]]
        assert titles == ["두번째", "오늘의 노래"]

    def test_unknown_post(self, client) -> None:
        res = client.get("/post/999")
        assert res.status_code == 404
        assert res.json()["message"] == "존재하지 않는 게시글입니다."

    def test_delete_by_other_member_forbidden(self, client, post_id, other_auth) -> None:
        res = client.delete(f"/post/{post_id}", headers=other_auth)
        assert res.status_code == 403

    def test_delete_by_owner(self, client, auth, post_id) -> None:
        client.post(f"/like/{post_id}", headers=auth)

        res = client.delete(f"/post/{post_id}", headers=auth)
        assert res.status_code == 200
        assert client.get(f"/post/{post_id}").status_code == 404


class TestLike:
    def test_toggle_like(self, client, auth, post_id) -> None:
        res = client.post(f"/like/{post_id}", headers=auth)
        assert res.json()["data"] == {"like_status": True, "like_count": 1}

        res = client.post(f"/like/{post_id}", headers=auth)
        assert res.json()["data"] == {"like_status": False, "like_count": 0}

    def test_like_status_per_viewer(self, client, auth, other_auth, post_id) -> None:
        client.post(f"/like/{post_id}", headers=auth)

        mine = client.get(f"/like/{post_id}", headers=auth).json()["data"]
        theirs = client.get(f"/like/{post_id}", headers=other_auth).json()["data"]
        anonymous = client.get(f"/like/{post_id}").json()["data"]

        assert mine == {"like_status": True, "like_count": 1}
        assert theirs == {"like_status": False, "like_count": 1}
        assert anonymous == {"like_status": False, "like_count": 1}

    def test_two_members_like(self, client, auth, other_auth, post_id) -> None:
        client.post(f"/like/{post_id}", headers=auth)
        client.post(f"/like/{post_id}", headers=other_auth)

        data = client.get(f"/post/{post_id}", headers=auth).json()["data"]
        assert data["like_count"] == 2
        assert data["like_status"] is True

    def test_like_requires_token(self, client, post_id) -> None:
        assert client.post(f"/like/{post_id}").status_code == 401

    def test_like_unknown_post(self, client, auth) -> None:
        assert client.post("/like/999", headers=auth).status_code == 404

    def test_concurrent_duplicate_like_is_conflict(self, client, auth, post_id, monkeypatch) -> None:
        """다른 요청이 먼저 좋아요를 넣은 상황 :: unique 충돌은 409 envelope"""
        client.post(f"/like/{post_id}", headers=auth)
        monkeypatch.setattr(like_service, "find_like", lambda post, member: None)

        res = client.post(f"/like/{post_id}", headers=auth)

        assert res.status_code == 409
        assert res.json() == {"result": False, "message": "이미 처리된 좋아요 요청입니다.", "data": None}
        assert client.get(f"/like/{post_id}").json()["data"]["like_count"] == 1
