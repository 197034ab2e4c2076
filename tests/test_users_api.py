"""사용자 API 테스트 — 회원가입 및 /me 엔드포인트.

Users API tests — Registration and current user profile.
"""

from httpx import AsyncClient

from tests.conftest import ALICE_PASSWORD, auth_header

USERS = "/api/v1/users"


class TestRegister:
    """회원가입 테스트."""

    async def test_register_success(self, client: AsyncClient):
        res = await client.post(f"{USERS}/register", json={
            "fullName": "Bob Builder",
            "email": "Bob@Example.com",
            "username": "BobB",
            "password": "bob-secret",
            "avatar": "https://cdn.example.com/bob.png",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["username"] == "bobb"
        assert data["email"] == "bob@example.com"
        assert data["fullName"] == "Bob Builder"
        assert data["avatar"] == "https://cdn.example.com/bob.png"
        assert "password" not in data and "passwordHash" not in data
        assert "refreshToken" not in data

        login = await client.post("/api/v1/session", json={"identifier": "bobb", "secret": "bob-secret"})
        assert login.status_code == 200

    async def test_register_duplicate_username(self, client: AsyncClient, alice):
        res = await client.post(f"{USERS}/register", json={
            "fullName": "Another Alice",
            "email": "another@example.com",
            "username": "alice",
            "password": "pw123456",
        })
        assert res.status_code == 409

    async def test_register_duplicate_email(self, client: AsyncClient, alice):
        res = await client.post(f"{USERS}/register", json={
            "fullName": "Another Alice",
            "email": "ALICE@example.com",
            "username": "alice2",
            "password": "pw123456",
        })
        assert res.status_code == 409

    async def test_register_blank_field(self, client: AsyncClient):
        res = await client.post(f"{USERS}/register", json={
            "fullName": "  ",
            "email": "x@example.com",
            "username": "x",
            "password": "pw",
        })
        assert res.status_code == 422

    async def test_register_username_with_at_sign(self, client: AsyncClient):
        res = await client.post(f"{USERS}/register", json={
            "fullName": "Mallory",
            "email": "m@example.com",
            "username": "alice@example.com",
            "password": "pw",
        })
        assert res.status_code == 422

    async def test_register_password_too_long(self, client: AsyncClient):
        res = await client.post(f"{USERS}/register", json={
            "fullName": "Long Pw",
            "email": "long@example.com",
            "username": "longpw",
            "password": "x" * 73,
        })
        assert res.status_code == 400


class TestGetMe:
    """현재 사용자 프로필 조회 테스트."""

    async def test_get_me_success(self, client: AsyncClient, alice):
        tokens = (await client.post("/api/v1/session", json={
            "identifier": "alice", "secret": ALICE_PASSWORD,
        })).json()
        res = await client.get(f"{USERS}/me", headers=auth_header(tokens["accessToken"]))
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == str(alice.id)
        assert data["username"] == "alice"

    async def test_get_me_no_token(self, client: AsyncClient):
        res = await client.get(f"{USERS}/me")
        assert res.status_code == 401
        assert res.headers["x-auth-error"] == "unauthenticated"

    async def test_get_me_invalid_token(self, client: AsyncClient):
        res = await client.get(f"{USERS}/me", headers=auth_header("invalid.jwt.token"))
        assert res.status_code == 401
        assert res.headers["x-auth-error"] == "invalid_token"
