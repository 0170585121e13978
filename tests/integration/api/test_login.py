import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient, register, login):
    """Login sets both token cookies and echoes the tokens in the body"""
    await register()

    response = await login()

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["username"] == "alice"
    assert data["access_token"]
    assert data["refresh_token"]
    assert response.cookies.get("accessToken") == data["access_token"]
    assert response.cookies.get("refreshToken") == data["refresh_token"]

    set_cookie = ",".join(response.headers.get_list("set-cookie")).lower()
    assert "httponly" in set_cookie
    assert "secure" in set_cookie


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, register, login):
    await register()

    response = await login(password="WrongPassword!")

    assert response.status_code == 401
    data = response.json()
    assert data["error"]["code"] == "INVALID_CREDENTIALS"
    assert "accessToken" not in response.cookies


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient, register, login):
    await register()

    unknown = await login(email="nobody@example.com")
    wrong = await login(password="WrongPassword!")

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


@pytest.mark.asyncio
async def test_current_user_with_bearer_and_cookie(client: AsyncClient, register, login):
    await register()
    access_token = (await login()).json()["access_token"]

    by_cookie = await client.get("/auth/current-user")
    client.cookies.clear()
    by_header = await client.get(
        "/auth/current-user", headers={"Authorization": f"Bearer {access_token}"}
    )

    assert by_cookie.status_code == 200
    assert by_header.status_code == 200
    assert by_cookie.json()["email"] == "alice@example.com"
    assert by_header.json() == by_cookie.json()


@pytest.mark.asyncio
async def test_current_user_without_token(client: AsyncClient):
    response = await client.get("/auth/current-user")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_current_user_rejects_refresh_token(client: AsyncClient, register, login):
    await register()
    refresh_token = (await login()).json()["refresh_token"]
    client.cookies.clear()

    response = await client.get(
        "/auth/current-user", headers={"Authorization": f"Bearer {refresh_token}"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_password_over_72_bytes(client: AsyncClient, register, login):
    await register()

    unknown = await login(email="nobody@example.com", password="é" * 72)
    known = await login(password="é" * 72)

    assert unknown.status_code == known.status_code == 422
