"""Test helper functions for common API flows."""

from uuid import uuid4

from httpx import AsyncClient

from tests.factories import DEFAULT_TEST_PASSWORD


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register_user(
    client: AsyncClient,
    username: str | None = None,
    password: str = DEFAULT_TEST_PASSWORD,
    **overrides,
) -> dict:
    """Register a user through the API.

    Returns:
        The response body plus ``headers`` ready for authenticated calls.
    """
    username = username or f"user_{uuid4().hex[-8:]}"
    payload = {
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
        "firstName": "Test",
        "lastName": "User",
        **overrides,
    }
    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201, response.text
    data = response.json()
    data["headers"] = auth_headers(data["token"])
    return data


async def login(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    """Log in and return the authorization header."""
    response = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return auth_headers(response.json()["token"])


async def create_project(client: AsyncClient, headers: dict[str, str], **fields) -> dict:
    payload = {"name": f"Project {uuid4().hex[-6:]}", **fields}
    response = await client.post("/api/v1/projects", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def create_task(
    client: AsyncClient, headers: dict[str, str], project_id: str, **fields
) -> dict:
    payload = {"title": f"Task {uuid4().hex[-6:]}", "projectId": project_id, **fields}
    response = await client.post("/api/v1/tasks", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def member_ids(project: dict) -> list[str]:
    """Ids of the members embedded in a project response."""
    return [m["id"] for m in project["members"]]
