"""Tests for tasks and comments, authorized through the parent project."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.helpers import create_project, create_task, register_user

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
async def owner(client: AsyncClient) -> dict:
    return await register_user(client, username="owner")


@pytest.fixture
async def member(client: AsyncClient) -> dict:
    return await register_user(client, username="member")


@pytest.fixture
async def stranger(client: AsyncClient) -> dict:
    return await register_user(client, username="stranger")


@pytest.fixture
async def project(client: AsyncClient, owner: dict, member: dict) -> dict:
    return await create_project(client, owner["headers"], members=[member["id"]])


@pytest.fixture
async def task(client: AsyncClient, owner: dict, project: dict) -> dict:
    return await create_task(client, owner["headers"], project["id"], title="Draft roadmap")


class TestCreateTask:
    async def test_member_creates_with_defaults(
        self, client: AsyncClient, member: dict, project: dict
    ) -> None:
        response = await client.post(
            "/api/v1/tasks",
            headers=member["headers"],
            json={"title": "Draft", "projectId": project["id"], "dueDate": "2024-06-01T09:00:00"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["project"] == {"id": project["id"], "name": project["name"]}
        assert data["status"] == "pending"
        assert data["priority"] == "medium"
        assert data["createdBy"] == {
            "id": member["id"],
            "username": "member",
            "email": "member@example.com",
        }
        assert data["assignedTo"] is None
        assert data["comments"] == []
        assert data["dueDate"] == "2024-06-01T09:00:00"

    async def test_stranger_forbidden(
        self, client: AsyncClient, stranger: dict, project: dict
    ) -> None:
        response = await client.post(
            "/api/v1/tasks",
            headers=stranger["headers"],
            json={"title": "Sneak", "projectId": project["id"]},
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to create tasks in this project"

    async def test_unknown_project(self, client: AsyncClient, owner: dict) -> None:
        response = await client.post(
            "/api/v1/tasks",
            headers=owner["headers"],
            json={"title": "Orphan", "projectId": str(uuid4())},
        )
        assert response.status_code == 404

    async def test_missing_title(self, client: AsyncClient, owner: dict, project: dict) -> None:
        response = await client.post(
            "/api/v1/tasks", headers=owner["headers"], json={"projectId": project["id"]}
        )
        assert response.status_code == 400

    async def test_unknown_assignee(self, client: AsyncClient, owner: dict, project: dict) -> None:
        response = await client.post(
            "/api/v1/tasks",
            headers=owner["headers"],
            json={"title": "T", "projectId": project["id"], "assignedTo": str(uuid4())},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Assigned user not found"


class TestReadTasks:
    async def test_member_reads(
        self, client: AsyncClient, member: dict, task: dict
    ) -> None:
        response = await client.get(f"/api/v1/tasks/{task['id']}", headers=member["headers"])

        assert response.status_code == 200
        assert response.json()["title"] == "Draft roadmap"

    async def test_stranger_forbidden(
        self, client: AsyncClient, stranger: dict, task: dict
    ) -> None:
        response = await client.get(f"/api/v1/tasks/{task['id']}", headers=stranger["headers"])
        assert response.status_code == 403

    async def test_unknown_task(self, client: AsyncClient, owner: dict) -> None:
        response = await client.get(f"/api/v1/tasks/{uuid4()}", headers=owner["headers"])

        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found"

    async def test_malformed_task_id(self, client: AsyncClient, owner: dict) -> None:
        response = await client.get("/api/v1/tasks/abc", headers=owner["headers"])

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid task ID format"

    async def test_project_listing_newest_first(
        self, client: AsyncClient, owner: dict, member: dict, project: dict
    ) -> None:
        first = await create_task(client, owner["headers"], project["id"])
        second = await create_task(client, member["headers"], project["id"])
        third = await create_task(client, owner["headers"], project["id"])

        response = await client.get(
            f"/api/v1/tasks/project/{project['id']}", headers=member["headers"]
        )

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [third["id"], second["id"], first["id"]]

    async def test_project_listing_stranger_forbidden(
        self, client: AsyncClient, stranger: dict, project: dict
    ) -> None:
        response = await client.get(
            f"/api/v1/tasks/project/{project['id']}", headers=stranger["headers"]
        )
        assert response.status_code == 403

    async def test_my_tasks(
        self, client: AsyncClient, owner: dict, member: dict, project: dict
    ) -> None:
        other_project = await create_project(client, owner["headers"], members=[member["id"]])
        older = await create_task(client, owner["headers"], project["id"], assignedTo=member["id"])
        await create_task(client, owner["headers"], project["id"], assignedTo=owner["id"])
        newer = await create_task(
            client, owner["headers"], other_project["id"], assignedTo=member["id"]
        )

        response = await client.get("/api/v1/tasks/my-tasks", headers=member["headers"])

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [newer["id"], older["id"]]


class TestUpdateTask:
    async def test_member_updates_with_merge_patch(
        self, client: AsyncClient, member: dict, task: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/tasks/{task['id']}",
            headers=member["headers"],
            json={"title": "", "status": "in_progress", "priority": "high"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Draft roadmap"
        assert data["status"] == "in_progress"
        assert data["priority"] == "high"

    async def test_blank_enum_and_due_date_keep_current_values(
        self, client: AsyncClient, owner: dict, project: dict
    ) -> None:
        created = await create_task(
            client,
            owner["headers"],
            project["id"],
            priority="low",
            dueDate="2024-06-01T09:00:00",
        )

        response = await client.put(
            f"/api/v1/tasks/{created['id']}",
            headers=owner["headers"],
            json={"title": "New", "status": "", "priority": "", "dueDate": "", "assignedTo": ""},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "New"
        assert data["status"] == "pending"
        assert data["priority"] == "low"
        assert data["dueDate"] == "2024-06-01T09:00:00"
        assert data["assignedTo"] is None

    async def test_reassign(
        self, client: AsyncClient, owner: dict, member: dict, task: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/tasks/{task['id']}",
            headers=owner["headers"],
            json={"assignedTo": member["id"]},
        )
        assigned = response.json()["assignedTo"]
        assert assigned["id"] == member["id"]
        assert assigned["username"] == "member"

    async def test_stranger_forbidden(
        self, client: AsyncClient, stranger: dict, task: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/tasks/{task['id']}", headers=stranger["headers"], json={"title": "Mine"}
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to update this task"

    async def test_invalid_status(self, client: AsyncClient, owner: dict, task: dict) -> None:
        response = await client.put(
            f"/api/v1/tasks/{task['id']}", headers=owner["headers"], json={"status": "blocked"}
        )
        assert response.status_code == 400


class TestDeleteTask:
    async def test_member_cannot_delete(
        self, client: AsyncClient, member: dict, task: dict
    ) -> None:
        response = await client.delete(f"/api/v1/tasks/{task['id']}", headers=member["headers"])

        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to delete this task"

    async def test_owner_deletes_task_created_by_member(
        self, client: AsyncClient, owner: dict, member: dict, project: dict
    ) -> None:
        created = await create_task(client, member["headers"], project["id"])

        response = await client.delete(f"/api/v1/tasks/{created['id']}", headers=owner["headers"])
        assert response.status_code == 204

        gone = await client.get(f"/api/v1/tasks/{created['id']}", headers=owner["headers"])
        assert gone.status_code == 404


class TestComments:
    async def test_comments_keep_append_order(
        self, client: AsyncClient, owner: dict, member: dict, task: dict
    ) -> None:
        for user, text in ((member, "first"), (owner, "second"), (member, "third")):
            response = await client.post(
                f"/api/v1/tasks/{task['id']}/comments",
                headers=user["headers"],
                json={"text": text},
            )
            assert response.status_code == 200

        comments = response.json()["comments"]
        assert [c["text"] for c in comments] == ["first", "second", "third"]
        authors = [c["author"]["username"] for c in comments]
        assert authors == ["member", "owner", "member"]
        assert all(c["createdAt"] for c in comments)

        fetched = await client.get(f"/api/v1/tasks/{task['id']}", headers=owner["headers"])
        assert [c["text"] for c in fetched.json()["comments"]] == ["first", "second", "third"]

    async def test_stranger_cannot_comment(
        self, client: AsyncClient, stranger: dict, task: dict
    ) -> None:
        response = await client.post(
            f"/api/v1/tasks/{task['id']}/comments",
            headers=stranger["headers"],
            json={"text": "hi"},
        )
        assert response.status_code == 403

    async def test_empty_comment_rejected(
        self, client: AsyncClient, owner: dict, task: dict
    ) -> None:
        response = await client.post(
            f"/api/v1/tasks/{task['id']}/comments", headers=owner["headers"], json={"text": ""}
        )
        assert response.status_code == 400
