"""
Membership API - HTTP Endpoint Tests
====================================

What:  Drives the FastAPI app through HTTPX (ASGITransport) against an
       in-memory SQLite database.

What we test:
    ✅ Liveness and health endpoints
    ✅ Member lifecycle: POST → GET → PUT → DELETE → GET 404
    ✅ 404 on unknown ids (whatever the edit body), 400 on type violations
    ✅ 400 for values the columns cannot hold, 500 without internals
    ✅ Search query parameter and camelCase wire names
    ✅ NULL_ON_MISSING compatibility mode
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from membership_api.database import get_db_session


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestLiveness:
    """Tests for GET /, GET /health and the request id header."""

    @pytest.mark.asyncio
    async def test_root(self, test_client):
        """GET / answers with a plain-text liveness line."""
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.text == "Membership API is running"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        """GET /health reports a connected database."""
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        """A client-supplied X-Request-ID is echoed back."""
        response = await test_client.get("/members", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"


class TestMemberEndpoints:
    """Tests for the /members routes."""

    @pytest.mark.asyncio
    async def test_member_lifecycle(self, test_client, sample_member_payload):
        """Create, read, edit and delete a member, then get a 404."""
        created = await test_client.post("/members", json=sample_member_payload)
        assert created.status_code == 200
        member = created.json()
        assert member["id"]
        for field, value in sample_member_payload.items():
            assert member[field] == value

        fetched = await test_client.get(f"/members/{member['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == member

        edited = await test_client.put(f"/members/{member['id']}/edit", json={"age": 31})
        assert edited.status_code == 200
        assert edited.json()["age"] == 31
        assert edited.json()["name"] == "Ada"
        assert edited.json()["surname"] == "Lovelace"

        deleted = await test_client.delete(f"/members/{member['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {**member, "age": 31}

        gone = await test_client.get(f"/members/{member['id']}")
        assert gone.status_code == 404
        assert "message" in gone.json()

    @pytest.mark.asyncio
    async def test_edit_unknown_member(self, test_client):
        """Editing an unknown member is a 404 naming the id."""
        response = await test_client.put("/members/does-not-exist/edit", json={"name": "X"})
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert "does-not-exist" in body["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"age": "abc"}, {"age": [1]}, {}])
    async def test_edit_unknown_member_any_body(self, test_client, body):
        """Editing an unknown member is a 404 even when the body is invalid."""
        response = await test_client.put("/members/does-not-exist/edit", json=body)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_delete_unknown_member(self, test_client):
        """Deleting an unknown member is a 404."""
        response = await test_client.delete("/members/does-not-exist")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_age_is_400(self, test_client, sample_member_payload):
        """A non-numeric age is a 400 pointing at the age field."""
        response = await test_client.post("/members", json={**sample_member_payload, "age": "thirty"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"][0]["loc"][-1] == "age"

    @pytest.mark.asyncio
    async def test_oversized_age_is_400(self, test_client):
        """An age too large for the store is a 400, not a 500."""
        response = await test_client.post("/members", json={"name": "Big", "age": 2**70})
        assert response.status_code == 400
        assert response.json()["details"][0]["loc"][-1] == "age"
        assert (await test_client.get("/members")).json() == []

    @pytest.mark.asyncio
    async def test_overlong_email_is_400(self, test_client):
        """An email longer than its column is a 400."""
        response = await test_client.post("/members", json={"email": "a" * 300 + "@x.com"})
        assert response.status_code == 400
        assert response.json()["details"][0]["loc"][-1] == "email"

    @pytest.mark.asyncio
    async def test_invalid_update_is_400(self, test_client, sample_member_payload):
        """An invalid field on an existing member is a 400."""
        member = (await test_client.post("/members", json=sample_member_payload)).json()
        response = await test_client.put(f"/members/{member['id']}/edit", json={"age": [1]})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_list_and_search(self, test_client):
        """GET /members lists everyone and filters by search term."""
        for name, surname in [("John", "Doe"), ("Jane", "Smith")]:
            await test_client.post("/members", json={"name": name, "surname": surname, "age": 40})

        everyone = await test_client.get("/members")
        assert [m["name"] for m in everyone.json()] == ["John", "Jane"]
        assert set(everyone.json()[0]) == {"id", "name", "surname"}

        for term in ["Doe John", "john doe", "JOHN"]:
            response = await test_client.get("/members", params={"search": term})
            assert [m["name"] for m in response.json()] == ["John"]

        empty = await test_client.get("/members", params={"search": ""})
        assert len(empty.json()) == 2

    @pytest.mark.asyncio
    async def test_store_failure_is_500_without_internals(self, app, test_client, mock_db_session):
        """A store failure is a 500 that leaks no SQL or driver text."""
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT secret_table", {}, Exception("password authentication failed")
        )

        async def broken_session():
            yield mock_db_session

        app.dependency_overrides[get_db_session] = broken_session
        response = await test_client.get("/members")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "message" in body
        assert "secret_table" not in response.text
        assert "password" not in response.text


class TestCourseEndpoints:
    """Tests for the /courses routes."""

    @pytest.mark.asyncio
    async def test_course_crud(self, test_client, sample_course_payload):
        """Create, search, edit and delete a course."""
        created = await test_client.post("/courses", json=sample_course_payload)
        assert created.status_code == 200
        course = created.json()
        assert course["instructorName"] == "Charles"
        assert course["schedule"].startswith("2024-09-01T09:00:00")

        listed = await test_client.get("/courses", params={"search": "babbage charles"})
        assert listed.json() == []
        listed = await test_client.get("/courses", params={"search": "charles babbage analytical"})
        assert [c["id"] for c in listed.json()] == [course["id"]]
        assert set(listed.json()[0]) == {"id", "title", "instructorName", "instructorSurname"}

        edited = await test_client.put(f"/courses/{course['id']}/edit", json={"title": "Engines II"})
        assert edited.json()["title"] == "Engines II"
        assert edited.json()["description"] == sample_course_payload["description"]

        deleted = await test_client.delete(f"/courses/{course['id']}")
        assert deleted.json()["title"] == "Engines II"
        assert (await test_client.get(f"/courses/{course['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_schedule_offset_is_returned_in_utc(self, test_client, sample_course_payload):
        """A schedule sent with +02:00 is returned as the same instant in UTC."""
        created = await test_client.post(
            "/courses", json={**sample_course_payload, "schedule": "2024-09-01T09:00:00+02:00"}
        )
        assert created.status_code == 200
        expected = datetime(2024, 9, 1, 7, 0, tzinfo=timezone.utc)
        assert parse_timestamp(created.json()["schedule"]) == expected

        fetched = await test_client.get(f"/courses/{created.json()['id']}")
        assert parse_timestamp(fetched.json()["schedule"]) == expected

    @pytest.mark.asyncio
    async def test_non_date_schedule_is_400(self, test_client, sample_course_payload):
        """A schedule that is not a date is a 400 on the schedule field."""
        response = await test_client.post("/courses", json={**sample_course_payload, "schedule": "not-a-date"})
        assert response.status_code == 400
        assert response.json()["details"][0]["loc"][-1] == "schedule"

    @pytest.mark.asyncio
    async def test_edit_unknown_course(self, test_client):
        """Editing an unknown course is a 404 with a message."""
        response = await test_client.put("/courses/nope/edit", json={"title": "x"})
        assert response.status_code == 404
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_edit_unknown_course_with_bad_schedule(self, test_client):
        """Editing an unknown course is a 404 even with a non-date schedule."""
        response = await test_client.put("/courses/nope/edit", json={"schedule": "not-a-date"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_edit_of_existing_course_is_400(self, test_client, sample_course_payload):
        """A non-date schedule on an existing course is a 400."""
        course = (await test_client.post("/courses", json=sample_course_payload)).json()
        response = await test_client.put(f"/courses/{course['id']}/edit", json={"schedule": "soon"})
        assert response.status_code == 400
        assert response.json()["details"][0]["loc"][-1] == "schedule"


class TestNullOnMissing:
    """Tests for the NULL_ON_MISSING compatibility mode."""

    @pytest.mark.asyncio
    async def test_get_and_delete_return_null(self, legacy_client):
        """Unknown ids on GET and DELETE answer 200 with null."""
        fetched = await legacy_client.get("/members/does-not-exist")
        assert fetched.status_code == 200
        assert fetched.json() is None

        deleted = await legacy_client.delete("/courses/does-not-exist")
        assert deleted.status_code == 200
        assert deleted.json() is None

    @pytest.mark.asyncio
    async def test_edit_still_404(self, legacy_client):
        """Editing an unknown id stays a 404 in compatibility mode."""
        response = await legacy_client.put("/members/does-not-exist/edit", json={"age": 1})
        assert response.status_code == 404
