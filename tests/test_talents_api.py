"""Endpoint tests for /api/talents and /api/settings.

Runs against the in-memory backend through the full FastAPI app, so status
codes come from the real domain error handlers.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.core.errors import EmailDeliveryError


def _talent_body(idx: int, **overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "talentId": f"talent-{idx:03d}",
        "talentUrl": f"https://example.com/t/{idx}",
        "fullName": f"Person {idx}",
        "nationality": "Portuguese",
        "location": "Lisbon",
        "externalLinks": [{"name": "GitHub", "url": f"https://github.com/person{idx}"}],
    }
    body.update(overrides)
    return body


def _create(client: TestClient, idx: int, **overrides: Any) -> dict[str, Any]:
    response = client.post("/api/talents", json=_talent_body(idx, **overrides))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def populated_client(auth_client: TestClient) -> TestClient:
    """Logged-in client with five talents, two of them with an email."""
    _create(auth_client, 1, email="one@example.com")
    _create(auth_client, 2, note="Strong Rust background")
    _create(auth_client, 3)
    _create(auth_client, 4, email="four@example.com", fullName="Ana Smith")
    _create(auth_client, 5)
    return auth_client


def _configure_smtp(client: TestClient, **overrides: Any) -> None:
    body: dict[str, Any] = {
        "smtpHost": "smtp.example.com",
        "smtpPort": 587,
        "smtpUsername": "bot@example.com",
        "smtpPassword": "hunter2",
        "smtpSecure": False,
        "emailSubject": "Hi {{name}}",
        "emailTemplate": "Dear {{name}}, let's talk.",
    }
    body.update(overrides)
    response = client.post("/api/settings", json=body)
    assert response.status_code == 200


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class TestListTalents:
    """GET /api/talents."""

    def test_requires_session(self, test_client: TestClient) -> None:
        response = test_client.get("/api/talents")

        assert response.status_code == 401

    def test_default_page(self, populated_client: TestClient) -> None:
        response = populated_client.get("/api/talents")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 5
        assert [t["talentId"] for t in body["talents"]] == [
            f"talent-{i:03d}" for i in range(1, 6)
        ]
        first = body["talents"][0]
        assert first["fullName"] == "Person 1"
        assert first["externalLinks"] == [
            {"name": "GitHub", "url": "https://github.com/person1"}
        ]
        assert first["important"] is False

    def test_paging(self, populated_client: TestClient) -> None:
        body = populated_client.get("/api/talents", params={"page": 2, "limit": 2}).json()

        assert body["total"] == 5
        assert [t["talentId"] for t in body["talents"]] == ["talent-003", "talent-004"]

    def test_page_past_the_end_is_empty(self, populated_client: TestClient) -> None:
        body = populated_client.get("/api/talents", params={"page": 9, "limit": 2}).json()

        assert body == {"talents": [], "total": 5}

    def test_email_only(self, populated_client: TestClient) -> None:
        body = populated_client.get("/api/talents", params={"emailOnly": "true"}).json()

        assert body["total"] == 2
        assert [t["email"] for t in body["talents"]] == [
            "one@example.com",
            "four@example.com",
        ]

    def test_keyword_matches_note_case_insensitively(
        self, populated_client: TestClient
    ) -> None:
        body = populated_client.get("/api/talents", params={"keyword": "rust"}).json()

        assert body["total"] == 1
        assert body["talents"][0]["talentId"] == "talent-002"

    def test_keyword_whitespace_is_trimmed(self, populated_client: TestClient) -> None:
        """Given " rust " in the query string, it filters like "rust"."""
        body = populated_client.get("/api/talents", params={"keyword": " rust "}).json()
        blank = populated_client.get("/api/talents", params={"keyword": "   "}).json()

        assert body["total"] == 1
        assert blank["total"] == 5

    def test_keyword_and_email_only_combine(self, populated_client: TestClient) -> None:
        body = populated_client.get(
            "/api/talents", params={"keyword": "smith", "emailOnly": "true"}
        ).json()

        assert [t["talentId"] for t in body["talents"]] == ["talent-004"]

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "x"}])
    def test_invalid_paging_returns_400(
        self, auth_client: TestClient, params: dict[str, Any]
    ) -> None:
        response = auth_client.get("/api/talents", params=params)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request data"


# ---------------------------------------------------------------------------
# Single reads and navigation
# ---------------------------------------------------------------------------


class TestGetTalent:
    """GET /api/talents/{id} and /api/talents/by-talent-id/{talentId}."""

    def test_get_by_id_is_public(self, populated_client: TestClient) -> None:
        populated_client.post("/api/logout")

        response = populated_client.get("/api/talents/2")

        assert response.status_code == 200
        assert response.json()["talentId"] == "talent-002"

    def test_get_by_talent_id(self, populated_client: TestClient) -> None:
        response = populated_client.get("/api/talents/by-talent-id/talent-004")

        assert response.status_code == 200
        assert response.json()["id"] == 4

    def test_missing_returns_404(self, populated_client: TestClient) -> None:
        assert populated_client.get("/api/talents/99").status_code == 404
        assert populated_client.get("/api/talents/by-talent-id/ghost").status_code == 404


class TestNavigation:
    """GET /api/talents/{id}/navigation."""

    def test_middle_has_both_neighbours(self, populated_client: TestClient) -> None:
        body = populated_client.get("/api/talents/3/navigation").json()

        assert body["previous"]["id"] == 2
        assert body["next"]["id"] == 4

    def test_ends_have_null_neighbours(self, populated_client: TestClient) -> None:
        first = populated_client.get("/api/talents/1/navigation").json()
        last = populated_client.get("/api/talents/5/navigation").json()

        assert first["previous"] is None
        assert last["next"] is None

    def test_skips_deleted_ids(self, populated_client: TestClient) -> None:
        populated_client.delete("/api/talents/3")

        body = populated_client.get("/api/talents/4/navigation").json()

        assert body["previous"]["id"] == 2

    def test_unknown_id_returns_404(self, populated_client: TestClient) -> None:
        response = populated_client.get("/api/talents/42/navigation")

        assert response.status_code == 404


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


class TestCreateTalent:
    """POST /api/talents."""

    def test_create_assigns_id_and_defaults(self, auth_client: TestClient) -> None:
        body = _create(
            auth_client, 7, externalLinks=None, email="", note="  ", important=None
        )

        assert body["id"] == 1
        assert body["externalLinks"] == []
        assert body["email"] is None
        assert body["note"] is None
        assert body["important"] is False
        assert body["createdAt"] == body["updatedAt"]

    def test_duplicate_talent_id_returns_409(self, auth_client: TestClient) -> None:
        _create(auth_client, 1)

        response = auth_client.post("/api/talents", json=_talent_body(1))

        assert response.status_code == 409

    @pytest.mark.parametrize(
        "body",
        [
            {"talentId": "talent-001"},
            {"fullName": "No Id"},
            {"talentId": "  ", "fullName": "Blank Id"},
            {"talentId": "t", "fullName": "x", "externalLinks": [{"name": "GitHub"}]},
        ],
    )
    def test_invalid_body_returns_400(
        self, auth_client: TestClient, body: dict[str, Any]
    ) -> None:
        response = auth_client.post("/api/talents", json=body)

        assert response.status_code == 400

    def test_requires_session(self, test_client: TestClient) -> None:
        response = test_client.post("/api/talents", json=_talent_body(1))

        assert response.status_code == 401


class TestUpdateTalent:
    """PATCH /api/talents/{id}."""

    def test_only_present_fields_change(self, populated_client: TestClient) -> None:
        response = populated_client.patch(
            "/api/talents/2", json={"note": "Follow up in May", "important": True}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["note"] == "Follow up in May"
        assert body["important"] is True
        assert body["fullName"] == "Person 2"
        assert body["location"] == "Lisbon"

    def test_null_clears_field(self, populated_client: TestClient) -> None:
        body = populated_client.patch("/api/talents/1", json={"email": None}).json()

        assert body["email"] is None
        listing = populated_client.get("/api/talents", params={"emailOnly": "true"}).json()
        assert listing["total"] == 1

    def test_full_name_is_stripped(self, populated_client: TestClient) -> None:
        body = populated_client.patch("/api/talents/1", json={"fullName": "  Bob  "}).json()

        assert body["fullName"] == "Bob"

    def test_talent_id_is_not_updatable(self, populated_client: TestClient) -> None:
        body = populated_client.patch(
            "/api/talents/1", json={"talentId": "renamed", "note": "x"}
        ).json()

        assert body["talentId"] == "talent-001"

    def test_clearing_full_name_returns_400(self, populated_client: TestClient) -> None:
        response = populated_client.patch("/api/talents/1", json={"fullName": None})

        assert response.status_code == 400

    def test_missing_returns_404(self, populated_client: TestClient) -> None:
        response = populated_client.patch("/api/talents/99", json={"note": "x"})

        assert response.status_code == 404


class TestDeleteTalent:
    """DELETE /api/talents/{id}."""

    def test_delete_is_idempotent(self, populated_client: TestClient) -> None:
        first = populated_client.delete("/api/talents/3")
        second = populated_client.delete("/api/talents/3")

        assert first.status_code == 204
        assert second.status_code == 204
        assert populated_client.get("/api/talents/3").status_code == 404
        assert populated_client.get("/api/talents").json()["total"] == 4

    def test_requires_session(self, test_client: TestClient) -> None:
        assert test_client.delete("/api/talents/1").status_code == 401


# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------


class TestSendEmail:
    """POST /api/talents/{id}/send-email."""

    def test_sends_with_stored_settings(self, populated_client: TestClient) -> None:
        _configure_smtp(populated_client)

        with patch("app.services.notifier.aiosmtplib.send", new_callable=AsyncMock) as send:
            response = populated_client.post("/api/talents/4/send-email")

        assert response.status_code == 200
        assert response.json() == {"message": "Email sent successfully"}
        message = send.await_args.args[0]
        assert message["To"] == "four@example.com"
        assert message["Subject"] == "Hi Ana Smith"
        assert send.await_args.kwargs["hostname"] == "smtp.example.com"

    def test_talent_without_email_returns_400(self, populated_client: TestClient) -> None:
        _configure_smtp(populated_client)

        with patch("app.services.notifier.aiosmtplib.send", new_callable=AsyncMock) as send:
            response = populated_client.post("/api/talents/2/send-email")

        assert response.status_code == 400
        assert response.json()["detail"] == "Talent has no email address"
        send.assert_not_awaited()

    @pytest.mark.parametrize(
        ("talent_overrides", "settings_overrides"),
        [
            ({"fullName": "Jane\nSmith"}, {}),
            ({}, {"emailSubject": "Hello\n{{name}}"}),
        ],
    )
    def test_line_break_in_headers_returns_400(
        self,
        auth_client: TestClient,
        talent_overrides: dict[str, Any],
        settings_overrides: dict[str, Any],
    ) -> None:
        talent = _create(auth_client, 1, email="jane@example.com", **talent_overrides)
        _configure_smtp(auth_client, **settings_overrides)

        with patch("app.services.notifier.aiosmtplib.send", new_callable=AsyncMock) as send:
            response = auth_client.post(f"/api/talents/{talent['id']}/send-email")

        assert response.status_code == 400
        assert response.json()["detail"] == "Email headers may not contain line breaks"
        send.assert_not_awaited()

    def test_unconfigured_smtp_returns_400(self, populated_client: TestClient) -> None:
        response = populated_client.post("/api/talents/1/send-email")

        assert response.status_code == 400
        assert response.json()["detail"] == "SMTP settings not configured"

    def test_delivery_failure_returns_500(self, populated_client: TestClient) -> None:
        _configure_smtp(populated_client)

        with patch(
            "app.routers.talents.send_talent_email",
            new_callable=AsyncMock,
            side_effect=EmailDeliveryError("Failed to send email"),
        ):
            response = populated_client.post("/api/talents/1/send-email")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to send email"

    def test_missing_talent_returns_404(self, populated_client: TestClient) -> None:
        assert populated_client.post("/api/talents/99/send-email").status_code == 404


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettingsEndpoints:
    """GET and POST /api/settings."""

    def test_unconfigured_returns_empty_object(self, auth_client: TestClient) -> None:
        response = auth_client.get("/api/settings")

        assert response.status_code == 200
        assert response.json() == {}

    def test_post_replaces_whole_record(self, auth_client: TestClient) -> None:
        _configure_smtp(auth_client)
        auth_client.post("/api/settings", json={"fromName": "Recruiting"})

        body = auth_client.get("/api/settings").json()

        assert body["fromName"] == "Recruiting"
        assert body["smtpHost"] is None
        assert body["smtpPassword"] is None
        assert "createdAt" in body

    def test_requires_session(self, test_client: TestClient) -> None:
        assert test_client.get("/api/settings").status_code == 401
        assert test_client.post("/api/settings", json={}).status_code == 401
