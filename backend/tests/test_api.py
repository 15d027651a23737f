"""
HTTP contract tests for submit, admin and health routes
"""
from unittest.mock import patch

import pytest

from hunt.services.submission_store import StorageError


def _submit(client, team_id, answer):
    return client.post("/submit", json={"teamId": team_id, "answer": answer})


class TestSubmitRoute:

    def test_selected(self, client):
        response = _submit(client, 1, "  JavaScript  ")
        assert response.status_code == 200
        assert response.json() == {
            "outcome": "selected",
            "message": "Congratulations! You have been selected for the next rounds.",
        }

    def test_incorrect(self, client):
        response = _submit(client, 2, "python")
        assert response.status_code == 200
        assert response.json()["outcome"] == "incorrect_answer"

    def test_invalid_team(self, client):
        response = _submit(client, 99, "javascript")
        assert response.status_code == 400
        assert response.json()["outcome"] == "invalid_team"

    @pytest.mark.parametrize("team_id", [10**20, -(10**20)])
    def test_oversized_team_id_is_invalid_team(self, client, admin_headers, team_id):
        response = _submit(client, team_id, "javascript")
        assert response.status_code == 400
        assert response.json()["outcome"] == "invalid_team"
        assert client.get("/admin/submissions", headers=admin_headers).json() == []

    def test_already_answered(self, client):
        _submit(client, 1, "javascript")
        response = _submit(client, 1, "garbage")
        assert response.status_code == 409
        assert response.json()["outcome"] == "already_answered"

    @pytest.mark.parametrize(
        "body",
        [
            {"teamId": "1", "answer": "javascript"},
            {"teamId": 1.5, "answer": "javascript"},
            {"teamId": True, "answer": "javascript"},
            {"teamId": 1, "answer": 7},
            {"teamId": 1},
            {"answer": "javascript"},
            [],
        ],
    )
    def test_invalid_payload(self, client, body):
        with patch("hunt.services.submission_store.SubmissionStore.find_correct") as find:
            response = client.post("/submit", json=body)
        assert response.status_code == 400
        assert response.json() == {"outcome": "invalid_payload", "message": "Invalid payload"}
        find.assert_not_called()

    def test_malformed_json(self, client):
        response = client.post("/submit", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["outcome"] == "invalid_payload"

    def test_five_teams_in_order(self, client, admin_headers):
        outcomes = [_submit(client, team, "javascript").json()["outcome"] for team in [1, 2, 3, 4, 5]]
        assert outcomes == ["selected"] * 4 + ["slots_filled"]

        listing = client.get("/admin/submissions", headers=admin_headers).json()
        assert [row["teamId"] for row in listing] == [1, 2, 3, 4, 5]
        stamps = [row["createdAt"] for row in listing]
        assert stamps == sorted(stamps)

    def test_storage_error_is_generic_500(self, client):
        with patch(
            "hunt.services.submission_store.SubmissionStore.find_correct",
            side_effect=StorageError("down"),
        ):
            response = _submit(client, 1, "javascript")
        assert response.status_code == 500
        assert response.json() == {"message": "Server error"}


class TestAdminRoutes:

    def test_list_requires_secret(self, client):
        response = client.get("/admin/submissions")
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_wrong_secret_rejected_before_store(self, client):
        with patch("hunt.services.submission_store.SubmissionStore.reset") as reset:
            response = client.post("/admin/reset", headers={"x-admin-secret": "nope"})
        assert response.status_code == 401
        reset.assert_not_called()

    def test_list_shape(self, client, admin_headers):
        _submit(client, 3, " JavaScript")
        rows = client.get("/admin/submissions", headers=admin_headers).json()
        assert len(rows) == 1
        assert rows[0]["teamId"] == 3
        assert rows[0]["answer"] == " JavaScript"
        assert rows[0]["isCorrect"] is True
        assert "createdAt" in rows[0]

    def test_reset_then_requalify(self, client, admin_headers):
        for team in [1, 2, 3, 4, 5]:
            _submit(client, team, "javascript")

        response = client.post("/admin/reset", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Database reset successful", "deleted": 5}
        assert client.get("/admin/submissions", headers=admin_headers).json() == []

        assert _submit(client, 5, "javascript").json()["outcome"] == "selected"


class TestSystemRoutes:

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["ok"] is True
        assert "timestamp" in data
        assert data["uptime"] >= 0

    def test_unknown_route(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert response.json()["message"] == "404: NOT_FOUND"
