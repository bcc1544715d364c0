# mypy: ignore-errors
# tests/v1/test_admin.py
"""Tests for administrator endpoints."""

from datetime import timedelta

import pytest
from fastapi import status
from sqlalchemy import select

from porchlight.db.time import utcnow
from porchlight.models import Question, User


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/api/v1/admin/questions"),
        ("get", "/api/v1/admin/reviews"),
        ("get", "/api/v1/admin/dashboard"),
        ("get", "/api/v1/admin/users"),
        ("put", "/api/v1/admin/users/user_neighbor/make-admin"),
    ],
)
def test_admin_routes_reject_regular_users(client, auth_headers, method, path) -> None:
    response = client.request(method, path, headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Unauthorized"


def test_admin_routes_require_auth(client) -> None:
    response = client.get("/api/v1/admin/questions")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestQuestionManagement:
    """Catalog CRUD."""

    def test_list_groups_by_category(self, client, admin_headers, questions) -> None:
        response = client.get("/api/v1/admin/questions", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        categories = [item["category"] for item in response.json()]
        assert categories == sorted(categories)

    def test_create_question(self, client, db_session, admin_headers) -> None:
        response = client.post(
            "/api/v1/admin/questions",
            json={"text": "  How green is it?  ", "category": "Environment", "description": ""},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["text"] == "How green is it?"
        assert data["description"] is None
        assert data["is_active"] is True
        assert db_session.get(Question, data["id"]) is not None

    def test_create_question_requires_text(self, client, admin_headers) -> None:
        response = client.post(
            "/api/v1/admin/questions",
            json={"text": "", "category": "Environment"},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_get_question(self, client, admin_headers, questions) -> None:
        question_id = questions[0].id
        response = client.get(f"/api/v1/admin/questions/{question_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == question_id

        response = client.get("/api/v1/admin/questions/99999", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_question(self, client, admin_headers, questions) -> None:
        question_id = questions[0].id
        response = client.put(
            f"/api/v1/admin/questions/{question_id}",
            json={
                "text": "How safe is it after dark?",
                "category": "Safety",
                "description": "Lighting, foot traffic",
                "is_active": False,
            },
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["text"] == "How safe is it after dark?"
        assert data["description"] == "Lighting, foot traffic"
        assert data["is_active"] is False

    def test_update_missing_question(self, client, admin_headers) -> None:
        response = client.put(
            "/api/v1/admin/questions/99999",
            json={"text": "Anything", "category": "Misc"},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_unused_question(self, client, db_session, admin_headers, questions) -> None:
        question_id = questions[0].id
        response = client.delete(f"/api/v1/admin/questions/{question_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["deleted"] is True
        assert data["question"] is None
        assert db_session.get(Question, question_id) is None

    def test_delete_answered_question_deactivates(
        self, client, db_session, admin_headers, address, make_review, questions
    ) -> None:
        make_review(address, [4])
        question_id = questions[0].id

        response = client.delete(f"/api/v1/admin/questions/{question_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["deleted"] is False
        assert data["question"]["is_active"] is False
        assert db_session.get(Question, question_id).is_active is False

    def test_delete_missing_question(self, client, admin_headers) -> None:
        response = client.delete("/api/v1/admin/questions/99999", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


def test_review_page(client, admin_headers, address, other_address, make_review) -> None:
    start = utcnow() - timedelta(days=10)
    anonymous = make_review(
        address,
        [5],
        user_id="user_resident",
        user_email="resident@example.com",
        is_anonymous=True,
        created_at=start,
    )
    for offset in range(1, 4):
        make_review(other_address, [3], created_at=start + timedelta(days=offset))
    anonymous_id = anonymous.id

    response = client.get(
        "/api/v1/admin/reviews",
        params={"limit": 2, "offset": 0},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["pagination"] == {"total": 4, "limit": 2, "offset": 0}
    assert len(data["reviews"]) == 2

    response = client.get(
        "/api/v1/admin/reviews",
        params={"address_id": address.id},
        headers=admin_headers,
    )
    data = response.json()
    assert data["pagination"]["total"] == 1
    [review] = data["reviews"]
    assert review["id"] == anonymous_id
    assert review["user_email"] == "resident@example.com"
    assert review["address"]["id"] == address.id


def test_dashboard(client, admin_headers, address, other_address, make_review, questions) -> None:
    now = utcnow()
    make_review(address, [5, 5], user_id="user_resident", created_at=now - timedelta(days=2))
    make_review(address, [4], user_id="user_neighbor", created_at=now - timedelta(days=1))
    make_review(other_address, [2, 0], created_at=now - timedelta(hours=1))

    response = client.get("/api/v1/admin/dashboard", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()

    stats = data["statistics"]
    assert stats["total_reviews"] == 3
    assert stats["review_growth_rate"] == 100
    assert stats["total_users"] == 2
    assert stats["average_rating"] == 4.0
    assert stats["active_questions"] == len(questions)
    assert stats["new_questions_this_month"] == len(questions)

    activity = data["recent_activity"]
    assert activity["latest_review"]["address"]["id"] == other_address.id
    assert activity["latest_user"]["label"] == "Anonymous reviewer"
    assert activity["latest_question"] is not None

    top = data["top_addresses"]
    assert [item["id"] for item in top] == [address.id, other_address.id]
    assert top[0]["average_rating"] == 4.5
    assert top[1]["average_rating"] == 2.0


def test_dashboard_empty(client, admin_headers) -> None:
    data = client.get("/api/v1/admin/dashboard", headers=admin_headers).json()
    assert data["statistics"]["total_reviews"] == 0
    assert data["statistics"]["average_rating"] == 0
    assert data["statistics"]["rating_trend"] == "stable"
    assert data["recent_activity"] == {
        "latest_review": None,
        "latest_user": None,
        "latest_question": None,
    }
    assert data["top_addresses"] == []


def test_list_users_with_review_counts(client, admin_headers, local_user, address, make_review) -> None:
    make_review(address, [4], user_id=local_user.user_id)
    make_review(address, [5], user_id=local_user.user_id)

    response = client.get("/api/v1/admin/users", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["pagination"]["total"] == 1
    [user] = data["users"]
    assert user["user_id"] == "user_resident"
    assert user["reviews"] == 2
    assert user["role"] == "user"


def test_make_admin_creates_record(client, db_session, admin_headers, other_auth_headers) -> None:
    response = client.put("/api/v1/admin/users/user_neighbor/make-admin", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user_id"] == "user_neighbor"

    user = db_session.scalars(select(User).where(User.user_id == "user_neighbor")).one()
    assert user.role == "admin"

    response = client.get("/api/v1/admin/dashboard", headers=other_auth_headers)
    assert response.status_code == status.HTTP_200_OK


def test_deactivate_user(client, db_session, admin_headers, local_user, auth_headers) -> None:
    response = client.put(f"/api/v1/admin/users/{local_user.user_id}/deactivate", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK

    user = db_session.scalars(select(User).where(User.user_id == "user_resident")).one()
    assert user.is_active is False

    response = client.get("/api/v1/users/me", headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_deactivate_unknown_user(client, admin_headers) -> None:
    response = client.put("/api/v1/admin/users/user_ghost/deactivate", headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_admin_cannot_deactivate_self(client, admin_headers) -> None:
    response = client.put("/api/v1/admin/users/user_admin/deactivate", headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
