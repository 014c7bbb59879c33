# mypy: ignore-errors
"""Tests for forum post endpoints."""

from fastapi import status


def test_create_post_starts_empty(client) -> None:
    response = client.post(
        "/forum",
        json={"title": "Leg day", "body": "Squats or lunges?", "authorEmail": "Trainer@FitPulse.io"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["upvotes"] == 0
    assert body["downvotes"] == 0
    assert body["votedUser"] == {}
    assert body["authorEmail"] == "trainer@fitpulse.io"

    fetched = client.get(f"/forum/{body['id']}")
    assert fetched.status_code == status.HTTP_200_OK
    assert fetched.json()["title"] == "Leg day"


def test_create_post_validation(client) -> None:
    response = client.post("/forum", json={"title": "", "body": "x"})
    assert response.status_code == 422

    response = client.post("/forum", json={"title": "t", "body": "x", "authorEmail": "nope"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_list_posts_newest_first(client) -> None:
    ids = [
        client.post("/forum", json={"title": f"Post {i}", "body": "body"}).json()["id"]
        for i in range(3)
    ]

    response = client.get("/forum", params={"limit": 2})
    assert response.status_code == status.HTTP_200_OK
    assert [post["id"] for post in response.json()] == ids[::-1][:2]


def test_root_banner(client) -> None:
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.text == "fit pulse server is running well"
