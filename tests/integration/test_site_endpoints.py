"""
Integration tests for the public site endpoints.
"""

import pytest
from sqlalchemy.exc import OperationalError

pytestmark = pytest.mark.integration


async def test_site_content_is_public(client):
    response = await client.get("/api/v1/site/content")

    assert response.status_code == 200
    data = response.json()
    assert data["hero"]["stats"]
    assert len(data["services"]) == 4
    assert sum(1 for s in data["services"] if s["featured"]) == 1
    assert data["testimonials"]
    assert data["contact"]["what_to_expect"]


async def test_contact_form_saves_message(client, mock_contact_repo):
    mock_contact_repo.create.side_effect = lambda m: (setattr(m, "id", 1), m)[1]

    response = await client.post("/api/v1/site/contact", json={
        "name": "Lee",
        "email": "lee@test.com",
        "message": "I'd like to start coaching",
    })

    assert response.status_code == 201
    assert response.json()["id"] == 1
    saved = mock_contact_repo.create.call_args.args[0]
    assert saved.email == "lee@test.com"


async def test_contact_form_requires_message(client, mock_contact_repo):
    response = await client.post("/api/v1/site/contact", json={"name": "Lee", "email": "lee@test.com", "message": ""})
    assert response.status_code == 422


async def test_contact_form_database_error_returns_500(client, mock_contact_repo):
    mock_contact_repo.create.side_effect = OperationalError("insert", {}, Exception("down"))

    response = await client.post("/api/v1/site/contact", json={
        "name": "Lee", "email": "lee@test.com", "message": "Hi",
    })

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to send message. Please try again."
