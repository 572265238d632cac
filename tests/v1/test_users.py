# mypy: ignore-errors
"""Tests for profile endpoints."""

from fastapi import status


def test_get_profile_creates_it(client, alice_headers) -> None:
    response = client.get("/api/v1/users/me", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["email"] == "alice@x.com"
    assert data["full_name"] == "Alice Adams"
    assert data["onboarded"] is False


def test_update_profile(client, alice_headers) -> None:
    response = client.patch(
        "/api/v1/users/me",
        json={
            "phone_number": "555-0100",
            "allergies": ["peanuts", " peanuts", "gluten"],
            "notes": "Arrives late",
        },
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["allergies"] == ["peanuts", "gluten"]
    assert data["phone_number"] == "555-0100"
    assert data["onboarded"] is True


def test_reset_onboarding(client, alice_headers) -> None:
    client.patch(
        "/api/v1/users/me",
        json={"phone_number": "555-0100", "allergies": ["nuts"], "notes": "x"},
        headers=alice_headers,
    )

    response = client.post("/api/v1/users/me/reset-onboarding", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["phone_number"] is None
    assert data["allergies"] == []
    assert data["notes"] is None
    assert data["onboarded"] is False


def test_profile_requires_authentication(client) -> None:
    response = client.get("/api/v1/users/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
