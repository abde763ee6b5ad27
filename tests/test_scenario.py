import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_complaint_lifecycle(client: AsyncClient, seed_user, act_as, auth_headers):
    """Register, complain, resolve, rate, and get rejected on a second rating."""
    await seed_user("staff-1", "Staff", "Sam Staff")

    response = await client.post(
        "/api/users/register",
        json={"user_id": "u1", "full_name": "Uma One", "email": "u1@example.com", "role": "Customer"},
    )
    assert response.status_code == 201

    act_as("u1")
    response = await client.post(
        "/api/complaints",
        json={"user_id": "u1", "category": "Technical", "description": "x"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    complaint = response.json()["data"]
    assert complaint["status"] == "Pending"
    assert complaint["priority"] == "Medium"
    complaint_id = complaint["complaint_id"]

    act_as("staff-1")
    response = await client.post(
        "/api/complaint-updates",
        json={"complaint_id": complaint_id, "updated_by": "staff-1", "status": "Resolved", "comment": "fixed"},
        headers=auth_headers,
    )
    assert response.status_code == 201

    response = await client.put(
        f"/api/complaints/{complaint_id}", json={"status": "Resolved"}, headers=auth_headers
    )
    assert response.status_code == 200

    act_as("u1")
    response = await client.get(f"/api/complaints/{complaint_id}", headers=auth_headers)
    assert response.json()["data"]["status"] == "Resolved"

    response = await client.post(
        "/api/feedback", json={"complaint_id": complaint_id, "rating": 5}, headers=auth_headers
    )
    assert response.status_code == 201

    response = await client.post(
        "/api/feedback", json={"complaint_id": complaint_id, "rating": 1}, headers=auth_headers
    )
    assert response.status_code == 409
    assert response.json()["success"] is False
