import pytest
from httpx import AsyncClient


async def _post_update(client, auth_headers, complaint_id, status, comment="", updated_by="staff-1"):
    return await client.post(
        "/api/complaint-updates",
        json={"complaint_id": complaint_id, "updated_by": updated_by, "status": status, "comment": comment},
        headers=auth_headers,
    )


@pytest.mark.asyncio
async def test_create_update_moves_complaint_status(client: AsyncClient, complaint, act_as, auth_headers):
    complaint_id = complaint["complaint_id"]
    act_as("staff-1")

    response = await _post_update(client, auth_headers, complaint_id, "In Progress", "Looking into it")
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["update_id"] > 0
    assert data["status"] == "In Progress"
    assert data["updated_by"] == "staff-1"
    assert data["comment"] == "Looking into it"

    response = await client.get(f"/api/complaints/{complaint_id}", headers=auth_headers)
    assert response.json()["data"]["status"] == "In Progress"


@pytest.mark.asyncio
async def test_create_update_customer_forbidden(client: AsyncClient, complaint, act_as, auth_headers):
    act_as("cust-1")
    response = await _post_update(
        client, auth_headers, complaint["complaint_id"], "Closed", updated_by="cust-1"
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_update_on_behalf_of_someone_else(client: AsyncClient, complaint, act_as, auth_headers):
    act_as("staff-1")
    response = await _post_update(client, auth_headers, complaint["complaint_id"], "Resolved", updated_by="mgr-1")
    assert response.status_code == 403

    act_as("admin-1")
    response = await _post_update(client, auth_headers, complaint["complaint_id"], "Resolved", updated_by="staff-1")
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_create_update_validation(client: AsyncClient, complaint, act_as, auth_headers):
    act_as("staff-1")
    response = await _post_update(client, auth_headers, complaint["complaint_id"], "Escalated")
    assert response.status_code == 400

    response = await _post_update(client, auth_headers, str(complaint["complaint_id"]), "Resolved")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_update_unknown_complaint(client: AsyncClient, users, act_as, auth_headers):
    act_as("staff-1")
    response = await _post_update(client, auth_headers, 9999, "Resolved")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_updates_newest_first_with_author(client: AsyncClient, complaint, act_as, auth_headers):
    complaint_id = complaint["complaint_id"]
    act_as("staff-1")
    await _post_update(client, auth_headers, complaint_id, "In Progress", "first")
    await _post_update(client, auth_headers, complaint_id, "Resolved", "second")

    act_as("cust-1")
    response = await client.get(f"/api/complaint-updates/{complaint_id}", headers=auth_headers)
    assert response.status_code == 200
    updates = response.json()["data"]
    assert [u["comment"] for u in updates] == ["second", "first"]
    assert all(u["updated_by_name"] == "Sam Staff" for u in updates)


@pytest.mark.asyncio
async def test_list_updates_empty(client: AsyncClient, complaint, act_as, auth_headers):
    act_as("cust-1")
    response = await client.get(f"/api/complaint-updates/{complaint['complaint_id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"] == []


@pytest.mark.asyncio
async def test_list_updates_other_customer_forbidden(client: AsyncClient, complaint, act_as, auth_headers):
    act_as("cust-2")
    response = await client.get(f"/api/complaint-updates/{complaint['complaint_id']}", headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_latest_update(client: AsyncClient, complaint, act_as, auth_headers):
    complaint_id = complaint["complaint_id"]
    act_as("staff-1")

    response = await client.get(f"/api/complaint-updates/{complaint_id}/latest", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    await _post_update(client, auth_headers, complaint_id, "In Progress", "first")
    await _post_update(client, auth_headers, complaint_id, "Resolved", "second")

    response = await client.get(f"/api/complaint-updates/{complaint_id}/latest", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["comment"] == "second"
    assert data["status"] == "Resolved"
    assert data["updated_by_name"] == "Sam Staff"


@pytest.mark.asyncio
async def test_delete_update_rederives_status(client: AsyncClient, complaint, act_as, auth_headers):
    complaint_id = complaint["complaint_id"]
    act_as("staff-1")
    first = (await _post_update(client, auth_headers, complaint_id, "In Progress")).json()["data"]
    second = (await _post_update(client, auth_headers, complaint_id, "Resolved")).json()["data"]

    response = await client.delete(f"/api/complaint-updates/{second['update_id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Update deleted successfully"
    assert response.json()["data"]["complaint_status"] == "In Progress"

    complaint_data = (await client.get(f"/api/complaints/{complaint_id}", headers=auth_headers)).json()["data"]
    assert complaint_data["status"] == "In Progress"

    response = await client.delete(f"/api/complaint-updates/{first['update_id']}", headers=auth_headers)
    assert response.json()["data"]["complaint_status"] == "Pending"

    complaint_data = (await client.get(f"/api/complaints/{complaint_id}", headers=auth_headers)).json()["data"]
    assert complaint_data["status"] == "Pending"


@pytest.mark.asyncio
async def test_delete_update_permissions(client: AsyncClient, complaint, act_as, auth_headers):
    act_as("staff-1")
    created = (await _post_update(client, auth_headers, complaint["complaint_id"], "Resolved")).json()["data"]

    for user_id in ("cust-1", "mgr-1"):
        act_as(user_id)
        response = await client.delete(f"/api/complaint-updates/{created['update_id']}", headers=auth_headers)
        assert response.status_code == 403

    act_as("admin-1")
    response = await client.delete(f"/api/complaint-updates/{created['update_id']}", headers=auth_headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_delete_update_not_found(client: AsyncClient, users, act_as, auth_headers):
    act_as("admin-1")
    response = await client.delete("/api/complaint-updates/777", headers=auth_headers)
    assert response.status_code == 404
