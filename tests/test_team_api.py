"""
Tests for the /team endpoints: envelope, status codes and role checks.
"""

from conftest import PDF_BYTES, auth_headers, make_token


async def create(client, headers, **fields):
    body = {"name": "Ada Lovelace", "role": "Engineer", **fields}
    response = await client.post("/team/", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# =============================================================================
# AUTH
# =============================================================================


class TestAuth:

    async def test_admin_listing_requires_token(self, client):
        response = await client.get("/team/")

        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["code"] == "HTTP401"

    async def test_invalid_token_is_rejected(self, client):
        response = await client.get("/team/", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    async def test_token_cookie_is_accepted(self, client):
        response = await client.get("/team/", headers={"Cookie": f"access_token={make_token('editor')}"})

        assert response.status_code == 200

    async def test_editor_cannot_delete_members(self, client, editor_headers):
        member = await create(client, editor_headers)

        response = await client.delete(f"/team/{member['id']}", headers=editor_headers)

        assert response.status_code == 403

    async def test_unknown_role_is_forbidden(self, client):
        response = await client.get("/team/", headers=auth_headers("viewer"))

        assert response.status_code == 403


# =============================================================================
# MEMBERS
# =============================================================================


class TestMembers:

    async def test_create_returns_envelope(self, client, admin_headers):
        response = await client.post(
            "/team/", json={"name": "Ada Lovelace", "role": "Engineer", "skills": ["Math", " "]},
            headers=admin_headers,
        )

        body = response.json()
        assert response.status_code == 201
        assert body["success"] is True
        assert body["message"] == "Team member created successfully"
        assert body["data"]["placeholder"] == "AL"
        assert body["data"]["skills"] == ["Math"]
        assert body["data"]["display_order"] == 1

    async def test_empty_name_is_a_validation_error(self, client, admin_headers):
        response = await client.post("/team/", json={"name": "  ", "role": "Engineer"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "ValidationError"
        assert response.json()["data"][0]["field"] == "name"

    async def test_unknown_fields_are_rejected(self, client, admin_headers):
        response = await client.post(
            "/team/", json={"name": "Ada", "role": "Engineer", "id": "forged"}, headers=admin_headers
        )

        assert response.status_code == 400

    async def test_get_unknown_member_is_404(self, client, admin_headers):
        response = await client.get("/team/missing", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {
            "success": False, "data": None, "message": "Team member not found", "code": "NotFound"
        }

    async def test_public_listing_hides_inactive_members(self, client, admin_headers):
        await create(client, admin_headers, name="Ada")
        await create(client, admin_headers, name="Brian", is_active=False)

        response = await client.get("/team/public")

        members = response.json()["data"]
        assert [m["name"] for m in members] == ["Ada"]
        assert "cv" not in members[0]
        assert members[0]["has_cv"] is False

    async def test_toggle_active_flips_visibility(self, client, admin_headers):
        member = await create(client, admin_headers)

        response = await client.patch(f"/team/{member['id']}/toggle-active", headers=admin_headers)

        assert response.json()["data"]["is_active"] is False
        assert response.json()["message"] == "Team member is now hidden"

    async def test_delete_renumbers_roster(self, client, admin_headers):
        first = await create(client, admin_headers, name="Ada")
        await create(client, admin_headers, name="Brian")

        response = await client.delete(f"/team/{first['id']}", headers=admin_headers)
        roster = (await client.get("/team/", headers=admin_headers)).json()["data"]

        assert response.json()["success"] is True
        assert [(m["name"], m["display_order"]) for m in roster] == [("Brian", 1)]

    async def test_reorder_conflict_is_409(self, client, admin_headers):
        member = await create(client, admin_headers, name="Ada")
        await create(client, admin_headers, name="Brian")

        response = await client.put("/team/reorder", json={"member_ids": [member["id"]]}, headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "Conflict"

    async def test_statistics(self, client, admin_headers):
        await create(client, admin_headers, name="Ada")
        await create(client, admin_headers, name="Brian", is_active=False)

        response = await client.get("/team/statistics", headers=admin_headers)

        assert response.json()["data"] == {
            "total_members": 2, "active_members": 1, "inactive_members": 1, "members_with_cv": 0
        }


# =============================================================================
# CV
# =============================================================================


class TestCV:

    async def test_upload_and_download_redirect(self, client, admin_headers):
        member = await create(client, admin_headers)

        upload = await client.post(
            f"/team/{member['id']}/cv",
            files={"cv": ("ada.pdf", PDF_BYTES, "application/pdf")},
            headers=admin_headers,
        )
        download = await client.get(f"/team/{member['id']}/cv")

        attachment = upload.json()["data"]
        assert upload.status_code == 200
        assert attachment["file_name"] == "ada.pdf"
        assert attachment["file_size_bytes"] == len(PDF_BYTES)
        assert download.status_code == 302
        assert download.headers["location"] == attachment["file_url"]

    async def test_upload_rejects_wrong_media_type(self, client, admin_headers):
        member = await create(client, admin_headers)

        response = await client.post(
            f"/team/{member['id']}/cv",
            files={"cv": ("photo.png", b"\x89PNG", "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "InvalidType"

    async def test_download_without_cv_is_404(self, client, admin_headers):
        member = await create(client, admin_headers)

        response = await client.get(f"/team/{member['id']}/cv")

        assert response.status_code == 404
        assert response.json()["code"] == "CVNotFound"

    async def test_delete_cv(self, client, admin_headers):
        member = await create(client, admin_headers)
        await client.post(
            f"/team/{member['id']}/cv",
            files={"cv": ("ada.pdf", PDF_BYTES, "application/pdf")},
            headers=admin_headers,
        )

        first = await client.delete(f"/team/{member['id']}/cv", headers=admin_headers)
        second = await client.delete(f"/team/{member['id']}/cv", headers=admin_headers)

        assert first.status_code == 200
        assert second.status_code == 404
