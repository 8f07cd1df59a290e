"""
Tests for HttpGateway: the roster store driven over the team API.
"""

import httpx
import pytest

from team_roster.core.exceptions import ConflictError, NetworkError, NotFoundError, RosterError
from team_roster.models.enums import RosterScope
from team_roster.roster.gateway import HttpGateway
from team_roster.roster.store import RosterStore
from team_roster.schemas.cv_file import CVFile
from team_roster.schemas.team_member import TeamMemberCreate, TeamMemberPublic, TeamMemberUpdate

from conftest import PDF_BYTES


def gateway_with(handler) -> HttpGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://repo/api/v1")
    return HttpGateway(client=client)


class TestAgainstApi:

    async def test_crud_round(self, http_gateway):
        created = await http_gateway.create(TeamMemberCreate(name="Ada Lovelace", role="Engineer"))
        updated = await http_gateway.update(created.id, TeamMemberUpdate(role="Lead"))
        fetched = await http_gateway.fetch_one(created.id)

        assert created.placeholder == "AL"
        assert updated.role == "Lead"
        assert fetched == updated

        await http_gateway.delete(created.id)

        with pytest.raises(NotFoundError):
            await http_gateway.fetch_one(created.id)

    async def test_public_scope(self, http_gateway):
        await http_gateway.create(TeamMemberCreate(name="Ada", role="Engineer"))
        await http_gateway.create(TeamMemberCreate(name="Brian", role="Engineer", is_active=False))

        members = await http_gateway.fetch_roster(RosterScope.PUBLIC)

        assert [m.name for m in members] == ["Ada"]
        assert isinstance(members[0], TeamMemberPublic)

    async def test_reorder_conflict_maps_to_conflict_error(self, http_gateway):
        ada = await http_gateway.create(TeamMemberCreate(name="Ada", role="Engineer"))
        await http_gateway.create(TeamMemberCreate(name="Brian", role="Engineer"))

        with pytest.raises(ConflictError):
            await http_gateway.reorder([ada.id])

    async def test_reorder_of_empty_roster_is_accepted(self, http_gateway, service_gateway):
        await http_gateway.reorder([])
        await service_gateway.reorder([])

        assert await http_gateway.fetch_roster() == []

    async def test_cv_upload_over_multipart(self, http_gateway):
        ada = await http_gateway.create(TeamMemberCreate(name="Ada", role="Engineer"))

        attachment = await http_gateway.upload_cv(
            ada.id, CVFile(file_name="ada.pdf", media_type="application/pdf", content=PDF_BYTES)
        )

        assert attachment.file_name == "ada.pdf"
        assert attachment.file_url.startswith("/static/uploads/team-cvs/ada-")

    async def test_store_over_http(self, http_gateway):
        async with RosterStore(http_gateway) as store:
            await store.create({"name": "Ada", "role": "Engineer"})
            await store.create({"name": "Brian", "role": "Engineer"})

            result = await store.move_down(store.members[0])

            assert result.success is True
            assert [m.name for m in store.members] == ["Brian", "Ada"]


class TestTransportFailures:

    async def test_connection_error_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(NetworkError):
            await gateway_with(handler).fetch_roster()

    async def test_non_json_body_is_network_error(self):
        gateway = gateway_with(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))

        with pytest.raises(NetworkError) as exc_info:
            await gateway.fetch_roster()

        assert exc_info.value.message == "Malformed response from member repository"

    async def test_unexpected_payload_shape_is_network_error(self):
        gateway = gateway_with(lambda request: httpx.Response(200, json={"success": True, "data": [{"id": 1}]}))

        with pytest.raises(NetworkError):
            await gateway.fetch_roster()

    async def test_unmapped_status_keeps_message(self):
        gateway = gateway_with(
            lambda request: httpx.Response(403, json={"success": False, "message": "nope", "code": "HTTP403"})
        )

        with pytest.raises(RosterError) as exc_info:
            await gateway.delete("abc")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "nope"

    async def test_failed_load_sets_store_error(self):
        gateway = gateway_with(lambda request: httpx.Response(503, json={"success": False, "message": "down"}))

        async with RosterStore(gateway) as store:
            assert await store.load() is False
            assert store.error == "down"
