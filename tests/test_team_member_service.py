"""
Tests for TeamMemberService and TeamMemberRepository.

Covers the display_order numbering (orders are always exactly 1..N) across
create, update, delete and reorder, plus the CV lifecycle on the server side.
"""

import random
from datetime import datetime, timedelta

import pytest

from team_roster.core.exceptions import ConflictError, NotFoundError, ValidationError
from team_roster.models.base import utc_now
from team_roster.schemas.team_member import TeamMemberUpdate

from conftest import PDF_BYTES, add_member


async def roster(service):
    return [(m.name, m.display_order) for m in await service.get_team_members()]


# =============================================================================
# ORDERING
# =============================================================================


class TestCreate:

    async def test_members_are_appended_in_order(self, service):
        for name in ("Ada", "Brian", "Chloe"):
            await add_member(service, name)

        assert await roster(service) == [("Ada", 1), ("Brian", 2), ("Chloe", 3)]

    async def test_create_at_position_shifts_later_members(self, service):
        await add_member(service, "Ada")
        await add_member(service, "Brian")

        created = await add_member(service, "Zoe", display_order=1)

        assert created.display_order == 1
        assert await roster(service) == [("Zoe", 1), ("Ada", 2), ("Brian", 3)]

    async def test_create_position_past_the_end_is_clamped(self, service):
        await add_member(service, "Ada")

        created = await add_member(service, "Brian", display_order=10)

        assert created.display_order == 2

    async def test_placeholder_is_derived_when_omitted(self, service):
        created = await add_member(service, "Mario Rossi")

        assert created.placeholder == "MR"
        assert created.is_active is True
        assert created.created_by == "actor-1"


class TestUpdate:

    async def test_partial_update_keeps_other_fields(self, service):
        member = await add_member(service, "Ada", role="Engineer", skills=["Python"])

        updated = await service.update_team_member(member.id, TeamMemberUpdate(role="Lead"), "actor-2")

        assert updated.role == "Lead"
        assert updated.name == "Ada"
        assert updated.skills == ["Python"]
        assert updated.updated_by == "actor-2"

    async def test_explicit_null_on_required_field_is_ignored(self, service):
        member = await add_member(service, "Ada")

        updated = await service.update_team_member(member.id, TeamMemberUpdate(name=None, experience="5 years"))

        assert updated.name == "Ada"
        assert updated.experience == "5 years"

    async def test_moving_up_shifts_members_in_between(self, service):
        await add_member(service, "Ada")
        await add_member(service, "Brian")
        chloe = await add_member(service, "Chloe")

        await service.update_team_member(chloe.id, TeamMemberUpdate(display_order=1))

        assert await roster(service) == [("Chloe", 1), ("Ada", 2), ("Brian", 3)]

    async def test_moving_down_is_clamped_to_roster_size(self, service):
        ada = await add_member(service, "Ada")
        await add_member(service, "Brian")
        await add_member(service, "Chloe")

        await service.update_team_member(ada.id, TeamMemberUpdate(display_order=99))

        assert await roster(service) == [("Brian", 1), ("Chloe", 2), ("Ada", 3)]

    async def test_unknown_member_raises_not_found(self, service):
        with pytest.raises(NotFoundError):
            await service.update_team_member("missing", TeamMemberUpdate(role="Lead"))

    async def test_toggle_keeps_display_order(self, service):
        await add_member(service, "Ada")
        brian = await add_member(service, "Brian")

        toggled = await service.toggle_active_status(brian.id)

        assert toggled.is_active is False
        assert toggled.display_order == 2
        public = await service.get_public_team_members()
        assert [m.name for m in public] == ["Ada"]


class TestDelete:

    async def test_delete_closes_the_gap(self, service):
        await add_member(service, "Ada")
        brian = await add_member(service, "Brian")
        await add_member(service, "Chloe")

        await service.delete_team_member(brian.id)

        assert await roster(service) == [("Ada", 1), ("Chloe", 2)]

    async def test_delete_unknown_member_raises_not_found(self, service):
        with pytest.raises(NotFoundError):
            await service.delete_team_member("missing")

    async def test_delete_discards_cv_file(self, service, cv_storage):
        member = await add_member(service, "Ada")
        attachment = await service.upload_cv(member.id, "ada.pdf", "application/pdf", PDF_BYTES)
        key = attachment.file_url.removeprefix("/static/uploads/")
        assert cv_storage.exists(key)

        await service.delete_team_member(member.id)

        assert not cv_storage.exists(key)


class TestReorder:

    async def test_reorder_assigns_position_plus_one(self, service):
        ada = await add_member(service, "Ada")
        brian = await add_member(service, "Brian")
        chloe = await add_member(service, "Chloe", is_active=False)

        await service.reorder_team_members([chloe.id, ada.id, brian.id])

        assert await roster(service) == [("Chloe", 1), ("Ada", 2), ("Brian", 3)]

    @pytest.mark.parametrize("mutate", [
        lambda ids: ids[:-1],
        lambda ids: ids + [ids[0]],
        lambda ids: ids[:-1] + ["unknown"],
    ], ids=["missing", "duplicated", "unknown"])
    async def test_non_permutation_is_rejected_without_changes(self, service, mutate):
        ids = [(await add_member(service, name)).id for name in ("Ada", "Brian", "Chloe")]
        before = await roster(service)

        with pytest.raises(ConflictError):
            await service.reorder_team_members(mutate(list(reversed(ids))))

        assert await roster(service) == before


# =============================================================================
# CV ATTACHMENT
# =============================================================================


class TestCV:

    async def test_upload_replaces_previous_file(self, service, cv_storage):
        member = await add_member(service, "Ada")
        first = await service.upload_cv(member.id, "v1.pdf", "application/pdf", PDF_BYTES)
        second = await service.upload_cv(member.id, "v2.pdf", "application/pdf", PDF_BYTES + b"v2")

        assert second.file_name == "v2.pdf"
        assert second.file_size_bytes == len(PDF_BYTES) + 2
        assert not cv_storage.exists(first.file_url.removeprefix("/static/uploads/"))
        assert cv_storage.exists(second.file_url.removeprefix("/static/uploads/"))

    async def test_upload_rejects_non_pdf(self, service):
        member = await add_member(service, "Ada")

        with pytest.raises(ValidationError) as exc_info:
            await service.upload_cv(member.id, "photo.png", "image/png", b"png")

        assert exc_info.value.code == "InvalidType"

    async def test_delete_cv_without_attachment_raises_not_found(self, service):
        member = await add_member(service, "Ada")

        with pytest.raises(NotFoundError) as exc_info:
            await service.delete_cv(member.id)

        assert exc_info.value.code == "CVNotFound"

    async def test_delete_cv_clears_metadata(self, service):
        member = await add_member(service, "Ada")
        await service.upload_cv(member.id, "ada.pdf", "application/pdf", PDF_BYTES)

        await service.delete_cv(member.id)

        assert (await service.get_team_member(member.id)).cv is None

    async def test_download_requires_active_member(self, service):
        member = await add_member(service, "Ada", is_active=False)
        await service.upload_cv(member.id, "ada.pdf", "application/pdf", PDF_BYTES)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_cv_download(member.id)

        assert exc_info.value.code == "CVNotAvailable"

    async def test_statistics_count_members(self, service):
        ada = await add_member(service, "Ada")
        await add_member(service, "Brian", is_active=False)
        await service.upload_cv(ada.id, "ada.pdf", "application/pdf", PDF_BYTES)

        stats = await service.get_statistics()

        assert stats.total_members == 2
        assert stats.active_members == 1
        assert stats.inactive_members == 1
        assert stats.members_with_cv == 1


# =============================================================================
# MIXED SEQUENCES
# =============================================================================


async def assert_contiguous(service):
    orders = [m.display_order for m in await service.get_team_members()]
    assert sorted(orders) == list(range(1, len(orders) + 1))


class TestMixedSequence:

    async def test_orders_stay_contiguous_after_every_step(self, service):
        ids = {}

        async def create(name, **fields):
            ids[name] = (await add_member(service, name, **fields)).id

        async def move(name, position):
            await service.update_team_member(ids[name], TeamMemberUpdate(display_order=position))

        async def delete_at(position):
            members = await service.get_team_members()
            await service.delete_team_member(members[position].id)

        async def toggle(name):
            await service.toggle_active_status(ids[name])

        async def reverse():
            members = await service.get_team_members()
            await service.reorder_team_members([m.id for m in reversed(members)])

        steps = [
            lambda: create("Ada"),
            lambda: create("Brian"),
            lambda: create("Chloe", display_order=1),
            lambda: create("Dan", display_order=2),
            lambda: create("Eve"),
            lambda: create("Finn", display_order=3),
            lambda: move("Eve", 1),
            lambda: move("Chloe", 6),
            lambda: move("Dan", 3),
            lambda: toggle("Brian"),
            lambda: reverse(),
            lambda: delete_at(0),
            lambda: create("Gus", display_order=2),
            lambda: delete_at(2),
            lambda: move("Eve", 2),
            lambda: delete_at(-1),
            lambda: toggle("Brian"),
            lambda: reverse(),
            lambda: create("Hana"),
        ]

        for step in steps:
            await step()
            await assert_contiguous(service)

        assert len(await service.get_team_members()) == 5

    @pytest.mark.parametrize("seed", [1, 7, 42])
    async def test_random_sequences_keep_orders_contiguous(self, service, seed):
        rng = random.Random(seed)
        for index in range(4):
            await add_member(service, f"Member {index}")

        for step in range(25):
            members = await service.get_team_members()
            action = rng.choice(["create", "move", "delete", "toggle", "reorder"]) if members else "create"
            if action == "create":
                position = rng.choice([None, rng.randint(1, len(members) + 2)])
                await add_member(service, f"Step {step}", display_order=position)
            elif action == "move":
                target = rng.choice(members)
                await service.update_team_member(
                    target.id, TeamMemberUpdate(display_order=rng.randint(1, len(members) + 1))
                )
            elif action == "delete":
                await service.delete_team_member(rng.choice(members).id)
            elif action == "toggle":
                await service.toggle_active_status(rng.choice(members).id)
            else:
                shuffled = [m.id for m in members]
                rng.shuffle(shuffled)
                await service.reorder_team_members(shuffled)

            await assert_contiguous(service)


# =============================================================================
# TIMESTAMPS
# =============================================================================


class TestTimestamps:

    def test_utc_now_is_timezone_aware(self):
        assert utc_now().utcoffset() == timedelta(0)

    async def test_created_and_updated_at_round_trip(self, service):
        member = await add_member(service, "Ada")

        assert member.updated_at is None
        created_at = datetime.fromisoformat(member.created_at)

        updated = await service.update_team_member(member.id, TeamMemberUpdate(role="Lead"))

        assert updated.created_at == member.created_at
        assert datetime.fromisoformat(updated.updated_at) >= created_at

    async def test_cv_upload_time_is_recorded(self, service):
        member = await add_member(service, "Ada")

        attachment = await service.upload_cv(member.id, "ada.pdf", "application/pdf", PDF_BYTES)

        assert datetime.fromisoformat(attachment.uploaded_at) >= datetime.fromisoformat(member.created_at)
