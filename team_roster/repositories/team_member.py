"""Team member repository for CRUD and ordering operations."""

from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from team_roster.models.base import utc_now
from team_roster.models.team_member import TeamMember
from team_roster.schemas.team_member import TeamMemberCreate


class TeamMemberRepository:
    """Team member repository.

    Every method that changes ``display_order`` keeps the roster's orders
    exactly ``1..N`` and commits once, so no intermediate numbering is ever
    visible to another session.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ===== BASIC CRUD OPERATIONS =====

    async def create(self, team_member_data: TeamMemberCreate, created_by: Optional[str] = None) -> TeamMember:
        """Create a new team member at the requested (clamped) position."""
        total = await self.count_all_members()
        if team_member_data.display_order is None:
            display_order = total + 1
        else:
            display_order = min(team_member_data.display_order, total + 1)
            await self._shift_display_orders(display_order, shift_up=True)

        team_member = TeamMember(
            name=team_member_data.name,
            role=team_member_data.role,
            placeholder=team_member_data.placeholder,
            short_description=team_member_data.short_description,
            full_description=team_member_data.full_description,
            experience=team_member_data.experience,
            education=team_member_data.education,
            skills=list(team_member_data.skills),
            display_order=display_order,
            is_active=team_member_data.is_active,
            created_by=created_by,
            updated_by=created_by
        )

        self.session.add(team_member)
        await self.session.commit()
        await self.session.refresh(team_member)
        return team_member

    async def get_by_id(self, team_member_id: str) -> Optional[TeamMember]:
        """Get team member by ID."""
        query = select(TeamMember).where(TeamMember.id == team_member_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def update(self, team_member: TeamMember, update_data: Dict[str, Any], updated_by: Optional[str] = None) -> TeamMember:
        """Apply a partial update; a new display_order moves the member."""
        new_order = update_data.pop("display_order", None)
        if new_order is not None:
            await self._move_to(team_member, new_order)

        for key, value in update_data.items():
            setattr(team_member, key, value)

        team_member.touch(updated_by)

        await self.session.commit()
        await self.session.refresh(team_member)
        return team_member

    async def delete(self, team_member: TeamMember) -> None:
        """Permanently delete a team member and close the gap it leaves."""
        removed_order = team_member.display_order
        await self.session.delete(team_member)
        await self.session.flush()
        await self._shift_display_orders(removed_order + 1, shift_up=False)
        await self.session.commit()

    async def save(self, team_member: TeamMember, updated_by: Optional[str] = None) -> TeamMember:
        """Persist in-place changes (CV metadata) made on a loaded member."""
        team_member.touch(updated_by)
        await self.session.commit()
        await self.session.refresh(team_member)
        return team_member

    # ===== LISTING =====

    async def get_all_members(self, active_only: bool = False) -> List[TeamMember]:
        """Get the roster ordered by display_order."""
        query = select(TeamMember)
        if active_only:
            query = query.where(TeamMember.is_active.is_(True))
        query = query.order_by(TeamMember.display_order.asc())

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_all_ids(self) -> List[str]:
        """Get every member id in roster order."""
        query = select(TeamMember.id).order_by(TeamMember.display_order.asc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_all_members(self) -> int:
        """Count all team members, active or not."""
        result = await self.session.execute(select(func.count(TeamMember.id)))
        return result.scalar() or 0

    # ===== ORDERING =====

    async def reorder(self, ordered_ids: Sequence[str], updated_by: Optional[str] = None) -> None:
        """Assign display_order = position + 1 to every member in one commit.

        The caller must already have checked that ``ordered_ids`` is a
        permutation of the roster; on any failure nothing is committed.
        """
        now = utc_now()
        try:
            for position, member_id in enumerate(ordered_ids, start=1):
                await self.session.execute(
                    update(TeamMember)
                    .where(TeamMember.id == member_id)
                    .values(display_order=position, updated_at=now, updated_by=updated_by)
                )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def _move_to(self, team_member: TeamMember, new_order: int) -> None:
        """Move a member to ``new_order`` (clamped to 1..N), shifting the ones in between."""
        total = await self.count_all_members()
        new_order = max(1, min(new_order, total))
        current_order = team_member.display_order
        if new_order == current_order:
            return

        if new_order < current_order:
            stmt = (
                update(TeamMember)
                .where(
                    TeamMember.display_order >= new_order,
                    TeamMember.display_order < current_order,
                    TeamMember.id != team_member.id
                )
                .values(display_order=TeamMember.display_order + 1)
            )
        else:
            stmt = (
                update(TeamMember)
                .where(
                    TeamMember.display_order > current_order,
                    TeamMember.display_order <= new_order,
                    TeamMember.id != team_member.id
                )
                .values(display_order=TeamMember.display_order - 1)
            )
        await self.session.execute(stmt)
        team_member.display_order = new_order

    async def _shift_display_orders(self, from_order: int, shift_up: bool = True) -> None:
        """Shift every member at or after ``from_order`` by one position."""
        delta = 1 if shift_up else -1
        stmt = (
            update(TeamMember)
            .where(TeamMember.display_order >= from_order)
            .values(display_order=TeamMember.display_order + delta)
        )
        await self.session.execute(stmt)
        await self.session.flush()  # Don't commit yet, let the main operation handle it
