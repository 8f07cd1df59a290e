"""Search and status filtering over the cached roster."""

from typing import List, Sequence, Union

from team_roster.models.enums import StatusFilter
from team_roster.roster.gateway import RosterMember
from team_roster.schemas.team_member import TeamStatistics


def _is_active(member: RosterMember) -> bool:
    # Public members are active by construction
    return getattr(member, "is_active", True)


def _has_cv(member: RosterMember) -> bool:
    if hasattr(member, "has_cv"):
        return member.has_cv
    return getattr(member, "cv", None) is not None


def filter_members(
    members: Sequence[RosterMember],
    search_term: str = "",
    status_filter: Union[StatusFilter, str] = StatusFilter.ALL,
) -> List[RosterMember]:
    """Members whose name or role contains ``search_term`` and whose status matches.

    Matching is case-insensitive; an empty term matches everything. The
    result keeps the input order.
    """
    status_filter = StatusFilter(status_filter)
    term = search_term.lower()

    result = []
    for member in members:
        if term and term not in member.name.lower() and term not in member.role.lower():
            continue
        if status_filter == StatusFilter.ACTIVE and not _is_active(member):
            continue
        if status_filter == StatusFilter.INACTIVE and _is_active(member):
            continue
        result.append(member)
    return result


def roster_statistics(members: Sequence[RosterMember]) -> TeamStatistics:
    active = sum(1 for member in members if _is_active(member))
    return TeamStatistics(
        total_members=len(members),
        active_members=active,
        inactive_members=len(members) - active,
        members_with_cv=sum(1 for member in members if _has_cv(member)),
    )
