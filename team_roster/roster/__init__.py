"""Client-side roster store."""

from team_roster.roster.coordinator import MutationCoordinator
from team_roster.roster.cv_attachments import CVAttachmentManager
from team_roster.roster.directory_cache import DirectoryCache
from team_roster.roster.gateway import HttpGateway, MemberGateway, ServiceGateway
from team_roster.roster.ordering import OrderReconciler
from team_roster.roster.projection import filter_members, roster_statistics
from team_roster.roster.store import RosterStore

__all__ = [
    "CVAttachmentManager",
    "DirectoryCache",
    "HttpGateway",
    "MemberGateway",
    "MutationCoordinator",
    "OrderReconciler",
    "RosterStore",
    "ServiceGateway",
    "filter_members",
    "roster_statistics",
]
