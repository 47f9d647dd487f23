# app/core/rbac.py

from enum import Enum
from typing import Dict, FrozenSet, Optional

from loguru import logger

from app.core.exceptions import PermissionDenied
from app.models.user import UserRole
from app.schemas.auth import Identity


class Operation(str, Enum):
    # --- Admin ---
    CreateHod = "user:create_hod"
    DeleteUser = "user:delete"
    ListUsers = "user:list"
    ApproveEvent = "event:approve"
    RejectEvent = "event:reject"
    ListPendingEvents = "event:list_pending"
    ListAllEvents = "event:list_all"
    ViewStats = "stats:view"
    ViewAuditLogs = "audit:view"

    # --- HOD ---
    CreateEvent = "event:create"
    ListOwnEvents = "event:list_own"
    ViewAttendance = "event:attendance"

    # --- Student ---
    RegisterForEvent = "event:register"
    UpdateInterests = "user:update_interests"
    ViewRecommendations = "event:recommendations"
    ViewRegistrations = "event:registrations"

    # --- Any signed-in identity ---
    BrowseEvents = "event:browse"
    ViewProfile = "user:profile"


ANY_ROLE: FrozenSet[UserRole] = frozenset(UserRole)

PERMISSIONS: Dict[Operation, FrozenSet[UserRole]] = {
    Operation.CreateHod: frozenset({UserRole.Admin}),
    Operation.DeleteUser: frozenset({UserRole.Admin}),
    Operation.ListUsers: frozenset({UserRole.Admin}),
    Operation.ApproveEvent: frozenset({UserRole.Admin}),
    Operation.RejectEvent: frozenset({UserRole.Admin}),
    Operation.ListPendingEvents: frozenset({UserRole.Admin}),
    Operation.ListAllEvents: frozenset({UserRole.Admin}),
    Operation.ViewStats: frozenset({UserRole.Admin}),
    Operation.ViewAuditLogs: frozenset({UserRole.Admin}),

    Operation.CreateEvent: frozenset({UserRole.HOD}),
    Operation.ListOwnEvents: frozenset({UserRole.HOD}),
    Operation.ViewAttendance: frozenset({UserRole.HOD}),

    Operation.RegisterForEvent: frozenset({UserRole.Student}),
    Operation.UpdateInterests: frozenset({UserRole.Student}),
    Operation.ViewRecommendations: frozenset({UserRole.Student}),
    Operation.ViewRegistrations: frozenset({UserRole.Student}),

    Operation.BrowseEvents: ANY_ROLE,
    Operation.ViewProfile: ANY_ROLE,
}


def is_allowed(identity: Optional[Identity], operation: Operation) -> bool:
    if identity is None:
        return False
    return identity.role in PERMISSIONS[operation]


def authorize(identity: Optional[Identity], operation: Operation) -> Identity:
    """
    The single permission check for every operation.

    Returns the identity so callers can write
    ``identity = authorize(identity, Operation.X)``.
    There is no admin bypass: an admin cannot create events or register
    for them.
    """
    if identity is None:
        raise PermissionDenied("Please login to continue")

    if identity.role not in PERMISSIONS[operation]:
        logger.warning(
            f"Denied {operation.value} for role '{identity.role.value}' (user {identity.id})"
        )
        allowed = ", ".join(sorted(r.value for r in PERMISSIONS[operation]))
        raise PermissionDenied(
            f"Access denied for role '{identity.role.value}' (requires: {allowed})"
        )

    return identity
