# api/permissions.py
from collections import namedtuple

from .models import GroupMember, MemberRole, OwnerType, PermissionType, RobotPermission

# has_access: the user may see and use the robot
# is_admin:   the user may manage it (grant/revoke permissions)
# level:      'ADMIN', 'USAGE' or None, as reported back to clients
Access = namedtuple('Access', ['has_access', 'is_admin', 'level'])

NO_ACCESS = Access(False, False, None)


def evaluate_access(is_owner, membership_role=None, grant_type=None):
    """
    Combine the three ownership relations into an Access.

    is_owner: the robot is owned directly by the user
    membership_role: the user's role in the owning group, None if the robot is
        not group-owned or the user is not a member
    grant_type: the user's explicit RobotPermission type, None if there is none

    Ownership and group admin always win over a weaker explicit grant.
    """
    if is_owner:
        return Access(True, True, PermissionType.ADMIN)

    if membership_role is not None:
        is_admin = membership_role == MemberRole.ADMIN or grant_type == PermissionType.ADMIN
        has_access = is_admin or grant_type is not None
    else:
        is_admin = grant_type == PermissionType.ADMIN
        has_access = grant_type is not None

    if not has_access:
        return NO_ACCESS
    return Access(True, is_admin, PermissionType.ADMIN if is_admin else grant_type)


def get_membership(user, group_id):
    return GroupMember.objects.filter(user=user, group_id=group_id).first()


def is_group_admin(user, group_id):
    return GroupMember.objects.filter(user=user, group_id=group_id, role=MemberRole.ADMIN).exists()


def resolve_access(user, robot):
    """Load the user's relations to `robot` and evaluate them."""
    if robot.is_owned_by_user(user):
        return evaluate_access(is_owner=True)

    membership_role = None
    owner = robot.owner
    if owner.kind == OwnerType.GROUP:
        membership = get_membership(user, owner.id)
        membership_role = membership.role if membership else None

    grant_type = (
        RobotPermission.objects
        .filter(user=user, robot=robot)
        .values_list('permission_type', flat=True)
        .first()
    )
    return evaluate_access(False, membership_role, grant_type)


def can_delete_robot(user, robot):
    # Explicit ADMIN grants are not enough; only owners and owning-group admins
    if robot.is_owned_by_user(user):
        return True
    owner = robot.owner
    return owner.kind == OwnerType.GROUP and is_group_admin(user, owner.id)
