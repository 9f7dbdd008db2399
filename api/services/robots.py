# api/services/robots.py
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q

from ..exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ..models import Group, GroupMember, MemberRole, OwnerType, PermissionType, Robot, RobotPermission
from ..permissions import can_delete_robot, is_group_admin, resolve_access

logger = logging.getLogger(__name__)

User = get_user_model()

SERIAL_TAKEN = "Serial number already exists"


def get_robot_or_404(serial_number):
    robot = Robot.objects.filter(serial_number=serial_number).first()
    if robot is None:
        raise NotFoundError("Robot not found")
    return robot


def _load_owner(robot):
    kind, owner_id = robot.owner
    if kind == OwnerType.GROUP:
        return Group.objects.prefetch_related('members__user').filter(pk=owner_id).first()
    return User.objects.filter(pk=owner_id).first()


def _with_permissions(robot):
    return Robot.objects.prefetch_related('permissions__user').get(pk=robot.pk)


def create_robot(acting_user, serial_number, name, owner_type, owner_id=None):
    if owner_type == OwnerType.USER:
        if owner_id is None:
            owner_id = acting_user.pk
        elif owner_id != acting_user.pk:
            raise ForbiddenError("Cannot create robots for other users")
    else:
        if owner_id is None:
            raise ValidationError("Owner ID is required for group-owned robots")
        if not Group.objects.filter(pk=owner_id).exists():
            raise NotFoundError("Group not found")
        if not is_group_admin(acting_user, owner_id):
            raise ForbiddenError("Only group admins can create group-owned robots")

    if Robot.objects.filter(serial_number=serial_number).exists():
        raise ConflictError(SERIAL_TAKEN)

    try:
        with transaction.atomic():
            robot = Robot.objects.create(
                serial_number=serial_number,
                name=name,
                owner_type=owner_type,
                owner_id=owner_id,
            )
    except IntegrityError:
        raise ConflictError(SERIAL_TAKEN)

    logger.info("User %s created robot %s owned by %s %s", acting_user.pk, serial_number, owner_type, owner_id)
    return _with_permissions(robot)


def list_robots(acting_user):
    """
    Every robot the user can reach, each once, with `user_permission` set.

    Owned robots and robots of groups the user administers report ADMIN even
    when a weaker explicit grant also exists.
    """
    admin_group_ids = set(
        GroupMember.objects
        .filter(user=acting_user, role=MemberRole.ADMIN)
        .values_list('group_id', flat=True)
    )
    granted = dict(
        RobotPermission.objects
        .filter(user=acting_user)
        .values_list('robot_id', 'permission_type')
    )

    robots = (
        Robot.objects
        .filter(
            Q(owner_type=OwnerType.USER, owner_id=acting_user.pk)
            | Q(owner_type=OwnerType.GROUP, owner_id__in=admin_group_ids)
            | Q(pk__in=list(granted))
        )
        .prefetch_related('permissions__user')
        .order_by('created_at', 'id')
    )

    result = []
    for robot in robots:
        owner = robot.owner
        if robot.is_owned_by_user(acting_user) or (owner.kind == OwnerType.GROUP and owner.id in admin_group_ids):
            robot.user_permission = PermissionType.ADMIN
        else:
            robot.user_permission = granted[robot.pk]
        result.append(robot)
    return result


def get_robot(acting_user, serial_number):
    robot = get_robot_or_404(serial_number)
    access = resolve_access(acting_user, robot)
    if not access.has_access:
        logger.warning("User %s denied access to robot %s", acting_user.pk, serial_number)
        raise ForbiddenError("Access denied")

    robot = _with_permissions(robot)
    robot.user_permission = access.level
    robot.owner_detail = _load_owner(robot)
    return robot


def delete_robot(acting_user, serial_number):
    robot = get_robot_or_404(serial_number)
    if not can_delete_robot(acting_user, robot):
        raise ForbiddenError("Only the robot owner can delete it")

    # Grants and settings cascade
    robot.delete()
    logger.info("User %s deleted robot %s", acting_user.pk, serial_number)


def grant_permission(acting_user, serial_number, permission_type, user_id=None, email=None):
    """Create or update the target user's grant on a robot; returns the grant."""
    robot = get_robot_or_404(serial_number)
    if not resolve_access(acting_user, robot).is_admin:
        raise ForbiddenError("Only robot admins can grant permissions")

    if user_id is not None:
        target = User.objects.filter(pk=user_id).first()
    else:
        target = User.objects.filter(email=email).first()
    if target is None:
        raise NotFoundError("User not found")

    permission, created = RobotPermission.objects.update_or_create(
        user=target,
        robot=robot,
        defaults={'permission_type': permission_type},
    )
    logger.info("User %s %s %s on robot %s for user %s", acting_user.pk,
                "granted" if created else "changed grant to", permission_type, serial_number, target.pk)
    return permission


def revoke_permission(acting_user, serial_number, user_id):
    robot = get_robot_or_404(serial_number)
    if not resolve_access(acting_user, robot).is_admin:
        raise ForbiddenError("Only robot admins can revoke permissions")

    deleted, _ = RobotPermission.objects.filter(user_id=user_id, robot=robot).delete()
    if not deleted:
        raise NotFoundError("Permission not found")

    logger.info("User %s revoked permission on robot %s for user %s", acting_user.pk, serial_number, user_id)
