# api/services/groups.py
import logging
from collections import defaultdict

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from ..exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ..models import Group, GroupMember, MemberRole, OwnerType, Robot, RobotPermission

logger = logging.getLogger(__name__)

User = get_user_model()

LAST_ADMIN_MESSAGE = "A group must keep at least one admin"


def _require_group_admin(user, group_id, message):
    membership = GroupMember.objects.filter(user=user, group_id=group_id).first()
    if membership is None or not membership.is_admin:
        logger.warning("User %s denied admin action on group %s", user.pk, group_id)
        raise ForbiddenError(message)
    return membership


def _get_member_or_404(group_id, user_id):
    membership = (
        GroupMember.objects
        .select_related('user')
        .filter(group_id=group_id, user_id=user_id)
        .first()
    )
    if membership is None:
        raise NotFoundError("Member not found")
    return membership


def _ensure_other_admin(membership):
    others = (
        GroupMember.objects
        .filter(group_id=membership.group_id, role=MemberRole.ADMIN)
        .exclude(pk=membership.pk)
    )
    if not others.exists():
        raise ValidationError(LAST_ADMIN_MESSAGE)


def _attach_member_view(groups, user):
    """Annotate each group with the user's role and the robots it owns."""
    roles = dict(
        GroupMember.objects
        .filter(user=user, group__in=groups)
        .values_list('group_id', 'role')
    )
    robots_by_group = defaultdict(list)
    owned = (
        Robot.objects
        .filter(owner_type=OwnerType.GROUP, owner_id__in=[g.pk for g in groups])
        .prefetch_related('permissions__user')
        .order_by('created_at', 'id')
    )
    for robot in owned:
        robots_by_group[robot.owner_id].append(robot)

    for group in groups:
        group.user_role = roles.get(group.pk)
        group.owned_robots = robots_by_group[group.pk]
    return groups


def create_group(acting_user, name):
    with transaction.atomic():
        group = Group.objects.create(name=name)
        GroupMember.objects.create(user=acting_user, group=group, role=MemberRole.ADMIN)

    logger.info("User %s created group %s (%s)", acting_user.pk, group.pk, group.name)
    return Group.objects.prefetch_related('members__user').get(pk=group.pk)


def list_groups(acting_user):
    groups = list(
        Group.objects
        .filter(members__user=acting_user)
        .prefetch_related('members__user')
        .order_by('created_at', 'id')
    )
    return _attach_member_view(groups, acting_user)


def get_group(acting_user, group_id):
    # Non-members get the same answer as for a missing group
    group = (
        Group.objects
        .filter(pk=group_id, members__user=acting_user)
        .prefetch_related('members__user')
        .first()
    )
    if group is None:
        raise NotFoundError("Group not found")
    return _attach_member_view([group], acting_user)[0]


def add_member(acting_user, group_id, email, role=MemberRole.MEMBER):
    _require_group_admin(acting_user, group_id, "Only group admins can add members")

    user_to_add = User.objects.filter(email=email).first()
    if user_to_add is None:
        raise NotFoundError("User not found")

    if GroupMember.objects.filter(user=user_to_add, group_id=group_id).exists():
        raise ConflictError("User is already a member of this group")

    try:
        with transaction.atomic():
            membership = GroupMember.objects.create(user=user_to_add, group_id=group_id, role=role)
    except IntegrityError:
        raise ConflictError("User is already a member of this group")

    logger.info("User %s added user %s to group %s as %s", acting_user.pk, user_to_add.pk, group_id, role)
    return membership


def remove_member(acting_user, group_id, user_id):
    """Drop a membership along with the member's grants on robots the group owns."""
    _require_group_admin(acting_user, group_id, "Only group admins can remove members")
    membership = _get_member_or_404(group_id, user_id)
    if membership.is_admin:
        _ensure_other_admin(membership)

    with transaction.atomic():
        group_robot_ids = Robot.objects.filter(
            owner_type=OwnerType.GROUP, owner_id=group_id,
        ).values_list('id', flat=True)
        RobotPermission.objects.filter(user_id=user_id, robot_id__in=group_robot_ids).delete()
        membership.delete()

    logger.info("User %s removed user %s from group %s", acting_user.pk, user_id, group_id)


def update_member_role(acting_user, group_id, user_id, role):
    _require_group_admin(acting_user, group_id, "Only group admins can update member roles")
    membership = _get_member_or_404(group_id, user_id)
    if membership.is_admin and role != MemberRole.ADMIN:
        _ensure_other_admin(membership)

    membership.role = role
    membership.save(update_fields=['role'])
    logger.info("User %s set role of user %s in group %s to %s", acting_user.pk, user_id, group_id, role)
    return membership


def delete_group(acting_user, group_id):
    """Delete a group; its robots (and their grants and settings) go with it."""
    membership = _require_group_admin(acting_user, group_id, "Only group admins can delete the group")

    with transaction.atomic():
        # Group-owned robots are removed by the pre_delete handler in api.signals
        membership.group.delete()

    logger.info("User %s deleted group %s", acting_user.pk, group_id)
