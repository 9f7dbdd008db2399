# api/models.py
import json
from collections import namedtuple

from django.contrib.auth.models import AbstractUser
from django.db import models


class MemberRole(models.TextChoices):
    ADMIN = 'ADMIN', 'Admin'
    MEMBER = 'MEMBER', 'Member'


class OwnerType(models.TextChoices):
    USER = 'USER', 'User'
    GROUP = 'GROUP', 'Group'


class PermissionType(models.TextChoices):
    USAGE = 'USAGE', 'Usage'
    ADMIN = 'ADMIN', 'Admin'


# Tagged owner of a robot: kind is an OwnerType value, id points at a User or a Group
Owner = namedtuple('Owner', ['kind', 'id'])


class User(AbstractUser):
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username', 'name']

    def __str__(self):
        return self.email


class Group(models.Model):
    """
    A set of users that can own robots together.

    Deleting a group also deletes the robots it owns (see api.signals),
    since robot ownership is not a database-level foreign key.
    """
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


class GroupMember(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='members')
    role = models.CharField(max_length=10, choices=MemberRole.choices, default=MemberRole.MEMBER)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('user', 'group')

    @property
    def is_admin(self):
        return self.role == MemberRole.ADMIN

    def __str__(self):
        return f"{self.user.email} in {self.group.name} ({self.role})"


class Robot(models.Model):
    serial_number = models.CharField(max_length=100, unique=True)
    name = models.CharField(max_length=100)
    # owner_id is a User pk or a Group pk depending on owner_type
    owner_type = models.CharField(max_length=10, choices=OwnerType.choices)
    owner_id = models.PositiveBigIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['owner_type', 'owner_id'], name='robot_owner_idx'),
        ]

    @property
    def owner(self):
        return Owner(self.owner_type, self.owner_id)

    def is_owned_by_user(self, user):
        return self.owner == (OwnerType.USER, user.pk)

    def __str__(self):
        return f"{self.name} ({self.serial_number})"


# A user's explicit permission on a single robot, independent of ownership
class RobotPermission(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='robot_permissions')
    robot = models.ForeignKey(Robot, on_delete=models.CASCADE, related_name='permissions')
    permission_type = models.CharField(max_length=10, choices=PermissionType.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('user', 'robot')

    def __str__(self):
        return f"{self.user.email} - {self.robot.serial_number}: {self.permission_type}"


class RobotSetting(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='robot_settings')
    robot = models.ForeignKey(Robot, on_delete=models.CASCADE, related_name='user_settings')
    # Serialized JSON text, read and written through the `settings` property
    raw_settings = models.TextField(db_column='settings', default='{}')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('user', 'robot')

    @property
    def settings(self):
        return json.loads(self.raw_settings)

    @settings.setter
    def settings(self, value):
        self.raw_settings = json.dumps(value)

    def __str__(self):
        return f"Settings of {self.user.email} for {self.robot.serial_number}"
