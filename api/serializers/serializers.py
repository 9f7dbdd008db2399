# api/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from ..models import (
    Group, GroupMember, Robot, RobotPermission, RobotSetting,
    MemberRole, OwnerType, PermissionType,
)

User = get_user_model()

# Largest id a signed 64-bit column holds
MAX_ID = 2 ** 63 - 1


def _required(message):
    return {'required': message, 'blank': message, 'null': message}


# --- Account Serializers ---
class RegisterSerializer(serializers.Serializer):
    REQUIRED_MESSAGE = "Email, password, and name are required"

    name = serializers.CharField(max_length=150, error_messages=_required(REQUIRED_MESSAGE))
    # The email is mirrored into username, which caps it at 150 characters
    email = serializers.EmailField(max_length=150,
                                   error_messages={**_required(REQUIRED_MESSAGE),
                                                   'max_length': "Email must be at most 150 characters"})
    password = serializers.CharField(write_only=True, trim_whitespace=False,
                                     error_messages=_required(REQUIRED_MESSAGE),
                                     style={'input_type': 'password'})


class LoginSerializer(serializers.Serializer):
    REQUIRED_MESSAGE = "Email and password are required"

    # Not an EmailField: a malformed address is just another bad credential
    email = serializers.CharField(error_messages=_required(REQUIRED_MESSAGE))
    password = serializers.CharField(write_only=True, trim_whitespace=False,
                                     error_messages=_required(REQUIRED_MESSAGE),
                                     style={'input_type': 'password'})


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ('id', 'email', 'name')


class UserSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = ('id', 'email', 'name', 'createdAt')


# --- Group Serializers ---
class GroupCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, error_messages=_required("Group name is required"))


class MemberAddSerializer(serializers.Serializer):
    email = serializers.CharField(error_messages=_required("User email is required"))
    role = serializers.ChoiceField(choices=MemberRole.choices, default=MemberRole.MEMBER,
                                   error_messages={'invalid_choice': "Role must be ADMIN or MEMBER"})


class MemberRoleSerializer(serializers.Serializer):
    ROLE_MESSAGE = "Valid role is required (ADMIN or MEMBER)"

    role = serializers.ChoiceField(choices=MemberRole.choices,
                                   error_messages={**_required(ROLE_MESSAGE), 'invalid_choice': ROLE_MESSAGE})


class GroupMemberSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    groupId = serializers.IntegerField(source='group_id', read_only=True)
    user = UserSummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = GroupMember
        fields = ('id', 'userId', 'groupId', 'role', 'user', 'createdAt')


class GroupSerializer(serializers.ModelSerializer):
    members = GroupMemberSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Group
        fields = ('id', 'name', 'createdAt', 'updatedAt', 'members')


# --- Robot Serializers ---
class RobotCreateSerializer(serializers.Serializer):
    REQUIRED_MESSAGE = "Serial number, name, and owner type are required"

    serialNumber = serializers.CharField(source='serial_number', max_length=100,
                                         error_messages=_required(REQUIRED_MESSAGE))
    name = serializers.CharField(max_length=100, error_messages=_required(REQUIRED_MESSAGE))
    ownerType = serializers.ChoiceField(source='owner_type', choices=OwnerType.choices,
                                        error_messages={**_required(REQUIRED_MESSAGE),
                                                        'invalid_choice': "Owner type must be USER or GROUP"})
    ownerId = serializers.IntegerField(source='owner_id', required=False, allow_null=True, min_value=1,
                                      max_value=MAX_ID)


class RobotPermissionSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    robotId = serializers.IntegerField(source='robot_id', read_only=True)
    permissionType = serializers.CharField(source='permission_type', read_only=True)
    user = UserSummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = RobotPermission
        fields = ('id', 'userId', 'robotId', 'permissionType', 'user', 'createdAt', 'updatedAt')


class RobotSerializer(serializers.ModelSerializer):
    serialNumber = serializers.CharField(source='serial_number', read_only=True)
    ownerType = serializers.CharField(source='owner_type', read_only=True)
    ownerId = serializers.IntegerField(source='owner_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    permissions = RobotPermissionSerializer(many=True, read_only=True)

    class Meta:
        model = Robot
        fields = ('id', 'serialNumber', 'name', 'ownerType', 'ownerId', 'createdAt', 'updatedAt', 'permissions')


class RobotWithAccessSerializer(RobotSerializer):
    """A robot as seen by one user; the service attaches `user_permission`."""
    userPermission = serializers.CharField(source='user_permission', read_only=True, allow_null=True)

    class Meta(RobotSerializer.Meta):
        fields = RobotSerializer.Meta.fields + ('userPermission',)


class RobotDetailSerializer(RobotWithAccessSerializer):
    owner = serializers.SerializerMethodField()
    ownerInfo = serializers.SerializerMethodField()

    class Meta(RobotWithAccessSerializer.Meta):
        fields = RobotWithAccessSerializer.Meta.fields + ('owner', 'ownerInfo')

    def get_owner(self, obj):
        owner = getattr(obj, 'owner_detail', None)
        if owner is None:
            return None
        if isinstance(owner, Group):
            return GroupSerializer(owner).data
        return UserSummarySerializer(owner).data

    # Older clients read the owner from this key
    def get_ownerInfo(self, obj):
        return self.get_owner(obj)


class GroupWithRobotsSerializer(GroupSerializer):
    """A group as seen by one member; the service attaches `user_role` and `owned_robots`."""
    userRole = serializers.CharField(source='user_role', read_only=True)
    robots = RobotSerializer(source='owned_robots', many=True, read_only=True)

    class Meta(GroupSerializer.Meta):
        fields = GroupSerializer.Meta.fields + ('userRole', 'robots')


# --- Permission Serializers ---
class PermissionGrantSerializer(serializers.Serializer):
    REQUIRED_MESSAGE = "User ID or email and permission type are required"

    userId = serializers.IntegerField(source='user_id', required=False, allow_null=True, min_value=1,
                                     max_value=MAX_ID)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    permissionType = serializers.ChoiceField(source='permission_type', choices=PermissionType.choices,
                                             error_messages={**_required(REQUIRED_MESSAGE),
                                                             'invalid_choice': "Permission type must be USAGE or ADMIN"})

    def validate(self, attrs):
        if attrs.get('user_id') is None and not attrs.get('email'):
            raise serializers.ValidationError(self.REQUIRED_MESSAGE)
        return attrs


# --- Settings Serializers ---
class SettingsSaveSerializer(serializers.Serializer):
    settings = serializers.JSONField(error_messages=_required("Settings are required"))

    def validate_settings(self, value):
        # Empty objects and lists are kept; other falsy payloads count as missing
        if not value and not isinstance(value, (dict, list)):
            raise serializers.ValidationError("Settings are required")
        return value


class RobotSummarySerializer(serializers.ModelSerializer):
    serialNumber = serializers.CharField(source='serial_number', read_only=True)

    class Meta:
        model = Robot
        fields = ('id', 'serialNumber', 'name')


class RobotSettingSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    robotId = serializers.IntegerField(source='robot_id', read_only=True)
    settings = serializers.JSONField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = RobotSetting
        fields = ('id', 'userId', 'robotId', 'settings', 'createdAt', 'updatedAt')


class RobotSettingWithRobotSerializer(RobotSettingSerializer):
    robot = RobotSummarySerializer(read_only=True)

    class Meta(RobotSettingSerializer.Meta):
        fields = RobotSettingSerializer.Meta.fields + ('robot',)
