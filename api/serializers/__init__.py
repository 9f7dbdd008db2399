from .serializers import (
    RegisterSerializer, LoginSerializer, UserSerializer, UserSummarySerializer,
    GroupCreateSerializer, MemberAddSerializer, MemberRoleSerializer,
    GroupMemberSerializer, GroupSerializer, GroupWithRobotsSerializer,
    RobotCreateSerializer, RobotSerializer, RobotWithAccessSerializer, RobotDetailSerializer,
    PermissionGrantSerializer, RobotPermissionSerializer,
    SettingsSaveSerializer, RobotSettingSerializer, RobotSettingWithRobotSerializer,
)
