from .auth import RegisterView, LoginView, UserInfoView, HealthView
from .groups import (
    GroupListView, GroupDetailView, GroupMemberListView, GroupMemberDetailView, GroupMemberRoleView,
)
from .robots import RobotListView, RobotDetailView, RobotPermissionListView, RobotPermissionDetailView
from .settings import SettingsListView, RobotSettingsView
