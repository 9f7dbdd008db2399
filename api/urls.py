"""
API URL configuration
"""
from django.urls import path, register_converter

from .serializers.serializers import MAX_ID
from .views import (
    RegisterView, LoginView, UserInfoView, HealthView,
    GroupListView, GroupDetailView, GroupMemberListView, GroupMemberDetailView, GroupMemberRoleView,
    RobotListView, RobotDetailView, RobotPermissionListView, RobotPermissionDetailView,
    SettingsListView, RobotSettingsView,
)


class IdConverter:
    """Ids that fit a signed 64-bit column; larger values do not route."""
    regex = "[0-9]{1,19}"
    max_value = MAX_ID

    def to_python(self, value):
        value = int(value)
        if value > self.max_value:
            raise ValueError(value)
        return value

    def to_url(self, value):
        return str(value)


register_converter(IdConverter, "id")

app_name = 'api'

urlpatterns = [
    path('health', HealthView.as_view(), name='health'),

    # Auth
    path('auth/register', RegisterView.as_view(), name='auth-register'),
    path('auth/login', LoginView.as_view(), name='auth-login'),
    path('auth/me', UserInfoView.as_view(), name='auth-me'),

    # Groups
    path('groups', GroupListView.as_view(), name='group-list'),
    path('groups/<id:group_id>', GroupDetailView.as_view(), name='group-detail'),
    path('groups/<id:group_id>/members', GroupMemberListView.as_view(), name='group-members'),
    path('groups/<id:group_id>/members/<id:user_id>', GroupMemberDetailView.as_view(), name='group-member-detail'),
    path('groups/<id:group_id>/members/<id:user_id>/role', GroupMemberRoleView.as_view(), name='group-member-role'),

    # Robots and their permissions
    path('robots', RobotListView.as_view(), name='robot-list'),
    path('robots/<str:serial_number>', RobotDetailView.as_view(), name='robot-detail'),
    path('robots/<str:serial_number>/permissions', RobotPermissionListView.as_view(), name='robot-permissions'),
    path('robots/<str:serial_number>/permissions/<id:user_id>', RobotPermissionDetailView.as_view(),
         name='robot-permission-detail'),

    # Per-user robot settings
    path('settings', SettingsListView.as_view(), name='settings-list'),
    path('settings/<str:serial_number>', RobotSettingsView.as_view(), name='robot-settings'),
]
