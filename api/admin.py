# api/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import (
    User,
    Group,
    GroupMember,
    Robot,
    RobotPermission,
    RobotSetting,
    OwnerType,
)


class GroupMemberInline(admin.TabularInline):
    model = GroupMember
    extra = 0
    autocomplete_fields = ('user',)


class RobotPermissionInline(admin.TabularInline):
    model = RobotPermission
    extra = 0
    autocomplete_fields = ('user',)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'name', 'is_staff', 'date_joined')
    search_fields = ('email', 'name')
    ordering = ('email',)
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Profile', {'fields': ('name',)}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'name', 'password1', 'password2'),
        }),
    )


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    list_display = ('name', 'member_count', 'robot_count', 'created_at')
    search_fields = ('name',)
    inlines = (GroupMemberInline,)

    def member_count(self, obj):
        return obj.members.count()
    member_count.short_description = 'Members'

    def robot_count(self, obj):
        return Robot.objects.filter(owner_type=OwnerType.GROUP, owner_id=obj.pk).count()
    robot_count.short_description = 'Robots'


@admin.register(Robot)
class RobotAdmin(admin.ModelAdmin):
    list_display = ('name', 'serial_number', 'owner_type', 'owner_id', 'created_at')
    list_filter = ('owner_type',)
    search_fields = ('name', 'serial_number')
    readonly_fields = ('created_at', 'updated_at')
    inlines = (RobotPermissionInline,)


@admin.register(RobotPermission)
class RobotPermissionAdmin(admin.ModelAdmin):
    list_display = ('user', 'robot', 'permission_type', 'updated_at')
    list_filter = ('permission_type',)
    search_fields = ('user__email', 'robot__serial_number')


@admin.register(RobotSetting)
class RobotSettingAdmin(admin.ModelAdmin):
    list_display = ('user', 'robot', 'updated_at', 'settings_preview')
    search_fields = ('user__email', 'robot__serial_number')
    readonly_fields = ('created_at', 'updated_at')

    def settings_preview(self, obj):
        raw = obj.raw_settings
        return (raw[:75] + '...') if len(raw) > 75 else raw
    settings_preview.short_description = 'Settings'
