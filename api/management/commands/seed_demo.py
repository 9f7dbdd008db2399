# api/management/commands/seed_demo.py
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from api.models import (
    Group, GroupMember, Robot, RobotPermission, RobotSetting,
    MemberRole, OwnerType, PermissionType,
)

User = get_user_model()

DEMO_USERS = [
    {"email": "admin@demo.com", "name": "Admin User", "password": "admin123"},
    {"email": "user@demo.com", "name": "Regular User", "password": "user123"},
]

DEMO_GROUP_NAME = "Demo Robotics Team"


class Command(BaseCommand):
    help = "Populate an empty database with demo users, a group, robots, grants and settings."

    def add_arguments(self, parser):
        parser.add_argument(
            '--force',
            action='store_true',
            help="Seed even if users already exist (demo accounts must not exist yet).",
        )

    def handle(self, *args, **options):
        user_count = User.objects.count()
        if user_count and not options['force']:
            self.stdout.write(f"Database already has {user_count} users, skipping seed")
            return

        existing = User.objects.filter(email__in=[demo["email"] for demo in DEMO_USERS])
        if existing.exists():
            emails = ", ".join(existing.order_by("email").values_list("email", flat=True))
            raise CommandError(f"Demo accounts already exist: {emails}")

        with transaction.atomic():
            self._seed()

        self.stdout.write(self.style.SUCCESS("Initial seed completed"))
        self.stdout.write("Demo accounts:")
        for demo in DEMO_USERS:
            self.stdout.write(f"  {demo['email']} / {demo['password']}")

    def _seed(self):
        admin_user, regular_user = [
            User.objects.create_user(username=demo["email"], email=demo["email"],
                                     password=demo["password"], name=demo["name"])
            for demo in DEMO_USERS
        ]

        group = Group.objects.create(name=DEMO_GROUP_NAME)
        GroupMember.objects.create(user=admin_user, group=group, role=MemberRole.ADMIN)
        GroupMember.objects.create(user=regular_user, group=group, role=MemberRole.MEMBER)

        personal_robot = Robot.objects.create(
            serial_number="SN-PERSONAL-001",
            name="Admin Personal Robot",
            owner_type=OwnerType.USER,
            owner_id=admin_user.pk,
        )
        warehouse_bot = Robot.objects.create(
            serial_number="SN-GROUP-001",
            name="Team Warehouse Bot",
            owner_type=OwnerType.GROUP,
            owner_id=group.pk,
        )
        delivery_bot = Robot.objects.create(
            serial_number="SN-GROUP-002",
            name="Team Delivery Bot",
            owner_type=OwnerType.GROUP,
            owner_id=group.pk,
        )

        RobotPermission.objects.bulk_create([
            RobotPermission(user=regular_user, robot=warehouse_bot, permission_type=PermissionType.USAGE),
            RobotPermission(user=regular_user, robot=delivery_bot, permission_type=PermissionType.ADMIN),
            RobotPermission(user=admin_user, robot=warehouse_bot, permission_type=PermissionType.ADMIN),
            RobotPermission(user=admin_user, robot=delivery_bot, permission_type=PermissionType.ADMIN),
        ])

        admin_settings = RobotSetting(user=admin_user, robot=personal_robot)
        admin_settings.settings = {"theme": "dark", "language": "en", "notifications": True, "speed": "fast"}
        user_settings = RobotSetting(user=regular_user, robot=warehouse_bot)
        user_settings.settings = {"theme": "light", "language": "en", "notifications": False, "speed": "medium"}
        RobotSetting.objects.bulk_create([admin_settings, user_settings])
