# api/services/robot_settings.py
import json
import logging

from ..exceptions import ForbiddenError
from ..models import RobotSetting
from ..permissions import resolve_access
from .robots import get_robot_or_404

logger = logging.getLogger(__name__)


def _get_accessible_robot(acting_user, serial_number):
    robot = get_robot_or_404(serial_number)
    if not resolve_access(acting_user, robot).has_access:
        logger.warning("User %s denied settings access on robot %s", acting_user.pk, serial_number)
        raise ForbiddenError("Access denied")
    return robot


def save_settings(acting_user, serial_number, payload):
    """Store the acting user's own settings for a robot, replacing earlier ones."""
    robot = _get_accessible_robot(acting_user, serial_number)
    setting, _ = RobotSetting.objects.update_or_create(
        user=acting_user,
        robot=robot,
        defaults={'raw_settings': json.dumps(payload)},
    )
    return setting


def get_settings(acting_user, serial_number):
    """The acting user's settings row for a robot, or None if never saved."""
    robot = _get_accessible_robot(acting_user, serial_number)
    return RobotSetting.objects.filter(user=acting_user, robot=robot).first()


def list_settings(acting_user):
    return (
        RobotSetting.objects
        .filter(user=acting_user)
        .select_related('robot')
        .order_by('created_at', 'id')
    )
