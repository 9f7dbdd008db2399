# api/signals.py
import logging

from django.db.models.signals import pre_delete
from django.dispatch import receiver

from .models import Group, OwnerType, Robot, User

logger = logging.getLogger(__name__)


# Robot ownership is polymorphic, so the database cannot cascade it for us.
# Deleting the robots here cascades their grants and settings.

@receiver(pre_delete, sender=User)
def delete_user_owned_robots(sender, instance, **kwargs):
    deleted, _ = Robot.objects.filter(owner_type=OwnerType.USER, owner_id=instance.pk).delete()
    if deleted:
        logger.info("Removed robots owned by user %s", instance.pk)


@receiver(pre_delete, sender=Group)
def delete_group_owned_robots(sender, instance, **kwargs):
    deleted, _ = Robot.objects.filter(owner_type=OwnerType.GROUP, owner_id=instance.pk).delete()
    if deleted:
        logger.info("Removed robots owned by group %s", instance.pk)
