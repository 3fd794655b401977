import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.db import transaction

from rest_framework.exceptions import ValidationError

from apps.cores.exceptions import ResourceNotFound
from apps.notifications.models import Notification

logger = logging.getLogger(__name__)


def notify_user(recipient_user_id, notif_type, title, message="",
                offer_id=None, application_id=None, question_id=None):
    """
    Fire-and-forget notification.

    Runs once the caller's transaction has committed (straight away when there
    is none), in its own atomic block. Whatever goes wrong here is logged and
    dropped: a notification must never undo or fail the caller's work.
    """

    def _emit():
        try:
            with transaction.atomic():
                notif = Notification.objects.create(
                    recipient_user_id=recipient_user_id,
                    type=notif_type,
                    title=title,
                    message=message,
                    offer_id=offer_id,
                    application_id=application_id,
                    question_id=question_id,
                )
        except Exception:
            logger.exception(
                "Failed to create %s notification for user %s", notif_type, recipient_user_id
            )
            return

        logger.info("Notification created for user %s: %s", recipient_user_id, notif_type)
        push_notification(notif)

    transaction.on_commit(_emit)


def push_notification(notif):
    """
    Push to the recipient's WebSocket group. The row is already saved, so a
    missing or failing channel layer only costs the live update.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return

    try:
        async_to_sync(channel_layer.group_send)(
            f"user_{notif.recipient_user_id}",
            {
                "type": "send_notification",
                "id": notif.id,
                "notif_type": notif.type,
                "title": notif.title,
                "message": notif.message,
                "offerId": notif.offer_id,
                "applicationId": notif.application_id,
                "questionId": notif.question_id,
                "created_at": notif.created_at.isoformat(),
                "is_read": False,
            }
        )
    except Exception:
        logger.warning("WebSocket push failed for notification %s", notif.id, exc_info=True)


def create_from_request(recipient_user_id, raw_type, title, message="",
                        offer_id=None, question_id=None, application_id=None):
    """
    API entry point used by other services (progress, delivery, validation).
    The type is matched case-insensitively against the known types.
    """
    notif_type = (raw_type or "").strip().upper()
    allowed = [choice for choice, _ in Notification.NOTIFICATION_TYPES]
    if notif_type not in allowed:
        raise ValidationError({"type": f"Invalid notification type: {raw_type}. Allowed: {allowed}"})

    notify_user(
        recipient_user_id,
        notif_type,
        title,
        message,
        offer_id=offer_id,
        application_id=application_id,
        question_id=question_id,
    )


def list_for_recipient(recipient_user_id, limit=None):
    if not limit or limit <= 0:
        limit = settings.NOTIFICATION_DEFAULT_LIMIT
    return Notification.objects.filter(recipient_user_id=recipient_user_id)[:limit]


def count_unread(recipient_user_id):
    return Notification.objects.filter(recipient_user_id=recipient_user_id, is_read=False).count()


def mark_as_read(notification_id, user_id):
    """
    Scoped to the recipient: another user's call leaves the row untouched.
    """
    try:
        notif = Notification.objects.get(pk=notification_id)
    except Notification.DoesNotExist:
        raise ResourceNotFound(f"Notification not found with id: {notification_id}")

    if notif.recipient_user_id != user_id:
        return notif

    if not notif.is_read:
        notif.is_read = True
        notif.save(update_fields=["is_read"])
    return notif
