from django.db import models


class Notification(models.Model):
    """
    Event record directed at one user, shown on their dashboard.
    Append-only: the only later change is the recipient marking it read.
    """

    NEW_QUESTION = "NEW_QUESTION"
    QUESTION_ANSWERED = "QUESTION_ANSWERED"
    NEW_APPLICATION = "NEW_APPLICATION"
    APPLICATION_ACCEPTED = "APPLICATION_ACCEPTED"
    PROGRESS_UPDATE = "PROGRESS_UPDATE"
    PROJECT_DELIVERED = "PROJECT_DELIVERED"
    PROJECT_VALIDATED = "PROJECT_VALIDATED"

    NOTIFICATION_TYPES = [
        (NEW_QUESTION, "New Question"),
        (QUESTION_ANSWERED, "Question Answered"),
        (NEW_APPLICATION, "New Application"),
        (APPLICATION_ACCEPTED, "Application Accepted"),
        (PROGRESS_UPDATE, "Progress Update"),
        (PROJECT_DELIVERED, "Project Delivered"),
        (PROJECT_VALIDATED, "Project Validated"),
    ]

    recipient_user_id = models.BigIntegerField()

    type = models.CharField(
        max_length=50,
        choices=NOTIFICATION_TYPES
    )

    title = models.CharField(max_length=255)

    message = models.TextField(blank=True)

    # Correlated records, by id only
    offer_id = models.BigIntegerField(null=True, blank=True)
    application_id = models.BigIntegerField(null=True, blank=True)
    question_id = models.BigIntegerField(null=True, blank=True)

    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["recipient_user_id"], name="idx_notification_recipient"),
            models.Index(fields=["is_read"], name="idx_notification_read"),
            models.Index(fields=["created_at"], name="idx_notification_created"),
        ]

    def __str__(self):
        return f"Notification({self.recipient_user_id}, {self.type})"
