from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Count, F, Q
from django.utils import timezone
from decimal import Decimal

from apps.cores.exceptions import InvalidState
from apps.cores.models import VersionedModel


class OfferQuerySet(models.QuerySet):

    def with_application_counts(self):
        return self.annotate(
            applications_total=Count("applications", distinct=True),
            pending_applications_total=Count(
                "applications", filter=Q(applications__status="PENDING"), distinct=True
            ),
        )


class Offer(VersionedModel):
    """
    A freelancer's published service listing.

    Lifecycle: DRAFT -> AVAILABLE -> IN_PROGRESS -> COMPLETED, with the
    admin-style exits ACCEPTED / EXPIRED / CLOSED / CANCELLED. The status
    field is only ever changed by the transition methods below.
    """

    DRAFT = "DRAFT"
    AVAILABLE = "AVAILABLE"
    IN_PROGRESS = "IN_PROGRESS"
    ACCEPTED = "ACCEPTED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    CLOSED = "CLOSED"

    STATUS_CHOICES = [
        (DRAFT, "Draft"),
        (AVAILABLE, "Available"),
        (IN_PROGRESS, "In progress"),
        (ACCEPTED, "Accepted"),
        (COMPLETED, "Completed"),
        (CANCELLED, "Cancelled"),
        (EXPIRED, "Expired"),
        (CLOSED, "Closed"),
    ]

    # No transition leaves these.
    FINAL_STATUSES = (COMPLETED, CANCELLED, EXPIRED, CLOSED)

    DURATION_TYPE_CHOICES = [
        ("hourly", "Hourly"),
        ("fixed", "Fixed"),
        ("monthly", "Monthly"),
    ]

    # Identity issued by the identity provider; users live in another service.
    freelancer_id = models.BigIntegerField()

    title = models.CharField(max_length=255)
    domain = models.CharField(max_length=100)
    description = models.TextField()

    price = models.DecimalField(
        max_digits=10, decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))]
    )

    duration_type = models.CharField(
        max_length=50,
        choices=DURATION_TYPE_CHOICES
    )

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=DRAFT
    )

    deadline = models.DateField(null=True, blank=True)
    category = models.CharField(max_length=100, blank=True)
    tags = models.CharField(max_length=500, blank=True)
    image_url = models.CharField(max_length=255, blank=True)

    views_count = models.PositiveIntegerField(default=0)
    is_featured = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    published_at = models.DateTimeField(null=True, blank=True)
    expired_at = models.DateTimeField(null=True, blank=True)

    objects = OfferQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["freelancer_id"], name="idx_offer_freelancer"),
            models.Index(fields=["status"], name="idx_offer_status"),
            models.Index(fields=["domain"], name="idx_offer_domain"),
        ]

    def __str__(self):
        return f"Offer #{self.id} | {self.title} ({self.status})"

    # ---------------- Derived ----------------

    @property
    def applications_count(self):
        return self.applications.count()

    @property
    def pending_applications_count(self):
        return self.applications.filter(status="PENDING").count()

    def is_valid(self):
        if self.deadline is None:
            return True
        return timezone.localdate() <= self.deadline

    def can_receive_applications(self):
        return self.is_active and self.status == self.AVAILABLE and self.is_valid()

    # ---------------- Transitions ----------------

    def publish(self):
        if self.status != self.DRAFT:
            return False

        self.status = self.AVAILABLE
        self.published_at = timezone.now()
        self.is_active = True
        self.save_versioned(["status", "published_at", "is_active"], status=self.DRAFT)
        return True

    def begin_execution(self):
        """
        AVAILABLE -> IN_PROGRESS, as a conditional UPDATE on the status column.

        When two accepts race on the same offer only one UPDATE matches; the
        other affects no row and this returns False without raising.
        """
        if self.status != self.AVAILABLE:
            return False

        now = timezone.now()
        updated = Offer.objects.filter(
            pk=self.pk,
            status=self.AVAILABLE
        ).update(
            status=self.IN_PROGRESS,
            version=F("version") + 1,
            updated_at=now
        )
        if not updated:
            self.refresh_from_db(fields=["status", "version", "updated_at"])
            return False

        self.status = self.IN_PROGRESS
        self.version += 1
        self.updated_at = now
        return True

    def _close(self, new_status, **values):
        if self.status in self.FINAL_STATUSES:
            raise InvalidState(f"Offer is already {self.status}")

        previous = self.status
        self.status = new_status
        self.is_active = False
        for name, value in values.items():
            setattr(self, name, value)
        self.save_versioned(["status", "is_active", *values], status=previous)

    def expire(self):
        self._close(self.EXPIRED, expired_at=timezone.now())

    def deactivate(self):
        self._close(self.CLOSED)

    def accept(self):
        self._close(self.ACCEPTED)

    def cancel(self):
        self._close(self.CANCELLED)

    def complete(self):
        self._close(self.COMPLETED)

    def increment_views(self):
        Offer.objects.filter(pk=self.pk).update(views_count=F("views_count") + 1)
        self.views_count += 1


class OfferQuestion(models.Model):
    """
    A client's public question on an offer, answered by the offer's owner.
    """

    offer = models.ForeignKey(
        Offer,
        on_delete=models.CASCADE,
        related_name="questions"
    )
    client_id = models.BigIntegerField()

    question_text = models.TextField(max_length=1000)
    answer_text = models.TextField(max_length=2000, blank=True)

    asked_at = models.DateTimeField(auto_now_add=True)
    answered_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-asked_at"]
        indexes = [
            models.Index(fields=["client_id"], name="idx_question_client"),
            models.Index(fields=["asked_at"], name="idx_question_asked_at"),
        ]

    def __str__(self):
        return f"Question #{self.id} on offer {self.offer_id}"

    @property
    def is_answered(self):
        return bool(self.answer_text)
