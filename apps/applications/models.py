from decimal import Decimal

from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from apps.cores.models import VersionedModel
from apps.offers.models import Offer


class OfferApplication(VersionedModel):
    """
    One client's proposal against exactly one offer.

    PENDING is the only entry state; ACCEPTED, REJECTED and WITHDRAWN are
    terminal, SHORTLISTED is not. Every transition is written with
    ``save_versioned`` filtered on the source status, so two requests racing on
    the same application cannot both apply a transition.
    """

    PENDING = "PENDING"
    SHORTLISTED = "SHORTLISTED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"

    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (SHORTLISTED, "Shortlisted"),
        (ACCEPTED, "Accepted"),
        (REJECTED, "Rejected"),
        (WITHDRAWN, "Withdrawn"),
    ]

    WITHDRAWABLE_STATUSES = (PENDING, SHORTLISTED)

    offer = models.ForeignKey(
        Offer,
        on_delete=models.CASCADE,
        related_name="applications"
    )

    client_id = models.BigIntegerField()

    message = models.TextField(validators=[MinLengthValidator(20)])

    proposed_budget = models.DecimalField(
        max_digits=10, decimal_places=2,
        null=True, blank=True,
        validators=[MinValueValidator(Decimal("0.01"))]
    )

    portfolio_url = models.CharField(max_length=255, blank=True)
    attachment_url = models.CharField(max_length=500, blank=True)
    estimated_duration = models.PositiveIntegerField(
        null=True, blank=True,
        help_text="Estimated duration in days"
    )

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=PENDING
    )

    rejection_reason = models.TextField(blank=True)
    is_read = models.BooleanField(default=False)

    applied_at = models.DateTimeField(default=timezone.now)
    responded_at = models.DateTimeField(null=True, blank=True)
    accepted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-applied_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["offer", "client_id"],
                name="unique_application_per_offer_and_client",
            ),
        ]
        indexes = [
            models.Index(fields=["client_id"], name="idx_application_client"),
            models.Index(fields=["status"], name="idx_application_status"),
        ]

    def __str__(self):
        return f"Application #{self.id} | client {self.client_id} -> offer #{self.offer_id} ({self.status})"

    def can_be_modified(self):
        return self.status == self.PENDING

    # ---------------- Transitions ----------------
    # Callers check actor and source status first (see services); the
    # status filter here is what makes the write itself safe.

    def accept(self):
        now = timezone.now()
        self.status = self.ACCEPTED
        self.responded_at = now
        self.accepted_at = now
        self.save_versioned(["status", "responded_at", "accepted_at"], status=self.PENDING)

    def reject(self, reason=None):
        self.status = self.REJECTED
        self.responded_at = timezone.now()
        self.rejection_reason = reason or ""
        self.save_versioned(["status", "responded_at", "rejection_reason"], status=self.PENDING)

    def shortlist(self):
        self.status = self.SHORTLISTED
        self.save_versioned(["status"], status=self.PENDING)

    def withdraw(self):
        source = self.status
        self.status = self.WITHDRAWN
        self.save_versioned(["status"], status=source)

    def mark_read(self):
        if self.is_read:
            return
        # A read receipt leaves the version alone.
        OfferApplication.objects.filter(pk=self.pk).update(is_read=True)
        self.is_read = True
