import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("offers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OfferApplication",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("version", models.PositiveIntegerField(default=1, help_text="Record version for optimistic locking.")),
                ("client_id", models.BigIntegerField()),
                ("message", models.TextField(validators=[django.core.validators.MinLengthValidator(20)])),
                ("proposed_budget", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal("0.01"))])),
                ("portfolio_url", models.CharField(blank=True, max_length=255)),
                ("attachment_url", models.CharField(blank=True, max_length=500)),
                ("estimated_duration", models.PositiveIntegerField(blank=True, help_text="Estimated duration in days", null=True)),
                ("status", models.CharField(choices=[("PENDING", "Pending"), ("SHORTLISTED", "Shortlisted"), ("ACCEPTED", "Accepted"), ("REJECTED", "Rejected"), ("WITHDRAWN", "Withdrawn")], default="PENDING", max_length=20)),
                ("rejection_reason", models.TextField(blank=True)),
                ("is_read", models.BooleanField(default=False)),
                ("applied_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("responded_at", models.DateTimeField(blank=True, null=True)),
                ("accepted_at", models.DateTimeField(blank=True, null=True)),
                ("offer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="applications", to="offers.offer")),
            ],
            options={
                "ordering": ["-applied_at"],
                "indexes": [
                    models.Index(fields=["client_id"], name="idx_application_client"),
                    models.Index(fields=["status"], name="idx_application_status"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("offer", "client_id"), name="unique_application_per_offer_and_client"),
                ],
            },
        ),
    ]
