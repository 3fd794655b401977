import django.core.validators
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Offer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("version", models.PositiveIntegerField(default=1, help_text="Record version for optimistic locking.")),
                ("freelancer_id", models.BigIntegerField()),
                ("title", models.CharField(max_length=255)),
                ("domain", models.CharField(max_length=100)),
                ("description", models.TextField()),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.01"))])),
                ("duration_type", models.CharField(choices=[("hourly", "Hourly"), ("fixed", "Fixed"), ("monthly", "Monthly")], max_length=50)),
                ("status", models.CharField(choices=[("DRAFT", "Draft"), ("AVAILABLE", "Available"), ("IN_PROGRESS", "In progress"), ("ACCEPTED", "Accepted"), ("COMPLETED", "Completed"), ("CANCELLED", "Cancelled"), ("EXPIRED", "Expired"), ("CLOSED", "Closed")], default="DRAFT", max_length=20)),
                ("deadline", models.DateField(blank=True, null=True)),
                ("category", models.CharField(blank=True, max_length=100)),
                ("tags", models.CharField(blank=True, max_length=500)),
                ("image_url", models.CharField(blank=True, max_length=255)),
                ("views_count", models.PositiveIntegerField(default=0)),
                ("is_featured", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("expired_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["freelancer_id"], name="idx_offer_freelancer"),
                    models.Index(fields=["status"], name="idx_offer_status"),
                    models.Index(fields=["domain"], name="idx_offer_domain"),
                ],
            },
        ),
    ]
