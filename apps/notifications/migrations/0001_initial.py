from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("recipient_user_id", models.BigIntegerField()),
                ("type", models.CharField(choices=[("NEW_QUESTION", "New Question"), ("QUESTION_ANSWERED", "Question Answered"), ("NEW_APPLICATION", "New Application"), ("APPLICATION_ACCEPTED", "Application Accepted"), ("PROGRESS_UPDATE", "Progress Update"), ("PROJECT_DELIVERED", "Project Delivered"), ("PROJECT_VALIDATED", "Project Validated")], max_length=50)),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField(blank=True)),
                ("offer_id", models.BigIntegerField(blank=True, null=True)),
                ("application_id", models.BigIntegerField(blank=True, null=True)),
                ("question_id", models.BigIntegerField(blank=True, null=True)),
                ("is_read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["recipient_user_id"], name="idx_notification_recipient"),
                    models.Index(fields=["is_read"], name="idx_notification_read"),
                    models.Index(fields=["created_at"], name="idx_notification_created"),
                ],
            },
        ),
    ]
