from rest_framework import serializers
from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    offerId = serializers.IntegerField(source="offer_id", read_only=True)
    applicationId = serializers.IntegerField(source="application_id", read_only=True)
    questionId = serializers.IntegerField(source="question_id", read_only=True)
    read = serializers.BooleanField(source="is_read", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "type",
            "title",
            "message",
            "offerId",
            "applicationId",
            "questionId",
            "read",
            "createdAt",
        ]
        read_only_fields = fields


class CreateNotificationSerializer(serializers.Serializer):
    recipientUserId = serializers.IntegerField()
    type = serializers.CharField(max_length=50)
    title = serializers.CharField(max_length=255)
    message = serializers.CharField(required=False, allow_blank=True, default="")
    offerId = serializers.IntegerField(required=False, allow_null=True)
    applicationId = serializers.IntegerField(required=False, allow_null=True)
    questionId = serializers.IntegerField(required=False, allow_null=True)
