from decimal import Decimal

from rest_framework import serializers
from .models import Offer, OfferQuestion


class OfferSerializer(serializers.ModelSerializer):
    freelancerId = serializers.IntegerField(source="freelancer_id", read_only=True)
    durationType = serializers.CharField(source="duration_type", read_only=True)
    offerStatus = serializers.CharField(source="status", read_only=True)
    imageUrl = serializers.CharField(source="image_url", read_only=True)
    viewsCount = serializers.IntegerField(source="views_count", read_only=True)
    isFeatured = serializers.BooleanField(source="is_featured", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    applicationsCount = serializers.SerializerMethodField()
    pendingApplicationsCount = serializers.SerializerMethodField()
    canReceiveApplications = serializers.BooleanField(source="can_receive_applications", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    publishedAt = serializers.DateTimeField(source="published_at", read_only=True)
    expiredAt = serializers.DateTimeField(source="expired_at", read_only=True)

    class Meta:
        model = Offer
        fields = [
            "id",
            "freelancerId",
            "title",
            "domain",
            "description",
            "price",
            "durationType",
            "offerStatus",
            "deadline",
            "category",
            "tags",
            "imageUrl",
            "viewsCount",
            "isFeatured",
            "isActive",
            "applicationsCount",
            "pendingApplicationsCount",
            "canReceiveApplications",
            "version",
            "createdAt",
            "updatedAt",
            "publishedAt",
            "expiredAt",
        ]
        read_only_fields = fields

    # List views annotate the counts; a single offer falls back to a COUNT query.
    def get_applicationsCount(self, obj) -> int:
        total = getattr(obj, "applications_total", None)
        return obj.applications_count if total is None else total

    def get_pendingApplicationsCount(self, obj) -> int:
        total = getattr(obj, "pending_applications_total", None)
        return obj.pending_applications_count if total is None else total


class OfferWriteSerializer(serializers.Serializer):
    """
    Body of create (POST) and update (PUT). The owner identity travels in the
    body, as sent by the gateway.
    """

    freelancerId = serializers.IntegerField(source="freelancer_id")
    title = serializers.CharField(min_length=5, max_length=255)
    domain = serializers.CharField(max_length=100)
    description = serializers.CharField(min_length=20, max_length=5000)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    durationType = serializers.ChoiceField(
        source="duration_type",
        choices=[choice for choice, _ in Offer.DURATION_TYPE_CHOICES]
    )
    deadline = serializers.DateField(required=False, allow_null=True)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)
    tags = serializers.CharField(max_length=500, required=False, allow_blank=True)
    imageUrl = serializers.CharField(source="image_url", max_length=255, required=False, allow_blank=True)
    isFeatured = serializers.BooleanField(source="is_featured", required=False)

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title is required.")
        return value.strip()


class OfferStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[choice for choice, _ in Offer.STATUS_CHOICES])


class OfferQuestionSerializer(serializers.ModelSerializer):
    offerId = serializers.IntegerField(source="offer_id", read_only=True)
    clientId = serializers.IntegerField(source="client_id", read_only=True)
    questionText = serializers.CharField(source="question_text", read_only=True)
    answerText = serializers.CharField(source="answer_text", read_only=True)
    askedAt = serializers.DateTimeField(source="asked_at", read_only=True)
    answeredAt = serializers.DateTimeField(source="answered_at", read_only=True)
    answered = serializers.BooleanField(source="is_answered", read_only=True)

    class Meta:
        model = OfferQuestion
        fields = [
            "id",
            "offerId",
            "clientId",
            "questionText",
            "answerText",
            "askedAt",
            "answeredAt",
            "answered",
        ]
        read_only_fields = fields


class QuestionAskSerializer(serializers.Serializer):
    questionText = serializers.CharField(source="question_text", min_length=10, max_length=1000)


class QuestionAnswerSerializer(serializers.Serializer):
    answerText = serializers.CharField(source="answer_text", max_length=2000)

    def validate_answerText(self, value):
        if not value.strip():
            raise serializers.ValidationError("Answer text is required.")
        return value
