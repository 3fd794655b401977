from decimal import Decimal

from rest_framework import serializers
from .models import OfferApplication


# ---------------- Application view ----------------

class OfferApplicationSerializer(serializers.ModelSerializer):
    offerId = serializers.IntegerField(source="offer_id", read_only=True)
    offerTitle = serializers.CharField(source="offer.title", read_only=True)
    clientId = serializers.IntegerField(source="client_id", read_only=True)
    proposedBudget = serializers.DecimalField(
        source="proposed_budget", max_digits=10, decimal_places=2, read_only=True
    )
    portfolioUrl = serializers.CharField(source="portfolio_url", read_only=True)
    attachmentUrl = serializers.CharField(source="attachment_url", read_only=True)
    estimatedDuration = serializers.IntegerField(source="estimated_duration", read_only=True)
    rejectionReason = serializers.CharField(source="rejection_reason", read_only=True)
    isRead = serializers.BooleanField(source="is_read", read_only=True)
    appliedAt = serializers.DateTimeField(source="applied_at", read_only=True)
    respondedAt = serializers.DateTimeField(source="responded_at", read_only=True)
    acceptedAt = serializers.DateTimeField(source="accepted_at", read_only=True)
    canBeModified = serializers.BooleanField(source="can_be_modified", read_only=True)

    class Meta:
        model = OfferApplication
        fields = [
            "id",
            "offerId",
            "offerTitle",
            "clientId",
            "message",
            "proposedBudget",
            "portfolioUrl",
            "attachmentUrl",
            "estimatedDuration",
            "status",
            "rejectionReason",
            "isRead",
            "appliedAt",
            "respondedAt",
            "acceptedAt",
            "canBeModified",
            "version",
        ]
        read_only_fields = fields


def acceptance_response(result):
    """
    Application view annotated with the contract id, or with the warning when
    provisioning degraded.
    """
    data = OfferApplicationSerializer(result.application).data
    data["contractId"] = result.contract_id
    data["warningMessage"] = result.warning_message
    return data


# ---------------- Apply / Update ----------------

class OfferApplicationRequestSerializer(serializers.Serializer):
    offerId = serializers.IntegerField()
    clientId = serializers.IntegerField()
    message = serializers.CharField(max_length=2000)
    proposedBudget = serializers.DecimalField(
        max_digits=10, decimal_places=2,
        min_value=Decimal("0.01"),
        required=False, allow_null=True
    )
    portfolioUrl = serializers.CharField(max_length=255, required=False, allow_blank=True)
    attachmentUrl = serializers.CharField(max_length=500, required=False, allow_blank=True)
    estimatedDuration = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    def validate_message(self, value):
        if not value.strip():
            raise serializers.ValidationError("Message is required.")
        if len(value.strip()) < 20:
            raise serializers.ValidationError("Message must be between 20 and 2000 characters.")
        if "<script>" in value.lower():
            raise serializers.ValidationError("Invalid content in message.")
        return value

    def to_model_fields(self):
        """
        validated_data keyed by model field names, only for what was sent.
        """
        mapping = {
            "message": "message",
            "proposedBudget": "proposed_budget",
            "portfolioUrl": "portfolio_url",
            "attachmentUrl": "attachment_url",
            "estimatedDuration": "estimated_duration",
        }
        return {
            field: self.validated_data[key]
            for key, field in mapping.items()
            if key in self.validated_data
        }


class OfferApplicationUpdateSerializer(OfferApplicationRequestSerializer):
    # The offer of an application never changes; accepted but ignored.
    offerId = serializers.IntegerField(required=False)
