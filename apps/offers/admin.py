from django.contrib import admin
from .models import Offer, OfferQuestion


@admin.register(Offer)
class OfferAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "freelancer_id", "status", "price", "is_active", "deadline")
    list_filter = ("status", "duration_type", "is_active", "is_featured")
    search_fields = ("title", "domain", "category", "tags")
    # Status only moves through the model's transitions.
    readonly_fields = ("status", "version", "views_count", "created_at", "updated_at", "published_at", "expired_at")


@admin.register(OfferQuestion)
class OfferQuestionAdmin(admin.ModelAdmin):
    list_display = ("id", "offer", "client_id", "asked_at", "answered_at")
    search_fields = ("question_text", "answer_text")
    readonly_fields = ("asked_at",)
