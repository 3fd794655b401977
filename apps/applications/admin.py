from django.contrib import admin
from .models import OfferApplication


@admin.register(OfferApplication)
class OfferApplicationAdmin(admin.ModelAdmin):
    list_display = ("id", "offer", "client_id", "status", "proposed_budget", "is_read", "applied_at")
    list_filter = ("status", "is_read")
    search_fields = ("message",)
    readonly_fields = ("status", "version", "applied_at", "responded_at", "accepted_at")
