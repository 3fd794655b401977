from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from apps.applications.models import OfferApplication
from .models import Offer

# Offers whose price was earned: a client's application was accepted.
EARNING_STATUSES = (Offer.IN_PROGRESS, Offer.ACCEPTED, Offer.COMPLETED)


class FreelancerOfferStatsSelector:
    """
    Dashboard aggregations for one freelancer's offers.
    """
    @staticmethod
    def summary(freelancer_id):
        now = timezone.now()
        start_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        one_week_ago = now - timedelta(weeks=1)

        offers = Offer.objects.filter(freelancer_id=freelancer_id).aggregate(
            total_offers=Count("id"),
            active_offers=Count("id", filter=Q(status=Offer.AVAILABLE)),
            draft_offers=Count("id", filter=Q(status=Offer.DRAFT)),
            accepted_offers=Count("id", filter=Q(status=Offer.ACCEPTED)),
            expired_offers=Count("id", filter=Q(status=Offer.EXPIRED)),
            total_revenue=Sum("price", filter=Q(status__in=EARNING_STATUSES)),
            total_views=Sum("views_count"),
            offers_this_month=Count("id", filter=Q(created_at__gte=start_of_month)),
            offers_this_week=Count("id", filter=Q(created_at__gte=one_week_ago)),
        )
        applications = OfferApplication.objects.filter(offer__freelancer_id=freelancer_id).aggregate(
            total_applications=Count("id"),
            pending_applications=Count("id", filter=Q(status=OfferApplication.PENDING)),
        )

        return {
            "totalOffers": offers["total_offers"],
            "activeOffers": offers["active_offers"],
            "draftOffers": offers["draft_offers"],
            "acceptedOffers": offers["accepted_offers"],
            "expiredOffers": offers["expired_offers"],
            "totalApplications": applications["total_applications"],
            "pendingApplications": applications["pending_applications"],
            "totalRevenue": offers["total_revenue"] or Decimal("0.00"),
            "totalViews": offers["total_views"] or 0,
            "offersThisMonth": offers["offers_this_month"],
            "offersThisWeek": offers["offers_this_week"],
        }

    @staticmethod
    def count_by_status(freelancer_id):
        """
        Every status is listed, zero when the freelancer has none in it.
        """
        rows = (
            Offer.objects
            .filter(freelancer_id=freelancer_id)
            .values("status")
            .annotate(count=Count("id"))
            .order_by("status")
        )

        counts = {status: 0 for status, _ in Offer.STATUS_CHOICES}
        for row in rows:
            counts[row["status"]] = row["count"]
        return {"countByStatus": counts}

    @staticmethod
    def monthly_evolution(freelancer_id, year):
        """
        Offers created per month of ``year``, all twelve months listed.
        """
        rows = (
            Offer.objects
            .filter(freelancer_id=freelancer_id, created_at__year=year)
            .annotate(month=TruncMonth("created_at"))
            .values("month")
            .annotate(count=Count("id"))
            .order_by("month")
        )

        counts = {row["month"].month: row["count"] for row in rows}
        return {
            "year": year,
            "months": [{"month": month, "count": counts.get(month, 0)} for month in range(1, 13)],
        }


class FreelancerApplicationStatsSelector:
    """
    Aggregations over the applications received on a freelancer's offers.
    """
    @staticmethod
    def acceptance_rate(freelancer_id):
        totals = OfferApplication.objects.filter(offer__freelancer_id=freelancer_id).aggregate(
            total=Count("id"),
            accepted=Count("id", filter=Q(status=OfferApplication.ACCEPTED)),
        )
        total, accepted = totals["total"], totals["accepted"]

        rate = Decimal("0")
        if total:
            rate = (Decimal(accepted) / Decimal(total)).quantize(Decimal("0.0001"))

        return {"totalApplications": total, "acceptedCount": accepted, "rate": rate}
