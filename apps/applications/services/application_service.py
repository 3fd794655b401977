import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.applications.models import OfferApplication
from apps.cores.exceptions import DuplicateApplication, InvalidState, NotAuthorized, ResourceNotFound
from apps.notifications.models import Notification
from apps.notifications.services.create_notifications import notify_user
from apps.offers.services import get_offer_or_404

logger = logging.getLogger(__name__)


UPDATABLE_FIELDS = [
    "message",
    "proposed_budget",
    "portfolio_url",
    "attachment_url",
    "estimated_duration",
]


# ---------------- Lookups & guards ----------------

def get_application_or_404(application_id):
    try:
        return OfferApplication.objects.select_related("offer").get(pk=application_id)
    except OfferApplication.DoesNotExist:
        raise ResourceNotFound(f"Application not found with id: {application_id}")


def ensure_offer_owner(application, freelancer_id, action):
    if application.offer.freelancer_id != freelancer_id:
        raise NotAuthorized(f"You are not authorized to {action} this application")


def ensure_applicant(application, client_id, action):
    if application.client_id != client_id:
        raise NotAuthorized(f"You are not authorized to {action} this application")


def ensure_pending(application, action):
    if application.status != OfferApplication.PENDING:
        raise InvalidState(f"Only pending applications can be {action}")


# ---------------- Create ----------------

def apply_to_offer(offer_id, client_id, **data):
    """
    A client applies to an offer.

    The existence check only gives a friendly error; the unique constraint on
    (offer, client_id) is what actually stops a concurrent duplicate.
    """
    logger.info("Client %s applying to offer %s", client_id, offer_id)
    offer = get_offer_or_404(offer_id)

    if not offer.can_receive_applications():
        raise InvalidState("This offer is not accepting applications")

    if offer.freelancer_id == client_id:
        raise NotAuthorized("You cannot apply to your own offer")

    if OfferApplication.objects.filter(offer=offer, client_id=client_id).exists():
        raise DuplicateApplication()

    try:
        with transaction.atomic():
            application = OfferApplication.objects.create(
                offer=offer,
                client_id=client_id,
                status=OfferApplication.PENDING,
                **data
            )
    except IntegrityError:
        raise DuplicateApplication()

    logger.info("Application %s created for offer %s", application.id, offer.id)

    notify_user(
        offer.freelancer_id,
        Notification.NEW_APPLICATION,
        "New application",
        f"You received a new application for \"{offer.title}\".",
        offer_id=offer.id,
        application_id=application.id,
    )
    return application


# ---------------- Queries ----------------

def applications_for_offer(offer_id):
    get_offer_or_404(offer_id)
    return OfferApplication.objects.select_related("offer").filter(offer_id=offer_id).order_by("-applied_at")


def applications_for_offer_with_status(offer_id, status):
    return OfferApplication.objects.select_related("offer").filter(offer_id=offer_id, status=status)


def applications_for_client(client_id):
    return OfferApplication.objects.select_related("offer").filter(client_id=client_id).order_by("-applied_at")


def pending_applications():
    return OfferApplication.objects.select_related("offer").filter(status=OfferApplication.PENDING)


def unread_applications_for_freelancer(freelancer_id):
    return (
        OfferApplication.objects
        .select_related("offer")
        .filter(offer__freelancer_id=freelancer_id, is_read=False)
        .order_by("-applied_at")
    )


def count_pending_applications(offer_id):
    return OfferApplication.objects.filter(offer_id=offer_id, status=OfferApplication.PENDING).count()


def recent_applications():
    since = timezone.now() - settings.RECENT_APPLICATIONS_WINDOW
    return OfferApplication.objects.select_related("offer").filter(applied_at__gte=since).order_by("-applied_at")


# ---------------- Transitions (freelancer side) ----------------

@transaction.atomic
def reject_application(application_id, freelancer_id, reason=None):
    application = get_application_or_404(application_id)
    ensure_offer_owner(application, freelancer_id, "reject")
    ensure_pending(application, "rejected")

    application.reject(reason)
    logger.info("Application %s rejected", application.id)
    return application


@transaction.atomic
def shortlist_application(application_id, freelancer_id):
    application = get_application_or_404(application_id)
    ensure_offer_owner(application, freelancer_id, "shortlist")
    ensure_pending(application, "shortlisted")

    application.shortlist()
    logger.info("Application %s shortlisted", application.id)
    return application


def mark_application_read(application_id, freelancer_id):
    application = get_application_or_404(application_id)
    ensure_offer_owner(application, freelancer_id, "mark as read")

    application.mark_read()
    return application


# ---------------- Transitions (client side) ----------------

@transaction.atomic
def withdraw_application(application_id, client_id):
    logger.info("Client %s withdrawing application %s", client_id, application_id)
    application = get_application_or_404(application_id)
    ensure_applicant(application, client_id, "withdraw")

    if application.status not in OfferApplication.WITHDRAWABLE_STATUSES:
        raise InvalidState("Only pending or shortlisted applications can be withdrawn")

    application.withdraw()
    return application


@transaction.atomic
def update_application(application_id, client_id, **data):
    application = get_application_or_404(application_id)
    ensure_applicant(application, client_id, "update")

    if not application.can_be_modified():
        raise InvalidState("Only pending applications can be modified")

    fields = [name for name in UPDATABLE_FIELDS if name in data]
    for name in fields:
        setattr(application, name, data[name])

    if fields:
        application.save_versioned(fields, status=OfferApplication.PENDING)
        logger.info("Application %s updated", application.id)
    return application


@transaction.atomic
def delete_application(application_id, client_id):
    application = get_application_or_404(application_id)
    ensure_applicant(application, client_id, "delete")

    if application.status == OfferApplication.ACCEPTED:
        raise InvalidState("Cannot delete an accepted application")

    application.delete()
    logger.info("Application %s deleted", application_id)
