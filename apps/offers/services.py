import logging

from django.db import transaction
from django.utils import timezone

from apps.cores.exceptions import ConcurrentModification, InvalidState, NotAuthorized, ResourceNotFound
from apps.notifications.models import Notification
from apps.notifications.services.create_notifications import notify_user
from .models import Offer, OfferQuestion

logger = logging.getLogger(__name__)


UPDATABLE_FIELDS = [
    "title",
    "domain",
    "description",
    "price",
    "duration_type",
    "deadline",
    "category",
    "tags",
    "image_url",
    "is_featured",
]


def get_offer_or_404(offer_id):
    try:
        return Offer.objects.get(pk=offer_id)
    except Offer.DoesNotExist:
        raise ResourceNotFound(f"Offer not found with id: {offer_id}")


def _ensure_owner(offer, freelancer_id, action):
    if offer.freelancer_id != freelancer_id:
        raise NotAuthorized(f"You are not authorized to {action} this offer")


def create_offer(freelancer_id, **data):
    """
    New offers always start as an active DRAFT, whatever the caller sent.
    """
    data.pop("status", None)
    offer = Offer.objects.create(
        freelancer_id=freelancer_id,
        status=Offer.DRAFT,
        is_active=True,
        **data
    )
    logger.info("Offer %s created for freelancer %s", offer.id, freelancer_id)
    return offer


def view_offer(offer_id):
    offer = get_offer_or_404(offer_id)
    offer.increment_views()
    return offer


def publish_offer(offer_id, freelancer_id):
    offer = get_offer_or_404(offer_id)
    _ensure_owner(offer, freelancer_id, "publish")

    if offer.publish():
        logger.info("Offer %s published", offer.id)
    return offer


@transaction.atomic
def change_offer_status(offer_id, new_status, freelancer_id):
    offer = get_offer_or_404(offer_id)
    _ensure_owner(offer, freelancer_id, "change the status of")

    if new_status == offer.status:
        return offer

    if new_status == Offer.AVAILABLE:
        if not offer.publish():
            raise InvalidState("Only draft offers can be published")
    elif new_status == Offer.IN_PROGRESS:
        if not offer.begin_execution():
            raise InvalidState("Only available offers can move to in progress")
    elif new_status == Offer.ACCEPTED:
        offer.accept()
    elif new_status == Offer.EXPIRED:
        offer.expire()
    elif new_status == Offer.CLOSED:
        offer.deactivate()
    elif new_status == Offer.CANCELLED:
        offer.cancel()
    elif new_status == Offer.COMPLETED:
        if offer.status not in (Offer.IN_PROGRESS, Offer.ACCEPTED):
            raise InvalidState("Only offers in progress can be completed")
        offer.complete()
    else:
        raise InvalidState(f"An offer cannot be moved back to {new_status}")

    logger.info("Offer %s moved to %s", offer.id, offer.status)
    return offer


def update_offer(offer_id, freelancer_id, **data):
    offer = get_offer_or_404(offer_id)
    _ensure_owner(offer, freelancer_id, "update")

    if offer.status == Offer.ACCEPTED:
        raise InvalidState("Cannot update an accepted offer")

    fields = []
    for name in UPDATABLE_FIELDS:
        if name not in data:
            continue
        # A missing deadline keeps the current one.
        if name == "deadline" and data[name] is None:
            continue
        setattr(offer, name, data[name])
        fields.append(name)

    if fields:
        offer.save_versioned(fields)
        logger.info("Offer %s updated (%s)", offer.id, ", ".join(fields))
    return offer


@transaction.atomic
def delete_offer(offer_id, freelancer_id):
    offer = get_offer_or_404(offer_id)
    _ensure_owner(offer, freelancer_id, "delete")

    if offer.status in (Offer.ACCEPTED, Offer.IN_PROGRESS):
        raise InvalidState("Cannot delete an accepted or in-progress offer")

    if offer.applications.filter(status__in=["ACCEPTED", "REJECTED"]).exists():
        raise InvalidState("Cannot delete an offer with answered applications")

    offer.delete()
    logger.info("Offer %s deleted", offer_id)


def expire_overdue_offers(today=None):
    """
    Expire every AVAILABLE offer whose deadline has passed. Returns the count.
    """
    today = today or timezone.localdate()
    expired = 0

    overdue = Offer.objects.filter(status=Offer.AVAILABLE, deadline__lt=today)
    for offer in overdue:
        try:
            with transaction.atomic():
                offer.expire()
        except ConcurrentModification:
            logger.info("Offer %s changed while expiring, skipped", offer.id)
            continue
        expired += 1

    if expired:
        logger.info("Expired %s overdue offers", expired)
    return expired


# ---------------- Questions ----------------

def questions_for_offer(offer_id):
    offer = get_offer_or_404(offer_id)
    return offer.questions.order_by("-asked_at")


@transaction.atomic
def ask_question(offer_id, client_id, question_text):
    offer = get_offer_or_404(offer_id)
    if offer.freelancer_id == client_id:
        raise NotAuthorized("You cannot ask a question on your own offer")

    question = OfferQuestion.objects.create(
        offer=offer,
        client_id=client_id,
        question_text=question_text.strip(),
    )
    logger.info("Question %s asked on offer %s by client %s", question.id, offer.id, client_id)

    notify_user(
        offer.freelancer_id,
        Notification.NEW_QUESTION,
        "New question",
        f"A client asked a question about \"{offer.title}\".",
        offer_id=offer.id,
        question_id=question.id,
    )
    return question


@transaction.atomic
def answer_question(question_id, freelancer_id, answer_text):
    try:
        question = OfferQuestion.objects.select_related("offer").get(pk=question_id)
    except OfferQuestion.DoesNotExist:
        raise ResourceNotFound(f"Question not found with id: {question_id}")

    _ensure_owner(question.offer, freelancer_id, "answer questions on")

    question.answer_text = answer_text.strip()
    question.answered_at = timezone.now()
    question.save(update_fields=["answer_text", "answered_at"])
    logger.info("Question %s answered by freelancer %s", question.id, freelancer_id)

    notify_user(
        question.client_id,
        Notification.QUESTION_ANSWERED,
        "Your question was answered",
        f"The freelancer answered your question about \"{question.offer.title}\".",
        offer_id=question.offer_id,
        question_id=question.id,
    )
    return question
