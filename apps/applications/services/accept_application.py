"""
Acceptance workflow: a freelancer accepts a client's application.

    1-3  load, check the actor owns the offer, check the application is PENDING
    4-5  application -> ACCEPTED and offer AVAILABLE -> IN_PROGRESS, one atomic block
    6-7  build the contract request and provision it in the Contract service
    8    notify the client
    9    return the application with a contract id or a warning

Steps 4-5 are the source of truth and are committed before the Contract
service is called. A failed or slow Contract service degrades the response to
a warning; it never rolls the acceptance back. Contract creation is therefore
at-least-once and eventually consistent, not a two-phase commit.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.db import transaction

from apps.applications.models import OfferApplication
from apps.contract.client import ContractProvisioningClient, Degraded
from apps.notifications.models import Notification
from apps.notifications.services.create_notifications import notify_user
from .application_service import ensure_offer_owner, ensure_pending, get_application_or_404
from .create_contract import build_contract_request

logger = logging.getLogger(__name__)

DEGRADED_WARNING = (
    "Application accepted, but the contract could not be created automatically "
    "({reason}). It must be created once the Contract service is reachable."
)


@dataclass
class AcceptanceResult:
    application: OfferApplication
    contract_id: Optional[int] = None
    warning_message: Optional[str] = None
    offer_started: bool = False

    @property
    def degraded(self):
        return self.contract_id is None


def accept_application(application_id, freelancer_id, contract_client=None):
    logger.info("Accepting application %s (freelancer %s)", application_id, freelancer_id)

    application = get_application_or_404(application_id)
    offer = application.offer

    ensure_offer_owner(application, freelancer_id, "accept")
    ensure_pending(application, "accepted")

    # Both writes commit together or not at all. The offer update is a
    # conditional UPDATE: if a concurrent accept already moved the offer it
    # is a no-op and this application is still accepted.
    with transaction.atomic():
        application.accept()
        offer_started = offer.begin_execution()

    if offer_started:
        logger.info("Offer %s is now IN_PROGRESS", offer.id)
    else:
        logger.info("Offer %s left as %s", offer.id, offer.status)

    contract_request = build_contract_request(application, offer)
    client = contract_client or ContractProvisioningClient()
    try:
        outcome = client.provision(contract_request)
    except Exception:
        logger.exception("Contract provisioning crashed for application %s", application.id)
        outcome = Degraded("unexpected provisioning error")

    notify_user(
        application.client_id,
        Notification.APPLICATION_ACCEPTED,
        "Application accepted",
        f"Your application for \"{offer.title}\" has been accepted.",
        offer_id=offer.id,
        application_id=application.id,
    )

    if isinstance(outcome, Degraded):
        logger.warning(
            "Application %s accepted without contract: %s", application.id, outcome.reason
        )
        return AcceptanceResult(
            application=application,
            warning_message=DEGRADED_WARNING.format(reason=outcome.reason),
            offer_started=offer_started,
        )

    logger.info("Application %s accepted, contract %s created", application.id, outcome)
    return AcceptanceResult(
        application=application,
        contract_id=outcome,
        offer_started=offer_started,
    )
