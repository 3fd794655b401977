from decimal import Decimal

from django.utils import timezone

from apps.contract.client import ContractProvisioningRequest


def build_contract_request(application, offer=None):
    """
    Contract data for an accepted application:
    - amount: the proposed budget, else the offer price
    - runs from today until the offer deadline (open-ended without one)
    """
    offer = offer or application.offer

    if application.proposed_budget is not None:
        amount = application.proposed_budget
    elif offer.price is not None:
        amount = offer.price
    else:
        amount = Decimal("0")

    return ContractProvisioningRequest(
        client_id=application.client_id,
        freelancer_id=offer.freelancer_id,
        offer_application_id=application.id,
        title=offer.title,
        description=offer.description,
        terms=f"Contract from offer: {offer.title}",
        amount=amount,
        start_date=timezone.localdate(),
        end_date=offer.deadline,
        status="DRAFT",
    )
