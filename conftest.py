"""
Test configuration: pytest-django fixtures and factory_boy factories.

Identities (freelancer, client, user) are plain integers issued by the
identity provider, so factories only hand out distinct ids.

RUNNING TESTS:
    pip install -e ".[test]"
    pytest -v
    pytest -m workflow -v
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import factory
import pytest
from django.utils import timezone
from factory.django import DjangoModelFactory

from apps.contract.client import ContractProvisioningClient


# ============================================================================
# OFFER FACTORIES
# ============================================================================

class OfferFactory(DjangoModelFactory):
    """Published offer, open for applications."""

    class Meta:
        model = "offers.Offer"

    freelancer_id = factory.Sequence(lambda n: 1000 + n)
    title = factory.Sequence(lambda n: f"Brand identity package {n}")
    domain = "design"
    description = "Logo, colour palette and typography guide for a small business."
    price = Decimal("250.00")
    duration_type = "fixed"
    status = "AVAILABLE"
    deadline = factory.LazyFunction(lambda: timezone.localdate() + timedelta(days=30))
    category = "branding"
    tags = "logo,branding"
    is_active = True
    published_at = factory.LazyFunction(timezone.now)


class DraftOfferFactory(OfferFactory):
    status = "DRAFT"
    published_at = None


class OfferQuestionFactory(DjangoModelFactory):

    class Meta:
        model = "offers.OfferQuestion"

    offer = factory.SubFactory(OfferFactory)
    client_id = factory.Sequence(lambda n: 7000 + n)
    question_text = "Does the package include source files for the logo?"


# ============================================================================
# APPLICATION FACTORIES
# ============================================================================

class OfferApplicationFactory(DjangoModelFactory):

    class Meta:
        model = "applications.OfferApplication"

    offer = factory.SubFactory(OfferFactory)
    client_id = factory.Sequence(lambda n: 5000 + n)
    message = "I have delivered a dozen brand identities for local shops this year."
    proposed_budget = Decimal("200.00")
    estimated_duration = 14
    status = "PENDING"


# ============================================================================
# NOTIFICATION FACTORIES
# ============================================================================

class NotificationFactory(DjangoModelFactory):

    class Meta:
        model = "notifications.Notification"

    recipient_user_id = factory.Sequence(lambda n: 9000 + n)
    type = "NEW_APPLICATION"
    title = "New application"
    message = factory.Sequence(lambda n: f"Application #{n} received.")
    is_read = False


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def offer_factory(db):
    return OfferFactory


@pytest.fixture
def draft_offer_factory(db):
    return DraftOfferFactory


@pytest.fixture
def question_factory(db):
    return OfferQuestionFactory


@pytest.fixture
def application_factory(db):
    return OfferApplicationFactory


@pytest.fixture
def notification_factory(db):
    return NotificationFactory


@pytest.fixture
def offer(offer_factory):
    return offer_factory()


@pytest.fixture
def draft_offer(draft_offer_factory):
    return draft_offer_factory()


@pytest.fixture
def application(application_factory, offer):
    return application_factory(offer=offer)


@pytest.fixture
def contract_client():
    """Contract service stand-in that creates contract #42."""
    client = MagicMock(spec=ContractProvisioningClient)
    client.provision.return_value = 42
    return client


@pytest.fixture
def api_client(db):
    """Provide a DRF API test client."""
    from rest_framework.test import APIClient
    return APIClient()
