"""
Application lifecycle: applying, the per-(offer, client) uniqueness and the
freelancer/client side transitions.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import IntegrityError, transaction

from apps.applications.models import OfferApplication
from apps.applications.services import application_service as service
from apps.applications.services.accept_application import accept_application
from apps.cores.exceptions import (
    ConcurrentModification,
    DuplicateApplication,
    InvalidState,
    NotAuthorized,
    ResourceNotFound,
)
from apps.notifications.models import Notification
from apps.offers.models import Offer

MESSAGE = "Five years of branding work, portfolio linked below for reference."


@pytest.mark.django_db
class TestApply:

    def test_apply_creates_pending_application(self, offer):
        application = service.apply_to_offer(
            offer.id, 77, message=MESSAGE, proposed_budget=Decimal("180.00")
        )

        assert application.status == OfferApplication.PENDING
        assert application.client_id == 77
        assert application.offer_id == offer.id
        assert application.can_be_modified() is True

    def test_owner_is_notified_after_commit(self, offer, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            application = service.apply_to_offer(offer.id, 77, message=MESSAGE)

        notif = Notification.objects.get(recipient_user_id=offer.freelancer_id)
        assert notif.type == Notification.NEW_APPLICATION
        assert notif.application_id == application.id
        assert notif.offer_id == offer.id

    def test_cannot_apply_to_own_offer(self, offer):
        with pytest.raises(NotAuthorized):
            service.apply_to_offer(offer.id, offer.freelancer_id, message=MESSAGE)

    @pytest.mark.parametrize("status", [Offer.DRAFT, Offer.IN_PROGRESS, Offer.CLOSED])
    def test_offer_must_be_open(self, offer_factory, status):
        offer = offer_factory(status=status)
        with pytest.raises(InvalidState):
            service.apply_to_offer(offer.id, 77, message=MESSAGE)

    def test_inactive_offer_refuses_applications(self, offer_factory):
        offer = offer_factory(is_active=False)
        with pytest.raises(InvalidState):
            service.apply_to_offer(offer.id, 77, message=MESSAGE)

    def test_second_application_by_same_client(self, offer):
        service.apply_to_offer(offer.id, 77, message=MESSAGE)

        with pytest.raises(DuplicateApplication):
            service.apply_to_offer(offer.id, 77, message=MESSAGE)
        assert OfferApplication.objects.filter(offer=offer, client_id=77).count() == 1

    @pytest.mark.parametrize("status", [
        OfferApplication.WITHDRAWN,
        OfferApplication.REJECTED,
        OfferApplication.SHORTLISTED,
        OfferApplication.ACCEPTED,
    ])
    def test_reapply_after_any_answer_is_a_duplicate(self, offer, application_factory, status):
        first = application_factory(offer=offer, client_id=77, status=status)

        with pytest.raises(DuplicateApplication):
            service.apply_to_offer(offer.id, 77, message=MESSAGE)

        assert list(OfferApplication.objects.filter(offer=offer, client_id=77)) == [first]
        first.refresh_from_db()
        assert first.status == status

    def test_insert_race_maps_to_duplicate(self, offer):
        # The existence check passed, the insert lost the race.
        with patch.object(OfferApplication.objects, "create", side_effect=IntegrityError("unique")):
            with pytest.raises(DuplicateApplication):
                service.apply_to_offer(offer.id, 77, message=MESSAGE)

    def test_unique_constraint_is_enforced_by_the_database(self, application, application_factory):
        with pytest.raises(IntegrityError), transaction.atomic():
            application_factory(offer=application.offer, client_id=application.client_id)

    def test_unknown_offer(self):
        with pytest.raises(ResourceNotFound):
            service.apply_to_offer(999999, 77, message=MESSAGE)


@pytest.mark.django_db
class TestFreelancerTransitions:

    def test_reject_records_reason(self, application):
        owner = application.offer.freelancer_id
        rejected = service.reject_application(application.id, owner, "Budget too low")

        rejected.refresh_from_db()
        assert rejected.status == OfferApplication.REJECTED
        assert rejected.rejection_reason == "Budget too low"
        assert rejected.responded_at is not None

    def test_reject_needs_offer_owner(self, application):
        with pytest.raises(NotAuthorized):
            service.reject_application(application.id, application.client_id)

    def test_shortlist_then_reject_is_refused(self, application):
        owner = application.offer.freelancer_id
        service.shortlist_application(application.id, owner)

        with pytest.raises(InvalidState):
            service.reject_application(application.id, owner)

    def test_mark_read(self, application):
        owner = application.offer.freelancer_id
        service.mark_application_read(application.id, owner)

        application.refresh_from_db()
        assert application.is_read is True
        assert list(service.unread_applications_for_freelancer(owner)) == []

    def test_mark_read_keeps_the_version(self, application):
        owner = application.offer.freelancer_id
        # Loaded before the freelancer opened the application.
        loaded = OfferApplication.objects.get(pk=application.pk)

        service.mark_application_read(application.id, owner)
        loaded.accept()

        loaded.refresh_from_db()
        assert loaded.status == OfferApplication.ACCEPTED
        assert loaded.is_read is True
        assert loaded.version == application.version + 1


@pytest.mark.django_db
class TestClientTransitions:

    @pytest.mark.parametrize("status", [OfferApplication.PENDING, OfferApplication.SHORTLISTED])
    def test_withdraw_from_open_states(self, application_factory, status):
        application = application_factory(status=status)

        withdrawn = service.withdraw_application(application.id, application.client_id)

        assert withdrawn.status == OfferApplication.WITHDRAWN

    def test_withdrawn_can_never_be_accepted(self, application, contract_client):
        service.withdraw_application(application.id, application.client_id)

        with pytest.raises(InvalidState):
            accept_application(application.id, application.offer.freelancer_id, contract_client)
        contract_client.provision.assert_not_called()

    def test_withdraw_answered_application_is_refused(self, application_factory):
        application = application_factory(status=OfferApplication.REJECTED)
        with pytest.raises(InvalidState):
            service.withdraw_application(application.id, application.client_id)

    def test_withdraw_needs_applicant(self, application):
        with pytest.raises(NotAuthorized):
            service.withdraw_application(application.id, application.client_id + 1)

    def test_update_pending_application(self, application):
        updated = service.update_application(
            application.id,
            application.client_id,
            message=MESSAGE,
            estimated_duration=21,
        )

        updated.refresh_from_db()
        assert updated.message == MESSAGE
        assert updated.estimated_duration == 21
        assert updated.version == 2

    def test_update_after_answer_is_refused(self, application):
        service.reject_application(application.id, application.offer.freelancer_id)

        with pytest.raises(InvalidState):
            service.update_application(application.id, application.client_id, message=MESSAGE)

    def test_update_loses_to_concurrent_transition(self, application):
        stale = OfferApplication.objects.get(pk=application.pk)
        application.shortlist()

        stale.message = MESSAGE
        with pytest.raises(ConcurrentModification):
            stale.save_versioned(["message"], status=OfferApplication.PENDING)

    def test_delete_accepted_application_is_refused(self, application_factory):
        application = application_factory(status=OfferApplication.ACCEPTED)
        with pytest.raises(InvalidState):
            service.delete_application(application.id, application.client_id)

    def test_delete_pending_application(self, application):
        service.delete_application(application.id, application.client_id)
        assert not OfferApplication.objects.filter(pk=application.pk).exists()


@pytest.mark.django_db
class TestQueries:

    def test_lists_and_counts(self, offer, application_factory):
        pending = application_factory(offer=offer)
        rejected = application_factory(offer=offer, status=OfferApplication.REJECTED)
        application_factory()

        assert service.count_pending_applications(offer.id) == 1
        assert set(service.applications_for_offer(offer.id)) == {pending, rejected}
        assert list(service.applications_for_offer_with_status(offer.id, "REJECTED")) == [rejected]
        assert list(service.applications_for_client(pending.client_id)) == [pending]
        assert pending in service.recent_applications()

    def test_applications_for_missing_offer(self):
        with pytest.raises(ResourceNotFound):
            service.applications_for_offer(424242)
