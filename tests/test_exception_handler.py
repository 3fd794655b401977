from django.db import IntegrityError

from apps.cores.exception_handler import (
    GENERIC_ERROR_MESSAGE,
    INTEGRITY_ERROR_MESSAGE,
    custom_exception_handler,
)
from apps.cores.exceptions import ConcurrentModification, DuplicateApplication


def test_domain_error_keeps_status_and_code():
    response = custom_exception_handler(DuplicateApplication(), {})

    assert response.status_code == 409
    assert response.data["code"] == "duplicate_application"
    assert response.data["message"] == "You have already applied to this offer."


def test_concurrent_modification_names_the_record():
    response = custom_exception_handler(ConcurrentModification("Offer", 5), {})

    assert response.status_code == 409
    assert response.data["message"] == "Offer #5 was modified by another request."


def test_integrity_error_hides_sql():
    response = custom_exception_handler(IntegrityError("UNIQUE constraint failed: offers_offer.id"), {})

    assert response.status_code == 400
    assert response.data["message"] == INTEGRITY_ERROR_MESSAGE
    assert "UNIQUE" not in str(response.data)


def test_unexpected_error_is_logged_and_generic(caplog):
    response = custom_exception_handler(KeyError("secret"), {"view": None})

    assert response.status_code == 500
    assert response.data["message"] == GENERIC_ERROR_MESSAGE
    assert "Unhandled exception" in caplog.text
