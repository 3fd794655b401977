from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, PermissionDenied


class ResourceNotFound(NotFound):
    default_detail = "Resource not found."
    default_code = "not_found"


class NotAuthorized(PermissionDenied):
    """
    The acting identity is not the owner/applicant the operation requires.
    """
    default_detail = "You are not authorized to perform this action."
    default_code = "not_authorized"


class InvalidState(APIException):
    """
    A transition was attempted from a state that does not permit it.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This action is not allowed in the current state."
    default_code = "invalid_state"


class DuplicateApplication(InvalidState):
    default_detail = "You have already applied to this offer."
    default_code = "duplicate_application"


class ConcurrentModification(InvalidState):
    """
    The row changed between read and write (version or status mismatch).
    """
    default_detail = "This record was modified by another request. Reload and try again."
    default_code = "concurrent_modification"

    def __init__(self, model_name=None, object_id=None, detail=None):
        self.model_name = model_name
        self.object_id = object_id
        if detail is None and model_name is not None:
            detail = f"{model_name} #{object_id} was modified by another request."
        super().__init__(detail)
