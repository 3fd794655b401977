from rest_framework.exceptions import ValidationError


def int_query_param(request, name, required=True, default=None):
    """
    Read an integer query parameter (acting identities, page numbers, ...).
    """
    raw = request.query_params.get(name)
    if raw in (None, ""):
        if required:
            raise ValidationError({name: "This query parameter is required."})
        return default

    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: "A valid integer is required."})
