from django.db import models
from django.db.models import F
from django.utils import timezone

from apps.cores.exceptions import ConcurrentModification


class VersionedModel(models.Model):
    """
    Row versioning for optimistic concurrency.

    State changes go through ``save_versioned``: a single UPDATE filtered on the
    version this instance was read with (plus any expected column values). If
    another request wrote the row first, no row matches and
    ``ConcurrentModification`` is raised instead of silently overwriting it.
    """

    version = models.PositiveIntegerField(
        default=1,
        help_text="Record version for optimistic locking."
    )

    class Meta:
        abstract = True

    def save_versioned(self, fields, **expected):
        model_class = self.__class__
        values = {name: getattr(self, name) for name in fields}

        now = timezone.now()
        for field in model_class._meta.concrete_fields:
            if getattr(field, "auto_now", False):
                values[field.name] = now

        updated = model_class.objects.filter(
            pk=self.pk,
            version=self.version,
            **expected
        ).update(version=F("version") + 1, **values)

        if not updated:
            raise ConcurrentModification(model_name=model_class.__name__, object_id=self.pk)

        self.version += 1
        for name, value in values.items():
            setattr(self, name, value)
