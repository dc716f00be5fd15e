import uuid

from django.db import models


class BaseModel(models.Model):
    """UUID primary key and audit timestamps shared by the POS tables."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
