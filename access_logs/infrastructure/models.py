"""
AccessEvent Django ORM model.

This is the infrastructure layer model for the access journal.
Domain entities are in access_logs.domain.access_event.
"""
from django.db import models


class AccessEvent(models.Model):
    """
    Access journal row.

    ``license_key`` is a plain column so history outlives deleted keys.
    """

    license_key = models.CharField(max_length=50, blank=True, default="")
    action = models.CharField(max_length=50)
    status = models.CharField(max_length=50)
    address = models.CharField(max_length=45, null=True, blank=True)
    timestamp = models.DateTimeField()

    class Meta:
        db_table = "access_logs"
        ordering = ["-timestamp", "-id"]
        indexes = [
            models.Index(fields=["timestamp"], name="access_logs_timestamp_idx"),
            models.Index(fields=["license_key", "action"], name="access_logs_key_action_idx"),
        ]

    def __str__(self):
        return f"{self.action}/{self.status} {self.license_key}"
