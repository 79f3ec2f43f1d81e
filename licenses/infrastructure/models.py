"""
LicenseKey Django ORM model.

This is the infrastructure layer model for license keys.
Domain entities are in licenses.domain.license_key.
"""
from django.db import models


class LicenseKey(models.Model):
    """
    An issued license key and its usage state.
    Given to customers to unlock the client application.
    """

    license_key = models.CharField(max_length=50, primary_key=True)
    owner = models.CharField(max_length=255)
    active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField()
    last_used_at = models.DateTimeField(null=True, blank=True)
    last_heartbeat_at = models.DateTimeField(null=True, blank=True)
    last_address = models.CharField(max_length=45, null=True, blank=True)

    class Meta:
        db_table = "license_keys"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="license_keys_created_idx"),
            models.Index(fields=["active", "created_at"], name="license_keys_active_idx"),
        ]

    def __str__(self):
        return self.license_key
