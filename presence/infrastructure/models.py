"""
AddressSighting Django ORM model.

This is the infrastructure layer model for address sightings.
Domain entities are in presence.domain.address_sighting.
"""
from django.db import models


class AddressSighting(models.Model):
    """
    A network address observed for a license key.

    Rows survive deletion of the key as provenance history.
    """

    license_key = models.CharField(max_length=50)
    address = models.CharField(max_length=45)
    first_seen_at = models.DateTimeField()
    last_seen_at = models.DateTimeField()

    class Meta:
        db_table = "key_addresses"
        ordering = ["-last_seen_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["license_key", "address"],
                name="uq_key_address",
            ),
        ]
        indexes = [
            models.Index(fields=["license_key", "last_seen_at"], name="key_addresses_seen_idx"),
        ]

    def __str__(self):
        return f"{self.license_key} @ {self.address}"
