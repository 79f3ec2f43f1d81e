"""
Account Django ORM model.

This is the infrastructure layer model for accounts.
Domain entities are in accounts.domain.account.
"""
from django.db import models


class Account(models.Model):
    """
    Role-tagged account.

    ``role`` may hold the legacy ``va`` value, read back as operator.
    """

    ROLE_CHOICES = [
        ("creator", "Creator"),
        ("admin", "Admin"),
        ("operator", "Operator"),
        ("va", "Operator (legacy)"),
    ]

    username = models.CharField(max_length=150, unique=True)
    password = models.CharField(max_length=128)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    bound_license_key = models.CharField(max_length=50, null=True, blank=True)
    created_at = models.DateTimeField()
    last_login_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "accounts"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["bound_license_key"], name="accounts_bound_key_idx"),
        ]

    def __str__(self):
        return f"{self.username} ({self.role})"
