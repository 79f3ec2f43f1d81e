from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LicenseKey",
            fields=[
                (
                    "license_key",
                    models.CharField(max_length=50, primary_key=True, serialize=False),
                ),
                ("owner", models.CharField(max_length=255)),
                ("active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField()),
                ("last_used_at", models.DateTimeField(blank=True, null=True)),
                ("last_heartbeat_at", models.DateTimeField(blank=True, null=True)),
                ("last_address", models.CharField(blank=True, max_length=45, null=True)),
            ],
            options={
                "db_table": "license_keys",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["created_at"], name="license_keys_created_idx"),
                    models.Index(
                        fields=["active", "created_at"], name="license_keys_active_idx"
                    ),
                ],
            },
        ),
    ]
