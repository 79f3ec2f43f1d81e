from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AddressSighting",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("license_key", models.CharField(max_length=50)),
                ("address", models.CharField(max_length=45)),
                ("first_seen_at", models.DateTimeField()),
                ("last_seen_at", models.DateTimeField()),
            ],
            options={
                "db_table": "key_addresses",
                "ordering": ["-last_seen_at"],
                "indexes": [
                    models.Index(
                        fields=["license_key", "last_seen_at"], name="key_addresses_seen_idx"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("license_key", "address"), name="uq_key_address"
                    ),
                ],
            },
        ),
    ]
