from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AccessEvent",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("license_key", models.CharField(blank=True, default="", max_length=50)),
                ("action", models.CharField(max_length=50)),
                ("status", models.CharField(max_length=50)),
                ("address", models.CharField(blank=True, max_length=45, null=True)),
                ("timestamp", models.DateTimeField()),
            ],
            options={
                "db_table": "access_logs",
                "ordering": ["-timestamp", "-id"],
                "indexes": [
                    models.Index(fields=["timestamp"], name="access_logs_timestamp_idx"),
                    models.Index(
                        fields=["license_key", "action"], name="access_logs_key_action_idx"
                    ),
                ],
            },
        ),
    ]
