from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("username", models.CharField(max_length=150, unique=True)),
                ("password", models.CharField(max_length=128)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("creator", "Creator"),
                            ("admin", "Admin"),
                            ("operator", "Operator"),
                            ("va", "Operator (legacy)"),
                        ],
                        max_length=20,
                    ),
                ),
                ("bound_license_key", models.CharField(blank=True, max_length=50, null=True)),
                ("created_at", models.DateTimeField()),
                ("last_login_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "accounts",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["bound_license_key"], name="accounts_bound_key_idx"),
                ],
            },
        ),
    ]
