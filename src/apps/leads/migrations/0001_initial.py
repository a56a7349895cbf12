"""Initial migration for leads app - Submission model."""

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Submission",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                ("email", models.EmailField(max_length=254, verbose_name="email")),
                (
                    "goal",
                    models.CharField(
                        choices=[("Website", "Website"), ("App", "App"), ("Branding", "Branding"), ("Other", "Other")],
                        max_length=20,
                        verbose_name="goal",
                    ),
                ),
                (
                    "pages_count",
                    models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="number of pages"),
                ),
                ("features", models.JSONField(blank=True, default=list, verbose_name="features")),
                (
                    "platform",
                    models.CharField(
                        blank=True,
                        choices=[("iOS", "iOS"), ("Android", "Android"), ("Web", "Web")],
                        default="",
                        max_length=20,
                        verbose_name="platform",
                    ),
                ),
                ("auth_needed", models.BooleanField(blank=True, null=True, verbose_name="authentication needed")),
                (
                    "budget",
                    models.CharField(
                        choices=[
                            ("<500", "Less than $500"),
                            ("500-2000", "$500 - $2,000"),
                            ("2000-5000", "$2,000 - $5,000"),
                            ("5000+", "$5,000+"),
                        ],
                        max_length=20,
                        verbose_name="budget",
                    ),
                ),
                (
                    "recommended_package",
                    models.CharField(
                        choices=[("Starter", "Starter"), ("Growth", "Growth"), ("Pro", "Pro")],
                        editable=False,
                        max_length=20,
                        verbose_name="recommended package",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("New", "New"), ("Contacted", "Contacted")],
                        db_index=True,
                        default="New",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated")),
            ],
            options={
                "verbose_name": "submission",
                "verbose_name_plural": "submissions",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
