from decimal import Decimal

import django.core.validators
from django.db import migrations, models

import apps.units.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Unit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                (
                    "category",
                    models.CharField(
                        blank=True,
                        help_text="Category used to scope pricing rules (e.g. suite, standard).",
                        max_length=50,
                    ),
                ),
                ("description", models.TextField(blank=True)),
                (
                    "base_rate",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Nightly rate before adjustments.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("currency", models.CharField(default=apps.units.models.default_currency, max_length=3)),
                ("max_guests", models.PositiveSmallIntegerField(default=2)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Unit",
                "verbose_name_plural": "Units",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["is_active", "category"], name="unit_active_category_idx")],
            },
        ),
    ]
