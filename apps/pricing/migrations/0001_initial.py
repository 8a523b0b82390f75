from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PricingRule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                (
                    "rule_type",
                    models.CharField(
                        choices=[
                            ("seasonal", "Seasonal"),
                            ("weekend", "Weekend"),
                            ("long_stay", "Long stay"),
                            ("last_minute", "Last minute"),
                            ("custom", "Custom"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "adjustment_type",
                    models.CharField(
                        choices=[("percentage", "Percentage"), ("fixed_amount", "Fixed amount")],
                        default="percentage",
                        max_length=20,
                    ),
                ),
                (
                    "value",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Signed: negative values are discounts.",
                        max_digits=10,
                    ),
                ),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                (
                    "days_of_week",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Weekdays the rule applies to, 0=Monday ... 6=Sunday.",
                    ),
                ),
                ("min_nights", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("max_days_before_arrival", models.PositiveSmallIntegerField(blank=True, null=True)),
                (
                    "unit_categories",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Unit categories in scope; empty means all units.",
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Pricing rule",
                "verbose_name_plural": "Pricing rules",
                "ordering": ["position", "id"],
                "indexes": [models.Index(fields=["is_active", "position"], name="pricing_rule_active_pos_idx")],
            },
        ),
    ]
