import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("reservations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DeliveryRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("notification_type", models.CharField(max_length=50)),
                ("dispatched_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("status", models.CharField(choices=[("sent", "Sent")], default="sent", max_length=20)),
                ("recipient", models.EmailField(max_length=254)),
                ("message_id", models.CharField(blank=True, max_length=255)),
                (
                    "reservation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="deliveries",
                        to="reservations.reservation",
                    ),
                ),
            ],
            options={
                "verbose_name": "Delivery record",
                "verbose_name_plural": "Delivery records",
                "ordering": ["-dispatched_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("reservation", "notification_type"),
                        name="delivery_once_per_type",
                    ),
                ],
            },
        ),
    ]
