import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Catalog",
            fields=[
                (
                    "id",
                    models.PositiveSmallIntegerField(
                        default=1, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("event_counter", models.PositiveIntegerField(default=0)),
                ("balance", models.DecimalField(decimal_places=0, default=0, max_digits=78)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "event_id",
                    models.CharField(
                        editable=False, max_length=32, primary_key=True, serialize=False
                    ),
                ),
                ("sequence", models.PositiveIntegerField(editable=False, unique=True)),
                ("creator", models.CharField(max_length=255)),
                ("name", models.CharField(max_length=255)),
                ("ticket_limit", models.PositiveIntegerField()),
                ("price", models.DecimalField(decimal_places=0, max_digits=78)),
                ("event_date", models.DateTimeField()),
                (
                    "status",
                    models.PositiveSmallIntegerField(
                        choices=[(0, "Active"), (1, "Paused")], default=0
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["sequence"],
            },
        ),
        migrations.CreateModel(
            name="Ticket",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("position", models.PositiveIntegerField()),
                ("owner", models.CharField(max_length=255)),
                ("fname", models.CharField(max_length=255)),
                ("lname", models.CharField(max_length=255)),
                ("email", models.CharField(max_length=255)),
                ("paid_price", models.DecimalField(decimal_places=0, max_digits=78)),
                ("purchased", models.DateTimeField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tickets",
                        to="ticketing.event",
                    ),
                ),
            ],
            options={
                "ordering": ["event", "position"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event", "owner"), name="unique_ticket_owner_per_event"
                    ),
                    models.UniqueConstraint(
                        fields=("event", "position"), name="unique_ticket_position_per_event"
                    ),
                ],
            },
        ),
    ]
