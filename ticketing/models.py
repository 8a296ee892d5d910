"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models

# Amounts are integers in minor units; 78 digits hold any 256-bit value.
AMOUNT_DIGITS = 78


class Catalog(models.Model):
    """Singleton row holding the event counter and the held balance."""

    SINGLETON_PK = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_PK, editable=False)
    event_counter = models.PositiveIntegerField(default=0)
    balance = models.DecimalField(max_digits=AMOUNT_DIGITS, decimal_places=0, default=0)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Catalog ({self.event_counter} events, balance {self.balance})"


class Event(models.Model):
    """Persistence model for events."""

    class Status(models.IntegerChoices):
        ACTIVE = 0, "Active"
        PAUSED = 1, "Paused"

    event_id = models.CharField(primary_key=True, max_length=32, editable=False)
    sequence = models.PositiveIntegerField(unique=True, editable=False)
    creator = models.CharField(max_length=255)
    name = models.CharField(max_length=255)
    ticket_limit = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=AMOUNT_DIGITS, decimal_places=0)
    event_date = models.DateTimeField()
    status = models.PositiveSmallIntegerField(choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sequence"]

    def __str__(self) -> str:
        return f"{self.event_id} - {self.name}"


class Ticket(models.Model):
    """Persistence model for tickets.

    ``position`` is the ticket's slot in its event's collection.
    """

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="tickets")
    position = models.PositiveIntegerField()
    owner = models.CharField(max_length=255)
    fname = models.CharField(max_length=255)
    lname = models.CharField(max_length=255)
    email = models.CharField(max_length=255)
    paid_price = models.DecimalField(max_digits=AMOUNT_DIGITS, decimal_places=0)
    purchased = models.DateTimeField()

    class Meta:
        ordering = ["event", "position"]
        constraints = [
            models.UniqueConstraint(fields=["event", "owner"], name="unique_ticket_owner_per_event"),
            models.UniqueConstraint(fields=["event", "position"], name="unique_ticket_position_per_event"),
        ]

    def __str__(self) -> str:
        return f"{self.owner} - {self.event_id}"
