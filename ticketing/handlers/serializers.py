"""Serializers for request input and for transforming domain models to API responses."""

from decimal import Decimal

from rest_framework import serializers

from ticketing.domain import EventStatus


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    event_id = serializers.CharField(source="id.value")
    creator = serializers.CharField(source="creator.value")
    name = serializers.CharField()
    ticket_limit = serializers.IntegerField(source="ticket_limit.value")
    price = serializers.IntegerField(source="price.amount")
    event_date = serializers.DateTimeField()
    status = serializers.IntegerField()


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    owner = serializers.CharField(source="owner.value")
    fname = serializers.CharField()
    lname = serializers.CharField()
    email = serializers.CharField()
    paid_price = serializers.IntegerField(source="paid_price.amount")
    purchased = serializers.DateTimeField()


class TicketLookupSerializer(serializers.Serializer):
    found = serializers.BooleanField()
    ticket = TicketSerializer(allow_null=True)
    index = serializers.IntegerField()


class EventCreateSerializer(serializers.Serializer):
    """Input for event creation. ``price`` is in major currency units."""

    name = serializers.CharField(max_length=255)
    ticket_limit = serializers.IntegerField(min_value=0)
    price = serializers.DecimalField(max_digits=36, decimal_places=18, min_value=Decimal("0"))
    event_date = serializers.DateTimeField()


class EventStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[(status.value, status.name) for status in EventStatus])


class TicketPurchaseSerializer(serializers.Serializer):
    """Input for a ticket purchase. ``payment_value`` is in minor currency units."""

    fname = serializers.CharField(allow_blank=True, max_length=255)
    lname = serializers.CharField(allow_blank=True, max_length=255)
    email = serializers.CharField(allow_blank=True, max_length=255)
    payment_value = serializers.IntegerField(min_value=0)
