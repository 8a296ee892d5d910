"""Django ORM implementation of the EventStore."""

from django.db import transaction
from django.db.models import Max

from ticketing import models as orm
from ticketing.domain import (
    Capacity,
    Event,
    EventId,
    EventStatus,
    Identity,
    Money,
    Ticket,
)
from ticketing.domain.errors import InvariantViolation
from ticketing.stores.interfaces import EventStore


def _to_event(row: orm.Event) -> Event:
    return Event(
        id=EventId(row.event_id),
        creator=Identity(row.creator),
        name=row.name,
        ticket_limit=Capacity(row.ticket_limit),
        price=Money(int(row.price)),
        event_date=row.event_date,
        status=EventStatus(row.status),
    )


def _to_ticket(row: orm.Ticket) -> Ticket:
    return Ticket(
        owner=Identity(row.owner),
        fname=row.fname,
        lname=row.lname,
        email=row.email,
        paid_price=Money(int(row.paid_price)),
        purchased=row.purchased,
    )


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def atomic(self):
        return transaction.atomic()

    def _catalog(self, for_update: bool = False) -> orm.Catalog:
        queryset = orm.Catalog.objects.select_for_update() if for_update else orm.Catalog.objects
        catalog, _ = queryset.get_or_create(pk=orm.Catalog.SINGLETON_PK)
        return catalog

    def next_event_id(self) -> EventId:
        with transaction.atomic():
            catalog = self._catalog(for_update=True)
            catalog.event_counter += 1
            catalog.save(update_fields=["event_counter", "updated_at"])
        return EventId.from_counter(catalog.event_counter)

    def add_event(self, event: Event) -> None:
        if orm.Event.objects.filter(pk=event.id.value).exists():
            raise InvariantViolation(f"Event ID {event.id} is already assigned")
        last = orm.Event.objects.aggregate(last=Max("sequence"))["last"] or 0
        orm.Event.objects.create(
            event_id=event.id.value,
            sequence=last + 1,
            creator=event.creator.value,
            name=event.name,
            ticket_limit=event.ticket_limit.value,
            price=event.price.amount,
            event_date=event.event_date,
            status=int(event.status),
        )

    def list_event_ids(self) -> list[EventId]:
        return [
            EventId(value)
            for value in orm.Event.objects.order_by("sequence").values_list("event_id", flat=True)
        ]

    def get_event(self, event_id: EventId) -> Event | None:
        row = orm.Event.objects.filter(pk=event_id.value).first()
        return _to_event(row) if row is not None else None

    def lock_event(self, event_id: EventId) -> Event | None:
        row = orm.Event.objects.select_for_update().filter(pk=event_id.value).first()
        return _to_event(row) if row is not None else None

    def set_status(self, event_id: EventId, status: EventStatus) -> None:
        orm.Event.objects.filter(pk=event_id.value).update(status=int(status))

    def list_tickets(self, event_id: EventId) -> list[Ticket]:
        rows = orm.Ticket.objects.filter(event_id=event_id.value).order_by("position")
        return [_to_ticket(row) for row in rows]

    def count_tickets(self, event_id: EventId) -> int:
        return orm.Ticket.objects.filter(event_id=event_id.value).count()

    def find_ticket(self, event_id: EventId, owner: Identity) -> tuple[int, Ticket] | None:
        row = orm.Ticket.objects.filter(event_id=event_id.value, owner=owner.value).first()
        if row is None:
            return None
        return row.position, _to_ticket(row)

    def append_ticket(self, event_id: EventId, ticket: Ticket) -> None:
        orm.Ticket.objects.create(
            event_id=event_id.value,
            position=self.count_tickets(event_id),
            owner=ticket.owner.value,
            fname=ticket.fname,
            lname=ticket.lname,
            email=ticket.email,
            paid_price=ticket.paid_price.amount,
            purchased=ticket.purchased,
        )

    def remove_ticket(self, event_id: EventId, index: int) -> None:
        tickets = orm.Ticket.objects.filter(event_id=event_id.value)
        with transaction.atomic():
            last_position = tickets.count() - 1
            tickets.filter(position=index).delete()
            if index != last_position:
                tickets.filter(position=last_position).update(position=index)

    def get_balance(self) -> Money:
        return Money(int(self._catalog().balance))

    def credit(self, amount: Money) -> None:
        with transaction.atomic():
            catalog = self._catalog(for_update=True)
            catalog.balance += amount.amount
            catalog.save(update_fields=["balance", "updated_at"])

    def debit(self, amount: Money) -> None:
        with transaction.atomic():
            catalog = self._catalog(for_update=True)
            if amount.amount > catalog.balance:
                raise InvariantViolation("Debit exceeds the held balance")
            catalog.balance -= amount.amount
            catalog.save(update_fields=["balance", "updated_at"])
