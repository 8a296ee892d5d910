"""Notifications sent by the event service once an operation has committed.

Receivers get keyword arguments only:

- ``event_created``: event_id, name, creator, event_date, status
- ``event_status_updated``: event_id, status
- ``ticket_purchased``: buyer, event_id, price
- ``ticket_canceled``: owner, event_id, refunded_amount
- ``unmatched_call``: caller, payload
"""

from django.dispatch import Signal

event_created = Signal()
event_status_updated = Signal()
ticket_purchased = Signal()
ticket_canceled = Signal()
unmatched_call = Signal()
