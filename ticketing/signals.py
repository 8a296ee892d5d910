"""Signal receivers for cache invalidation.

Status changes are written with ``QuerySet.update()``, which does not send
``post_save``, so the catalog notifications are handled as well.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from ticketing import notifications
from ticketing.cache import invalidate_event
from ticketing.models import Event


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    invalidate_event(instance.event_id)


@receiver([notifications.event_created, notifications.event_status_updated])
def invalidate_event_cache_on_notification(sender, event_id, **kwargs):
    """Invalidate caches when the service creates or pauses an event."""
    invalidate_event(str(event_id))
