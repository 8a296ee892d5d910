from django.contrib import admin

from ticketing.models import Catalog, Event, Ticket


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0
    readonly_fields = ["position", "owner", "fname", "lname", "email", "paid_price", "purchased"]
    can_delete = False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["event_id", "name", "creator", "event_date", "price", "ticket_limit", "status"]
    list_filter = ["status"]
    search_fields = ["event_id", "name"]
    readonly_fields = ["event_id", "sequence", "creator", "ticket_limit", "price"]
    inlines = [TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["owner", "event", "paid_price", "purchased"]
    list_filter = ["event"]
    search_fields = ["owner", "email", "lname"]


@admin.register(Catalog)
class CatalogAdmin(admin.ModelAdmin):
    list_display = ["event_counter", "balance", "updated_at"]
    readonly_fields = ["event_counter", "balance"]
