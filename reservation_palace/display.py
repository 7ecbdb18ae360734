"""Human-readable booking rows.

Bookings only carry ids; every label here is resolved against the
collections currently loaded on the page. Nothing is cached, the
collections are small enough to scan on each render.
"""
from datetime import date
from typing import Iterable

from .schemas import Booking, Customer, Table, TimeSlot
from .utils.time import format_time_of_day

NOT_AVAILABLE = "N/A"
NO_TIME = "No time available"


def _find(items: Iterable, id: int | None):
    return next((item for item in items if item.id is not None and item.id == id), None)


def customer_label(booking: Booking, customers: Iterable[Customer]) -> str:
    customer = _find(customers, booking.customer_id)
    return customer.name if customer else NOT_AVAILABLE


def table_label(booking: Booking, tables: Iterable[Table]) -> str:
    table = _find(tables, booking.table_id)
    if table is None:
        return NOT_AVAILABLE
    return f"Table {table.table_number} ({table.number_of_seats} seats)"


def slot_time_label(slot: TimeSlot, today: date | None = None) -> str:
    if not slot.time:
        return NO_TIME
    # unparseable values are shown as stored
    return format_time_of_day(slot.time, today) or slot.time


def time_label(booking: Booking, time_slots: Iterable[TimeSlot], today: date | None = None) -> str:
    slot = _find(time_slots, booking.booking_slot_id)
    if slot is None:
        return NO_TIME
    return slot_time_label(slot, today)


def status_label(booking: Booking) -> str:
    return "Confirmed" if booking.is_confirmed else "Pending"


def special_request_label(booking: Booking) -> str:
    return booking.special_request or "None"


def booking_row(
    booking: Booking,
    customers: Iterable[Customer],
    tables: Iterable[Table],
    time_slots: Iterable[TimeSlot],
    today: date | None = None,
) -> dict:
    return {
        "id": booking.id,
        "bookingNumber": booking.booking_number,
        "customer": customer_label(booking, customers),
        "numberOfPeople": booking.number_of_people,
        "time": time_label(booking, time_slots, today),
        "table": table_label(booking, tables),
        "status": status_label(booking),
        "specialRequest": special_request_label(booking),
    }


def customer_option(customer: Customer) -> str:
    return f"{customer.name} ({customer.phone_number})"


def table_option(table: Table) -> str:
    return f"Table {table.table_number} ({table.number_of_seats} seats)"


def slot_option(slot: TimeSlot, today: date | None = None) -> str:
    return f"{slot.slot_id} - {slot_time_label(slot, today)}"
