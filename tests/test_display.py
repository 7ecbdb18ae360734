from datetime import date

from reservation_palace import display
from reservation_palace.schemas import Booking, Customer, Table, TimeSlot
from reservation_palace.utils.time import format_time_of_day, normalize_time_of_day, parse_time_of_day

from .conftest import BOOKINGS, CUSTOMERS, TABLES, TIME_SLOTS

TODAY = date(2025, 6, 1)

customers = [Customer.model_validate(c) for c in CUSTOMERS]
tables = [Table.model_validate(t) for t in TABLES]
slots = [TimeSlot.model_validate(s) for s in TIME_SLOTS]
confirmed, pending = [Booking.model_validate(b) for b in BOOKINGS]


def test_customer_label():
    assert display.customer_label(confirmed, customers) == "Ada Lovelace"
    assert display.customer_label(confirmed, []) == "N/A"


def test_table_label():
    assert display.table_label(confirmed, tables) == "Table 12 (4 seats)"


def test_table_label_unknown_table_is_not_available():
    # pending references table 99, which is not loaded
    assert display.table_label(pending, tables) == "N/A"


def test_time_label_formats_twelve_hour_clock():
    assert display.time_label(confirmed, slots, TODAY) == "2:30 PM"


def test_time_label_matches_slot_reference_sent_as_string():
    assert display.time_label(pending, slots, TODAY) == "7:00 PM"


def test_time_label_is_stable_within_a_day():
    first = display.time_label(confirmed, slots, TODAY)
    assert display.time_label(confirmed, slots, TODAY) == first


def test_time_label_without_slot():
    assert display.time_label(confirmed, [], TODAY) == "No time available"


def test_time_label_keeps_unparseable_time():
    odd = [TimeSlot(id=2, slot_id="A1", time="after lunch")]
    assert display.time_label(confirmed, odd, TODAY) == "after lunch"


def test_empty_slot_time_reads_no_time_available():
    blank = TimeSlot(id=2, slot_id="A1", time="")
    assert display.slot_time_label(blank, TODAY) == "No time available"
    assert display.time_label(confirmed, [blank], TODAY) == "No time available"


def test_status_and_special_request_labels():
    assert display.status_label(confirmed) == "Confirmed"
    assert display.status_label(pending) == "Pending"
    assert display.special_request_label(confirmed) == "None"
    assert display.special_request_label(pending) == "Window seat"


def test_booking_row():
    row = display.booking_row(pending, customers, tables, slots, TODAY)
    assert row == {
        "id": 12,
        "bookingNumber": 1002,
        "customer": "Alan Turing",
        "numberOfPeople": 2,
        "time": "7:00 PM",
        "table": "N/A",
        "status": "Pending",
        "specialRequest": "Window seat",
    }


def test_dropdown_options():
    assert display.customer_option(customers[0]) == "Ada Lovelace (555-0100)"
    assert display.table_option(tables[1]) == "Table Patio (2 seats)"
    assert display.slot_option(slots[0], TODAY) == "A1 - 2:30 PM"


def test_time_of_day_anchored_to_given_day():
    dt = parse_time_of_day("14:30:00", TODAY)
    assert (dt.year, dt.month, dt.day, dt.hour, dt.minute) == (2025, 6, 1, 14, 30)
    assert parse_time_of_day("", TODAY) is None


def test_format_time_of_day_edges():
    assert format_time_of_day("00:15:00", TODAY) == "12:15 AM"
    assert format_time_of_day("12:00", TODAY) == "12:00 PM"
    assert format_time_of_day("nope", TODAY) is None


def test_normalize_time_of_day_rejects_out_of_range():
    assert normalize_time_of_day("13:00 PM") is None
    assert normalize_time_of_day("25:00") is None
