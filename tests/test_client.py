import pytest
import requests

from reservation_palace.client import ApiError
from reservation_palace.schemas import Booking, Customer, Table, TimeSlot


def test_list_parses_records_and_coerces_ids(api, backend):
    bookings = api.bookings.list()
    assert [b.id for b in bookings] == [11, 12]
    assert bookings[1].booking_slot_id == 7
    assert bookings[0].booking_number == 1001


def test_list_each_collection_hits_its_path(api, backend):
    assert [c.name for c in api.customers.list()] == ["Ada Lovelace", "Alan Turing"]
    assert [t.table_number for t in api.tables.list()] == ["12", "Patio"]
    assert [s.slot_id for s in api.time_slots.list()] == ["A1", "B1"]
    assert [c[1] for c in backend.calls] == ["/Customer", "/Table", "/TimeSlot"]


def test_create_posts_payload_and_returns_persisted_record(api, session):
    session.add("POST", "/Customer", {"id": 9, "name": "Grace", "phoneNumber": "1", "email": "g@example.com"})
    created = api.customers.create(Customer(name="Grace", phone_number="1", email="g@example.com"))
    assert created.id == 9
    method, path, payload = session.calls[-1]
    assert (method, path) == ("POST", "/Customer")
    assert payload == {"name": "Grace", "phoneNumber": "1", "email": "g@example.com"}


def test_update_puts_to_collection_path_with_id_in_body(api, session):
    session.add("PUT", "/Booking", {"id": 11, "customerId": 3, "tableId": 5, "bookingSlotId": 2,
                                    "numberOfPeople": 2, "bookingNumber": 1001})
    booking = Booking(id=0, customer_id=3, table_id=5, booking_slot_id=2, number_of_people=2,
                      booking_date="2025-06-01", is_confirmed=True)
    api.bookings.update(11, booking)
    method, path, payload = session.calls[-1]
    assert (method, path) == ("PUT", "/Booking")
    assert payload["id"] == 11
    assert "bookingNumber" not in payload


def test_update_table_sends_full_record(api, session):
    session.add("PUT", "/Table", {"id": 5, "tableNumber": "12", "numberOfSeats": 6})
    updated = api.tables.update(5, Table(id=5, table_number="12", number_of_seats=6))
    assert updated.number_of_seats == 6
    assert session.calls[-1][2] == {"id": 5, "tableNumber": "12", "numberOfSeats": 6}


def test_update_with_empty_response_returns_sent_record(api, session):
    session.add("PUT", "/TimeSlot", None, status=204)
    updated = api.time_slots.update(2, TimeSlot(slot_id="A1", time="15:00:00"))
    assert updated.id == 2
    assert updated.time == "15:00:00"


def test_delete_uses_id_in_path(api, session):
    session.add("DELETE", "/Booking/11", None, status=204)
    assert api.bookings.delete(11) is None
    assert session.calls[-1] == ("DELETE", "/Booking/11", None)


def test_http_error_propagates_as_api_error(api, session):
    session.fail("GET", "/Customer", status=503)
    with pytest.raises(ApiError) as excinfo:
        api.customers.list()
    assert excinfo.value.status == 503


def test_transport_error_propagates_as_api_error(api, session):
    session.add("POST", "/Table", exc=requests.ConnectionError("refused"))
    with pytest.raises(ApiError) as excinfo:
        api.tables.create(Table(table_number="1", number_of_seats=2))
    assert excinfo.value.status is None


def test_list_rejects_non_list_body(api, session):
    session.add("GET", "/Customer", 5)
    with pytest.raises(ApiError):
        api.customers.list()


def test_list_with_empty_body_is_empty(api, session):
    session.add("GET", "/Table", None, status=204)
    assert api.tables.list() == []


def test_bookings_by_customer(api, backend):
    bookings = api.bookings.list_by_customer(3)
    assert [b.id for b in bookings] == [11]


@pytest.mark.parametrize("route", [
    {"status": 500, "body": {"message": "boom"}},
    {"exc": requests.ConnectionError("refused")},
    {"status": 200, "body": {"not": "a list"}},
])
def test_bookings_by_customer_never_raises(api, session, route):
    session.add("GET", "/Booking/customer/42", **route)
    assert api.bookings.list_by_customer(42) == []
