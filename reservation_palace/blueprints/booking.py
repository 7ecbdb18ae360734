from flask import Blueprint, render_template, request

from .. import notifications
from ..display import customer_option, slot_option, table_option
from ..web import confirmed, current_workflow, posted_row
from ..workflows import BookingWorkflow, LoadState, WorkflowMode

bp = Blueprint("booking", __name__)

BOOKING_COLUMNS = [
    ("Booking #", "bookingNumber"),
    ("Customer", "customer"),
    ("People", "numberOfPeople"),
    ("Time", "time"),
    ("Table", "table"),
    ("Status", "status"),
    ("Special Request", "specialRequest"),
]


def _workflow() -> BookingWorkflow:
    return current_workflow("booking", BookingWorkflow)


def _render(wf: BookingWorkflow):
    return render_template(
        "booking.html",
        wf=wf,
        LoadState=LoadState,
        editing=wf.mode is WorkflowMode.EDIT,
        columns=BOOKING_COLUMNS,
        customer_options=[(c.id, customer_option(c)) for c in wf.customers],
        table_options=[(t.id, table_option(t)) for t in wf.tables],
        slot_options=[(s.id, slot_option(s)) for s in wf.time_slots],
    )


def _row_booking(wf: BookingWorkflow):
    source = wf.customer_bookings if request.form.get("list") == "customer" else wf.bookings
    booking = posted_row(source)
    if booking is None:
        wf.notify(notifications.error("That booking is no longer listed"))
    return booking


@bp.get("")
def index():
    wf = _workflow()
    wf.load()
    return _render(wf)


@bp.post("/refresh")
def refresh():
    wf = _workflow()
    wf.refresh_all()
    return _render(wf)


@bp.post("")
def submit():
    wf = _workflow()
    wf.submit(request.form)
    return _render(wf)


@bp.post("/customer")
def select_customer():
    wf = _workflow()
    wf.select_customer(request.form.get("customerId"))
    return _render(wf)


@bp.post("/edit")
def edit():
    wf = _workflow()
    booking = _row_booking(wf)
    if booking is not None:
        wf.enter_edit(booking)
    return _render(wf)


@bp.post("/cancel")
def cancel():
    wf = _workflow()
    wf.cancel_edit()
    return _render(wf)


@bp.post("/delete")
def delete():
    wf = _workflow()
    booking = _row_booking(wf)
    if booking is not None:
        wf.delete(booking, confirmed)
    return _render(wf)
