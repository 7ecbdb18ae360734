"""Page controllers.

Each page owns one workflow object holding its loaded collections, the form
draft and the create/edit state. Operations catch backend failures at their
boundary and turn them into notifications; state is left as it was when an
operation fails.
"""
import logging
import threading
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Mapping

from pydantic import ValidationError

from . import notifications
from .client import ApiError, ReservationApiClient, Resource
from .display import booking_row, slot_time_label
from .notifications import Notifier
from .schemas import (
    Booking,
    BookingForm,
    Customer,
    CustomerForm,
    FormModel,
    Table,
    TableForm,
    TimeSlot,
    TimeSlotForm,
)

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


class WorkflowMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class LoadState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class FormState:
    """Raw form values as typed by staff, with inline errors and locked fields."""

    fields: tuple[str, ...]
    values: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    locked: set[str] = field(default_factory=set)

    def __post_init__(self):
        self.reset()

    def reset(self) -> None:
        self.values = {name: "" for name in self.fields}
        self.errors = {}
        self.locked = set()

    def take(self, data: Mapping[str, str]) -> dict[str, str]:
        """Copies posted values into the draft. Locked fields keep their value."""
        for name in self.fields:
            if name in self.locked:
                continue
            self.values[name] = data.get(name) or ""
        return dict(self.values)


BOOKING_FIELDS = (
    "customerId",
    "tableId",
    "bookingSlotId",
    "bookingDate",
    "numberOfPeople",
    "specialRequest",
)


class BookingWorkflow:
    DELETE_PROMPT = "Are you sure you want to delete this booking?"

    def __init__(self, api: ReservationApiClient, notify: Notifier):
        self.api = api
        self.notify = notify

        self.mode = WorkflowMode.CREATE
        self.editing_id: int | None = None
        self.form = FormState(BOOKING_FIELDS)

        self.customers: list[Customer] = []
        self.tables: list[Table] = []
        self.time_slots: list[TimeSlot] = []
        self.bookings: list[Booking] = []
        self.selected_customer_id: int | None = None
        self.customer_bookings: list[Booking] = []

        self.load_state = LoadState.LOADING
        self.failed_loads: list[str] = []
        self._submit_lock = threading.Lock()

    # -- loading -----------------------------------------------------------

    def load(self) -> bool:
        """Fetches customers, tables, time slots and all bookings side by side.

        The page is ready only once all four have arrived; if any of them
        fails the page goes to the error state and offers a retry.
        """
        self.load_state = LoadState.LOADING
        fetches: dict[str, Callable[[], list]] = {
            "customers": self.api.customers.list,
            "tables": self.api.tables.list,
            "time_slots": self.api.time_slots.list,
            "bookings": self.api.bookings.list,
        }
        if self.selected_customer_id is not None:
            customer_id = self.selected_customer_id
            fetches["customer_bookings"] = lambda: self.api.bookings.list_by_customer(customer_id)

        with ThreadPoolExecutor(max_workers=len(fetches)) as pool:
            futures = {name: pool.submit(fetch) for name, fetch in fetches.items()}

        failed = []
        for name, future in futures.items():
            try:
                setattr(self, name, future.result())
            except ApiError as e:
                logger.warning("loading %s failed: %s", name, e)
                failed.append(name)

        self.failed_loads = failed
        self.load_state = LoadState.ERROR if failed else LoadState.READY
        return not failed

    def refresh_all(self) -> bool:
        return self.load()

    def select_customer(self, customer_id) -> None:
        """Sets (or clears, with a blank value) the customer whose bookings are listed."""
        try:
            self.selected_customer_id = int(customer_id) if customer_id not in (None, "") else None
        except (TypeError, ValueError):
            self.selected_customer_id = None
        if self.selected_customer_id is None:
            self.customer_bookings = []
            return
        self.customer_bookings = self.api.bookings.list_by_customer(self.selected_customer_id)

    @property
    def missing_collections(self) -> str:
        parts = []
        if not self.customers:
            parts.append("No customers available. ")
        if not self.tables:
            parts.append("No tables available. ")
        if not self.time_slots:
            parts.append("No time slots available.")
        return "".join(parts).strip()

    # -- form --------------------------------------------------------------

    @property
    def submitting(self) -> bool:
        return self._submit_lock.locked()

    def submit(self, data: Mapping[str, str]) -> bool:
        if not self._submit_lock.acquire(blocking=False):
            logger.info("booking submit ignored, another one is in flight")
            return False
        try:
            return self._submit(data)
        finally:
            self._submit_lock.release()

    def _submit(self, data: Mapping[str, str]) -> bool:
        values = self.form.take(data)
        try:
            form = BookingForm.model_validate(values)
        except ValidationError as e:
            self.form.errors = BookingForm.field_errors(e)
            return False
        self.form.errors = {}

        booking = form.to_booking()
        editing = self.mode is WorkflowMode.EDIT and self.editing_id is not None
        try:
            if editing:
                logger.info("updating booking %s: %s", self.editing_id, booking.to_payload())
                self.api.bookings.update(self.editing_id, booking)
            else:
                logger.info("creating booking: %s", booking.to_payload())
                self.api.bookings.create(booking)
        except ApiError as e:
            logger.error("error saving booking: %s", e)
            verb = "update" if editing else "create"
            self.notify(notifications.error(f"Failed to {verb} booking"))
            return False

        if editing:
            self.notify(notifications.success("Booking updated successfully"))
            self.mode = WorkflowMode.CREATE
            self.editing_id = None
        else:
            self.notify(notifications.success("Booking created successfully"))
        self.form.reset()
        self.refresh_all()
        return True

    def enter_edit(self, booking: Booking) -> bool:
        if not booking.id:
            self.notify(notifications.error("Cannot edit booking without ID"))
            return False

        # bookingDate and isConfirmed are not restored from the booking
        self.form.values.update(
            customerId=str(booking.customer_id),
            tableId=str(booking.table_id),
            bookingSlotId=str(booking.booking_slot_id),
            numberOfPeople=str(booking.number_of_people),
            specialRequest=booking.special_request or "",
        )
        self.form.errors = {}
        self.form.locked = {"customerId"}
        self.mode = WorkflowMode.EDIT
        self.editing_id = booking.id
        return True

    def cancel_edit(self) -> None:
        self.mode = WorkflowMode.CREATE
        self.editing_id = None
        self.form.reset()

    def delete(self, booking: Booking, confirm: Confirm) -> bool:
        if not booking.id:
            self.notify(notifications.error("Cannot delete booking without ID"))
            return False
        if not confirm(self.DELETE_PROMPT):
            return False

        try:
            self.api.bookings.delete(booking.id)
        except ApiError as e:
            logger.error("error deleting booking %s: %s", booking.id, e)
            self.notify(notifications.error("Failed to delete booking"))
            return False

        self.notify(notifications.success("Booking deleted successfully"))
        self.refresh_all()
        return True

    # -- display -----------------------------------------------------------

    def rows(self, bookings: list[Booking] | None = None) -> list[dict]:
        source = self.bookings if bookings is None else bookings
        return [booking_row(b, self.customers, self.tables, self.time_slots) for b in source]


class EntityWorkflow:
    """Add/edit/delete page for one of the plain collections."""

    label = "item"
    plural = "items"
    form_model: type[FormModel]
    fields: tuple[str, ...] = ()
    # the customers page clears its inputs after saving; the others keep them
    reset_form_on_save = False

    def __init__(self, resource: Resource, notify: Notifier):
        self.resource = resource
        self.notify = notify
        self.items: list = []
        self.editing = None
        self.form = FormState(self.fields)
        self._submit_lock = threading.Lock()

    @property
    def saving(self) -> bool:
        return self._submit_lock.locked()

    @property
    def title(self) -> str:
        return self.label[0].upper() + self.label[1:]

    def load(self) -> bool:
        try:
            self.items = self.resource.list()
        except ApiError as e:
            logger.error("error fetching %s: %s", self.plural, e)
            self.notify(notifications.error(f"Failed to fetch {self.plural}"))
            return False
        return True

    def submit(self, data: Mapping[str, str]) -> bool:
        if not self._submit_lock.acquire(blocking=False):
            logger.info("%s submit ignored, another one is in flight", self.label)
            return False
        try:
            return self._submit(data)
        finally:
            self._submit_lock.release()

    def _submit(self, data: Mapping[str, str]) -> bool:
        values = self.form.take(data)
        try:
            form = self.form_model.model_validate(values)
        except ValidationError as e:
            self.form.errors = self.form_model.field_errors(e)
            return False
        self.form.errors = {}

        try:
            if self.editing is not None:
                self.resource.update(self.editing.id, form.to_record(self.editing.id))
                message = f"{self.title} updated successfully"
            else:
                self.resource.create(form.to_record())
                message = f"{self.title} created successfully"
        except ApiError as e:
            logger.error("error saving %s: %s", self.label, e)
            self.notify(notifications.error(f"Failed to save {self.label}"))
            return False

        self.notify(notifications.success(message))
        self.load()
        if self.reset_form_on_save:
            self.form.reset()
        self.editing = None
        return True

    def prefill(self, item) -> dict[str, str]:
        return {name: str(item.model_dump(by_alias=True).get(name) or "") for name in self.fields}

    def enter_edit(self, item) -> bool:
        if not item.id:
            self.notify(notifications.error(f"Cannot edit {self.label} without ID"))
            return False
        self.editing = item
        self.form.values.update(self.prefill(item))
        self.form.errors = {}
        return True

    def cancel_edit(self) -> None:
        self.editing = None
        if self.reset_form_on_save:
            self.form.reset()

    def delete(self, item, confirm: Confirm) -> bool:
        if not item.id:
            self.notify(notifications.error(f"Cannot delete {self.label} without ID"))
            return False
        if not confirm(f"Are you sure you want to delete this {self.label}?"):
            return False
        try:
            self.resource.delete(item.id)
        except ApiError as e:
            logger.error("error deleting %s %s: %s", self.label, item.id, e)
            self.notify(notifications.error(f"Failed to delete {self.label}"))
            return False
        self.notify(notifications.success(f"{self.title} deleted successfully"))
        self.load()
        return True

    def rows(self) -> list[dict]:
        return [item.model_dump(by_alias=True) for item in self.items]


class CustomerWorkflow(EntityWorkflow):
    label = "customer"
    plural = "customers"
    form_model = CustomerForm
    fields = ("name", "phoneNumber", "email")
    reset_form_on_save = True

    def __init__(self, api: ReservationApiClient, notify: Notifier):
        super().__init__(api.customers, notify)


class TableWorkflow(EntityWorkflow):
    label = "table"
    plural = "tables"
    form_model = TableForm
    fields = ("tableNumber", "numberOfSeats")

    def __init__(self, api: ReservationApiClient, notify: Notifier):
        super().__init__(api.tables, notify)


class TimeSlotWorkflow(EntityWorkflow):
    label = "time slot"
    plural = "time slots"
    form_model = TimeSlotForm
    fields = ("slotId", "time")

    def __init__(self, api: ReservationApiClient, notify: Notifier):
        super().__init__(api.time_slots, notify)

    def prefill(self, item: TimeSlot) -> dict[str, str]:
        values = {"slotId": item.slot_id}
        if item.time:
            values["time"] = slot_time_label(item)
        return values

    def rows(self) -> list[dict]:
        return [{**slot.model_dump(by_alias=True), "time": slot_time_label(slot)} for slot in self.items]


class WorkflowRegistry:
    """Workflows per (browser session, page), kept in process memory.

    At most `max_sessions` sessions are held; the least recently used one is
    dropped when a new session arrives.
    """

    def __init__(self, max_sessions: int = 256):
        self.max_sessions = max_sessions
        self._lock = threading.Lock()
        self._sessions: OrderedDict[str, dict[str, object]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str, page: str, factory: Callable[[], object]):
        with self._lock:
            pages = self._sessions.get(session_id)
            if pages is None:
                pages = self._sessions[session_id] = {}
                while len(self._sessions) > self.max_sessions:
                    evicted, _ = self._sessions.popitem(last=False)
                    logger.debug("dropping workflows of session %s", evicted)
            else:
                self._sessions.move_to_end(session_id)
            workflow = pages.get(page)
            if workflow is None:
                workflow = pages[page] = factory()
            return workflow
