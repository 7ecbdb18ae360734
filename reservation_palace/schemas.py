from datetime import date
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .utils.time import normalize_time_of_day

EMAIL_PATTERN = r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$"


class WireModel(BaseModel):
    """Base for records exchanged with the REST backend (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Customer(WireModel):
    id: int | None = None
    name: str
    phone_number: str = Field(alias="phoneNumber")
    email: str


class Table(WireModel):
    id: int | None = None
    table_number: str = Field(alias="tableNumber")
    number_of_seats: int = Field(alias="numberOfSeats")

    @field_validator("table_number", mode="before")
    @classmethod
    def table_number_as_text(cls, v):
        # some backends hand the label back as a number
        return str(v) if isinstance(v, int) else v


class TimeSlot(WireModel):
    id: int | None = None
    slot_id: str = Field(alias="slotId")
    time: str = ""


class Booking(WireModel):
    id: int | None = None
    booking_number: int | None = Field(None, alias="bookingNumber")
    customer_id: int = Field(alias="customerId")
    table_id: int = Field(alias="tableId")
    booking_slot_id: int = Field(alias="bookingSlotId")
    booking_date: str = Field("", alias="bookingDate")
    number_of_people: int = Field(alias="numberOfPeople")
    special_request: str = Field("", alias="specialRequest")
    is_confirmed: bool = Field(False, alias="isConfirmed")

    @field_validator("special_request", "booking_date", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    def to_payload(self) -> dict:
        # bookingNumber is assigned by the backend and never sent
        return self.model_dump(by_alias=True, exclude={"booking_number"})


# --- Forms -------------------------------------------------------------------
#
# Form models take the raw strings posted by the HTML forms, keyed by the same
# camelCase names the wire format uses. Blank inputs become None first so
# "required" is reported the same way for every field type.


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class FormModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    # form field -> message when the field is left empty
    required_messages: ClassVar[dict[str, str]] = {}
    # form field -> message when a numeric minimum is violated
    minimum_messages: ClassVar[dict[str, str]] = {}
    # form field -> message when a pattern does not match
    pattern_messages: ClassVar[dict[str, str]] = {}

    @classmethod
    def field_errors(cls, exc: ValidationError) -> dict[str, str]:
        """Turns a pydantic ValidationError into one message per form field."""
        errors: dict[str, str] = {}
        for err in exc.errors():
            if not err["loc"]:
                continue
            name = str(err["loc"][0])
            if name in errors:
                continue
            kind = err["type"]
            if kind == "missing" or err.get("input", "") is None:
                errors[name] = cls.required_messages.get(name, "This field is required")
            elif kind in ("greater_than_equal", "greater_than"):
                errors[name] = cls.minimum_messages.get(name, err["msg"])
            elif kind == "string_pattern_mismatch":
                errors[name] = cls.pattern_messages.get(name, err["msg"])
            elif kind.startswith("int_"):
                errors[name] = "Must be a whole number"
            else:
                errors[name] = err["msg"].removeprefix("Value error, ")
        return errors


class BookingForm(FormModel):
    required_messages = {
        "customerId": "Customer is required",
        "tableId": "Table is required",
        "bookingSlotId": "Time slot is required",
        "numberOfPeople": "Number of people is required",
        "bookingDate": "Booking date is required",
    }
    minimum_messages = {"numberOfPeople": "At least 1 person is required"}

    customer_id: int = Field(alias="customerId")
    table_id: int = Field(alias="tableId")
    booking_slot_id: int = Field(alias="bookingSlotId")
    booking_date: str = Field(alias="bookingDate")
    number_of_people: int = Field(alias="numberOfPeople", ge=1)
    special_request: str | None = Field(None, alias="specialRequest")

    @field_validator(
        "customer_id", "table_id", "booking_slot_id", "booking_date", "number_of_people",
        mode="before",
    )
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("booking_date")
    @classmethod
    def calendar_date(cls, v: str):
        try:
            date.fromisoformat(v)
        except ValueError:
            raise ValueError("Enter a valid date (YYYY-MM-DD)")
        return v

    def to_booking(self) -> Booking:
        return Booking(
            id=0,
            customer_id=self.customer_id,
            table_id=self.table_id,
            booking_slot_id=self.booking_slot_id,
            booking_date=self.booking_date,
            number_of_people=self.number_of_people,
            special_request=self.special_request or "",
            is_confirmed=True,
        )


class CustomerForm(FormModel):
    required_messages = {
        "name": "Name is required",
        "phoneNumber": "Phone number is required",
        "email": "Email is required",
    }
    pattern_messages = {"email": "Invalid email address"}

    name: str
    phone_number: str = Field(alias="phoneNumber")
    email: str = Field(pattern=EMAIL_PATTERN)

    @field_validator("name", "phone_number", "email", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)

    def to_record(self, id: int | None = None) -> Customer:
        return Customer(id=id, name=self.name, phone_number=self.phone_number, email=self.email)


class TableForm(FormModel):
    required_messages = {
        "tableNumber": "Table number is required",
        "numberOfSeats": "Number of seats is required",
    }
    minimum_messages = {"numberOfSeats": "At least 1 seat is required"}

    table_number: str = Field(alias="tableNumber")
    number_of_seats: int = Field(alias="numberOfSeats", ge=1)

    @field_validator("table_number", "number_of_seats", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)

    def to_record(self, id: int | None = None) -> Table:
        return Table(id=id, table_number=self.table_number, number_of_seats=self.number_of_seats)


class TimeSlotForm(FormModel):
    required_messages = {
        "slotId": "Slot ID is required",
        "time": "Date and time are required",
    }

    slot_id: str = Field(alias="slotId")
    time: str

    @field_validator("slot_id", "time", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("time")
    @classmethod
    def time_of_day(cls, v: str):
        normalized = normalize_time_of_day(v)
        if normalized is None:
            raise ValueError("Enter a time such as 18:30 or 6:30 PM")
        return normalized

    def to_record(self, id: int | None = None) -> TimeSlot:
        return TimeSlot(id=id, slot_id=self.slot_id, time=self.time)
