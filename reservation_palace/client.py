import logging
from typing import Generic, TypeVar

import requests
from pydantic import ValidationError

from .schemas import Booking, Customer, Table, TimeSlot, WireModel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)


class ApiError(Exception):
    """A call to the reservation backend failed (transport error or non-2xx status)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class Resource(Generic[M]):
    """CRUD endpoints of one collection: GET/POST/PUT on /{name}, DELETE on /{name}/{id}.

    Updates go to the collection path; the record id travels in the body.
    """

    def __init__(self, api: "ReservationApiClient", name: str, model: type[M]):
        self.api = api
        self.name = name
        self.model = model

    def parse(self, data) -> M:
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise ApiError(f"Unexpected {self.name} record from backend: {e}") from e

    def list(self) -> list[M]:
        data = self.api.request("GET", f"/{self.name}")
        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiError(f"Expected a list of {self.name} records from backend")
        return [self.parse(item) for item in data]

    def create(self, record: M) -> M:
        data = self.api.request("POST", f"/{self.name}", record.to_payload())
        if data is None:
            return record
        return self.parse(data)

    def update(self, id: int, record: M) -> M:
        payload = {**record.to_payload(), "id": id}
        data = self.api.request("PUT", f"/{self.name}", payload)
        if data is None:
            return record.model_copy(update={"id": id})
        return self.parse(data)

    def delete(self, id: int) -> None:
        self.api.request("DELETE", f"/{self.name}/{id}")


class BookingResource(Resource[Booking]):
    def list_by_customer(self, customer_id: int) -> list[Booking]:
        """Bookings of one customer. Never raises: failures yield an empty list."""
        try:
            data = self.api.request("GET", f"/{self.name}/customer/{customer_id}")
            if not isinstance(data, list):
                return []
            return [self.parse(item) for item in data]
        except Exception:
            logger.exception("Error fetching bookings for customer %s", customer_id)
            return []


class ReservationApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        verify: bool = True,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify = verify
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

        self.customers = Resource(self, "Customer", Customer)
        self.tables = Resource(self, "Table", Table)
        self.time_slots = Resource(self, "TimeSlot", TimeSlot)
        self.bookings = BookingResource(self, "Booking", Booking)

    @classmethod
    def from_config(cls, config) -> "ReservationApiClient":
        return cls(
            config["API_BASE_URL"],
            timeout=config.get("API_TIMEOUT"),
            verify=config.get("API_VERIFY_TLS", True),
        )

    def request(self, method: str, path: str, payload: dict | None = None):
        url = f"{self.base_url}{path}"
        logger.debug("%s %s %s", method, url, payload if payload is not None else "")
        try:
            r = self.session.request(
                method, url, json=payload, timeout=self.timeout, verify=self.verify
            )
            r.raise_for_status()
            return r.json() if r.content else None
        except requests.RequestException as e:
            response = getattr(e, "response", None)
            status = response.status_code if response is not None else None
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"{method} {path} failed: {e}", status=status) from e
