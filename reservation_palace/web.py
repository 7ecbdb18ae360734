import uuid
from typing import Callable, TypeVar

from flask import current_app, request, session

from .client import ReservationApiClient
from .notifications import Notifier, flash_notification

W = TypeVar("W")

_SESSION_KEY = "workflow_session"


def current_workflow(page: str, factory: Callable[[ReservationApiClient, Notifier], W]) -> W:
    """The workflow of `page` that belongs to the current browser session."""
    sid = session.get(_SESSION_KEY)
    if not sid:
        sid = session[_SESSION_KEY] = uuid.uuid4().hex
    api = current_app.extensions["reservation_api"]
    registry = current_app.extensions["workflows"]
    return registry.get(sid, page, lambda: factory(api, flash_notification))


def confirmed(prompt: str) -> bool:
    # the delete form sets `confirmed` from the browser's confirm() dialog
    return request.form.get("confirmed") == "1"


def posted_row(items: list):
    """The list item a row action refers to.

    Rows are matched by record id. Records the backend returned without an
    id are addressed by position, and only while that position still holds
    an id-less record.
    """
    raw_id = request.form.get("id", "").strip()
    if raw_id:
        try:
            id = int(raw_id)
        except ValueError:
            return None
        return next((item for item in items if item.id == id), None)
    try:
        index = int(request.form.get("row", ""))
    except ValueError:
        return None
    if 0 <= index < len(items) and not items[index].id:
        return items[index]
    return None
