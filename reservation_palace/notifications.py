import logging
from dataclasses import dataclass
from typing import Callable

from flask import flash, get_flashed_messages

logger = logging.getLogger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = DEFAULT


Notifier = Callable[[Notification], None]


def success(description: str) -> Notification:
    return Notification("Success", description)


def error(description: str) -> Notification:
    return Notification("Error", description, DESTRUCTIVE)


def flash_notification(note: Notification) -> None:
    """Queues a toast for the next rendered page."""
    if note.variant == DESTRUCTIVE:
        logger.info("notify error: %s", note.description)
    flash({"title": note.title, "description": note.description}, note.variant)


def pending_notifications() -> list[Notification]:
    return [
        Notification(msg["title"], msg["description"], category)
        for category, msg in get_flashed_messages(with_categories=True)
        if isinstance(msg, dict)
    ]
