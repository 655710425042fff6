"""
Booking Notification Service
Publishes booking domain events to subscribed handlers (log, webhook, ...)
Delivery is fire-and-forget: a failing handler never affects the booking result
"""

import logging
from concurrent.futures import Executor
from datetime import date, datetime
from typing import Callable, Optional

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class BookingEvent(BaseModel):
    """Base payload shared by all booking events"""

    event_type: str
    meeting_id: int
    host_id: str
    booking_id: str
    participant_id: int
    slot_date: date
    slot_time: str
    occurred_at: datetime = Field(default_factory=datetime.now)


class BookingCreated(BookingEvent):
    event_type: str = "booking.created"
    status: str


class BookingStatusChanged(BookingEvent):
    event_type: str = "booking.status_changed"
    old_status: str
    new_status: str


class BookingRescheduled(BookingEvent):
    event_type: str = "booking.rescheduled"
    previous_date: date
    previous_time: str


class BookingDeleted(BookingEvent):
    event_type: str = "booking.deleted"
    status: str


EventHandler = Callable[[BookingEvent], None]


class EventDispatcher:
    """
    Explicitly constructed event bus handed to the scheduling service.

    With an executor, handlers run off the request path; without one they run
    inline (used by tests so published events can be asserted directly).
    """

    def __init__(self, executor: Optional[Executor] = None):
        self._handlers: list[EventHandler] = []
        self._executor = executor

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def publish(self, event: BookingEvent) -> None:
        for handler in self._handlers:
            if self._executor is not None:
                self._executor.submit(self._deliver, handler, event)
            else:
                self._deliver(handler, event)

    @staticmethod
    def _deliver(handler: EventHandler, event: BookingEvent) -> None:
        try:
            handler(event)
        except Exception as e:
            handler_name = getattr(handler, "__name__", type(handler).__name__)
            logger.error(f"❌ Failed to deliver {event.event_type} to {handler_name}: {e}")


def log_event(event: BookingEvent) -> None:
    """Default handler: record every booking event in the application log"""
    logger.info(
        f"📣 {event.event_type}: meeting {event.meeting_id}, booking {event.booking_id} "
        f"on {event.slot_date} at {event.slot_time}"
    )


class WebhookNotifier:
    """POSTs events as JSON to a configured URL"""

    def __init__(self, url: str, timeout: float = 5.0, client: Optional[httpx.Client] = None):
        self.url = url
        self.timeout = timeout
        self._client = client

    def __call__(self, event: BookingEvent) -> None:
        payload = event.model_dump(mode="json")
        if self._client is not None:
            response = self._client.post(self.url, json=payload, timeout=self.timeout)
        else:
            response = httpx.post(self.url, json=payload, timeout=self.timeout)

        if response.status_code >= 400:
            logger.warning(
                f"⚠️ Webhook rejected {event.event_type} with HTTP {response.status_code}"
            )
        else:
            logger.debug(f"✅ Webhook accepted {event.event_type}")


def build_dispatcher(
    webhook_url: Optional[str] = None,
    timeout: float = 5.0,
    executor: Optional[Executor] = None,
) -> EventDispatcher:
    """Wire the application's dispatcher from configuration"""
    dispatcher = EventDispatcher(executor=executor)
    dispatcher.subscribe(log_event)
    if webhook_url:
        dispatcher.subscribe(WebhookNotifier(webhook_url, timeout=timeout))
        logger.info(f"📡 Booking events will be posted to {webhook_url}")
    return dispatcher
