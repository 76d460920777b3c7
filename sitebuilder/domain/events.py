"""Domain events for decoupled side effects and integrations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    event_id: str
    timestamp: datetime
    aggregate_id: str

    def __post_init__(self):
        if not self.event_id:
            self.event_id = str(uuid4())
        if not self.timestamp:
            self.timestamp = datetime.now()


@dataclass
class ProjectCreated(DomainEvent):
    """Raised when a project is created by hand or from a prompt."""
    user_id: str
    title: str


@dataclass
class ProjectUpdated(DomainEvent):
    """Raised when a project is changed by its owner."""
    user_id: str
    fields: List[str]


@dataclass
class ProjectDeleted(DomainEvent):
    """Raised when a project is deleted."""
    user_id: str
    title: str


@dataclass
class WebsiteGenerated(DomainEvent):
    """Raised after build-from-prompt stores a generated site."""
    user_id: str
    mode: str
    used_fallback: bool


@dataclass
class EndpointCreated(DomainEvent):
    """Raised when API endpoint metadata is added to a project."""
    project_id: str
    method: str
    path: str


class DomainEventPublisher:
    """Singleton publisher for domain events."""

    _instance: DomainEventPublisher | None = None
    _subscribers: Dict[type, List[Callable[[DomainEvent], None]]]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance

    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        self._subscribers.setdefault(event_type, []).append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        for handler in self._subscribers.get(type(event), []):
            try:
                handler(event)
            except Exception:
                # A failing side effect must not fail the request that raised the event
                logger.exception("Event handler error for %s", type(event).__name__)

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}


# Singleton instance
event_publisher = DomainEventPublisher()
