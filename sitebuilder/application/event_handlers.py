"""Event handlers for domain events."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sitebuilder.domain.events import (
        ProjectCreated,
        ProjectUpdated,
        ProjectDeleted,
        WebsiteGenerated,
        EndpointCreated,
    )

logger = logging.getLogger(__name__)


class AuditLogHandler:
    """Logs all domain events for audit trail."""

    def handle_project_created(self, event: ProjectCreated) -> None:
        logger.info(f"[AUDIT] Project created: {event.aggregate_id} - {event.title} (user {event.user_id})")

    def handle_project_updated(self, event: ProjectUpdated) -> None:
        logger.info(f"[AUDIT] Project updated: {event.aggregate_id} fields={','.join(event.fields)}")

    def handle_project_deleted(self, event: ProjectDeleted) -> None:
        logger.info(f"[AUDIT] Project deleted: {event.aggregate_id} - {event.title}")

    def handle_website_generated(self, event: WebsiteGenerated) -> None:
        source = "template fallback" if event.used_fallback else "AI model"
        logger.info(f"[AUDIT] Website generated for project {event.aggregate_id} ({event.mode}, {source})")

    def handle_endpoint_created(self, event: EndpointCreated) -> None:
        logger.info(f"[AUDIT] Endpoint created: {event.method} {event.path} in project {event.project_id}")


class GenerationQualityHandler:
    """Flags generated sites that came from the static templates."""

    def handle_website_generated(self, event: WebsiteGenerated) -> None:
        if event.used_fallback:
            logger.warning(f"[GENERATION] Project {event.aggregate_id} was built from a mock template")


def register_event_handlers():
    """Register all event handlers with the publisher."""
    from sitebuilder.domain.events import (
        event_publisher,
        ProjectCreated,
        ProjectUpdated,
        ProjectDeleted,
        WebsiteGenerated,
        EndpointCreated,
    )

    audit = AuditLogHandler()
    quality = GenerationQualityHandler()

    # Startup may run more than once in tests; start from a clean slate
    event_publisher.clear_subscribers()

    event_publisher.subscribe(ProjectCreated, audit.handle_project_created)
    event_publisher.subscribe(ProjectUpdated, audit.handle_project_updated)
    event_publisher.subscribe(ProjectDeleted, audit.handle_project_deleted)
    event_publisher.subscribe(WebsiteGenerated, audit.handle_website_generated)
    event_publisher.subscribe(EndpointCreated, audit.handle_endpoint_created)

    event_publisher.subscribe(WebsiteGenerated, quality.handle_website_generated)
