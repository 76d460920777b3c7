"""Project and endpoint use cases for the signed-in user."""
from __future__ import annotations

from typing import Any, Dict, List

from sitebuilder.application.project_access_service import ProjectAccessService
from sitebuilder.domain.entities import ApiEndpointEntity, GeneratedWebsite, ProjectEntity
from sitebuilder.domain.errors import NotFoundError
from sitebuilder.domain.events import (
    EndpointCreated,
    ProjectCreated,
    ProjectDeleted,
    ProjectUpdated,
    WebsiteGenerated,
    event_publisher,
)
from sitebuilder.storage.interface import ProjectStorage


class ProjectService:
    """Wraps storage with ownership checks and domain events."""

    def __init__(self, storage: ProjectStorage, access: ProjectAccessService) -> None:
        self._storage = storage
        self._access = access

    def list_projects(self, user_id: str) -> List[ProjectEntity]:
        return self._storage.get_user_projects(user_id)

    def get_project(self, project_id: str, user_id: str) -> ProjectEntity:
        return self._access.require_owned_project(project_id, user_id)

    def create_project(self, user_id: str, data: Dict[str, Any]) -> ProjectEntity:
        project = self._storage.create_project({**data, "user_id": user_id})
        event_publisher.publish(ProjectCreated(
            event_id="", timestamp=None, aggregate_id=project["id"],
            user_id=user_id, title=project["title"],
        ))
        return project

    def update_project(self, project_id: str, user_id: str, updates: Dict[str, Any]) -> ProjectEntity:
        """Apply a partial update; ``user_id`` and ``id`` can never be changed this way."""
        self._access.require_owned_project(project_id, user_id)
        updates = {k: v for k, v in updates.items() if k not in ("id", "user_id", "created_at", "updated_at")}
        project = self._storage.update_project(project_id, updates)
        event_publisher.publish(ProjectUpdated(
            event_id="", timestamp=None, aggregate_id=project_id,
            user_id=user_id, fields=sorted(updates),
        ))
        return project

    def delete_project(self, project_id: str, user_id: str) -> None:
        project = self._access.require_owned_project(project_id, user_id)
        if not self._storage.delete_project(project_id):
            raise NotFoundError("Project not found")
        event_publisher.publish(ProjectDeleted(
            event_id="", timestamp=None, aggregate_id=project_id,
            user_id=user_id, title=project["title"],
        ))

    def create_from_generated(self, user_id: str, website: GeneratedWebsite, mode: str,
                              used_fallback: bool) -> ProjectEntity:
        """Store a generated site as a new project owned by ``user_id``."""
        project = self.create_project(user_id, {
            "title": website["title"][:255] or "Generated Project",
            "description": website["description"],
            "components": website["components"],
            "html_code": website["html_code"],
            "css_code": website["css_code"],
            "js_code": website["js_code"],
        })
        event_publisher.publish(WebsiteGenerated(
            event_id="", timestamp=None, aggregate_id=project["id"],
            user_id=user_id, mode=mode, used_fallback=used_fallback,
        ))
        return project

    # API endpoint metadata

    def list_endpoints(self, project_id: str, user_id: str) -> List[ApiEndpointEntity]:
        self._access.require_owned_project(project_id, user_id)
        return self._storage.get_project_endpoints(project_id)

    def create_endpoint(self, project_id: str, user_id: str, data: Dict[str, Any]) -> ApiEndpointEntity:
        self._access.require_owned_project(project_id, user_id)
        endpoint = self._storage.create_api_endpoint({**data, "project_id": project_id})
        event_publisher.publish(EndpointCreated(
            event_id="", timestamp=None, aggregate_id=endpoint["id"],
            project_id=project_id, method=endpoint["method"], path=endpoint["path"],
        ))
        return endpoint

    def update_endpoint(self, project_id: str, endpoint_id: str, user_id: str,
                        updates: Dict[str, Any]) -> ApiEndpointEntity:
        self._access.require_owned_project(project_id, user_id)
        self._access.require_endpoint_in_project(project_id, endpoint_id)
        updates = {k: v for k, v in updates.items() if k in ("method", "path", "description")}
        return self._storage.update_api_endpoint(endpoint_id, updates)

    def delete_endpoint(self, project_id: str, endpoint_id: str, user_id: str) -> None:
        self._access.require_owned_project(project_id, user_id)
        self._access.require_endpoint_in_project(project_id, endpoint_id)
        self._storage.delete_api_endpoint(endpoint_id)
