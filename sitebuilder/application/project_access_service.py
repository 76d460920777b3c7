"""Service for project ownership checks."""
from __future__ import annotations

from sitebuilder.domain.entities import ApiEndpointEntity, ProjectEntity
from sitebuilder.domain.errors import ForbiddenError, NotFoundError
from sitebuilder.storage.interface import ProjectStorage


class ProjectAccessService:
    """Centralizes project lookups so every route applies the same 404/403 rules."""

    def __init__(self, storage: ProjectStorage) -> None:
        self._storage = storage

    def require_owned_project(self, project_id: str, user_id: str) -> ProjectEntity:
        """Raise NotFoundError if the project doesn't exist, ForbiddenError if someone else owns it."""
        project = self._storage.get_project(project_id)
        if not project:
            raise NotFoundError("Project not found")
        if project["user_id"] != user_id:
            raise ForbiddenError("Access denied")
        return project

    def require_endpoint_in_project(self, project_id: str, endpoint_id: str) -> ApiEndpointEntity:
        """Raise NotFoundError unless the endpoint exists under ``project_id``."""
        endpoint = self._storage.get_api_endpoint(endpoint_id)
        if not endpoint or endpoint["project_id"] != project_id:
            raise NotFoundError("API endpoint not found")
        return endpoint
