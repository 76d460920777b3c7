from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sitebuilder.domain.entities import ApiEndpointEntity, ProjectEntity, UserEntity


class ProjectStorage(ABC):
    """
    Abstract interface for project persistence. Supports both a relational
    database and an in-memory store.

    Implementations return plain entity dicts and ``None`` for missing rows;
    ownership is checked by the application layer, not here.
    """

    # User operations

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserEntity]:
        """Return the user with ``user_id`` or None."""
        pass

    @abstractmethod
    def upsert_user(self, user_data: Dict[str, Any]) -> UserEntity:
        """
        Insert a user or overwrite the stored claims of an existing one.

        Args:
            user_data: dict with ``id`` and optional email/name/profile image fields

        Returns:
            The stored user; ``created_at`` survives updates
        """
        pass

    # Project operations

    @abstractmethod
    def get_user_projects(self, user_id: str) -> List[ProjectEntity]:
        """Projects owned by ``user_id``, most recently updated first."""
        pass

    @abstractmethod
    def get_project(self, project_id: str) -> Optional[ProjectEntity]:
        pass

    @abstractmethod
    def create_project(self, project_data: Dict[str, Any]) -> ProjectEntity:
        """
        Store a new project.

        Args:
            project_data: snake_case project fields including ``user_id`` and ``title``

        Returns:
            The created project with id, ``is_published=False`` and timestamps set
        """
        pass

    @abstractmethod
    def update_project(self, project_id: str, updates: Dict[str, Any]) -> ProjectEntity:
        """
        Apply a partial update and refresh ``updated_at``.

        Raises:
            NotFoundError: if the project does not exist
        """
        pass

    @abstractmethod
    def delete_project(self, project_id: str) -> bool:
        """Delete a project and its endpoints. Returns False if it did not exist."""
        pass

    # API endpoint operations

    @abstractmethod
    def get_project_endpoints(self, project_id: str) -> List[ApiEndpointEntity]:
        """Endpoints of a project, newest first."""
        pass

    @abstractmethod
    def get_api_endpoint(self, endpoint_id: str) -> Optional[ApiEndpointEntity]:
        pass

    @abstractmethod
    def create_api_endpoint(self, endpoint_data: Dict[str, Any]) -> ApiEndpointEntity:
        pass

    @abstractmethod
    def update_api_endpoint(self, endpoint_id: str, updates: Dict[str, Any]) -> ApiEndpointEntity:
        """
        Raises:
            NotFoundError: if the endpoint does not exist
        """
        pass

    @abstractmethod
    def delete_api_endpoint(self, endpoint_id: str) -> bool:
        pass

    # Health

    @abstractmethod
    def get_storage_stats(self) -> Dict[str, Any]:
        """Backend name and row counts, used by the health endpoint."""
        pass
