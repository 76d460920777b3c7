import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sitebuilder.domain.entities import ApiEndpointEntity, ProjectEntity, UserEntity
from sitebuilder.domain.errors import NotFoundError
from sitebuilder.storage.interface import ProjectStorage

DEMO_USER_ID = "local_user_123"

PROJECT_FIELDS = ("title", "description", "components", "html_code", "css_code", "js_code", "is_published")
ENDPOINT_FIELDS = ("method", "path", "description")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(ProjectStorage):
    """
    Implements project storage with dictionaries held in process memory.

    Used when no database is configured. Everything is lost on restart. The
    store is seeded with the demo user that local-development login signs in as.
    """

    def __init__(self, seed_demo_user: bool = True):
        self._lock = threading.Lock()
        self._users: Dict[str, UserEntity] = {}
        self._projects: Dict[str, ProjectEntity] = {}
        self._endpoints: Dict[str, ApiEndpointEntity] = {}

        if seed_demo_user:
            self.upsert_user({
                "id": DEMO_USER_ID,
                "email": "demo@example.com",
                "first_name": "Demo",
                "last_name": "User",
                "profile_image_url": None,
            })

    # Callers get copies so they cannot mutate stored state behind the lock
    @staticmethod
    def _copy(item):
        return copy.deepcopy(item) if item is not None else None

    def get_user(self, user_id: str) -> Optional[UserEntity]:
        with self._lock:
            return self._copy(self._users.get(user_id))

    def upsert_user(self, user_data: Dict[str, Any]) -> UserEntity:
        now = _now()
        with self._lock:
            existing = self._users.get(user_data["id"])
            user: UserEntity = {
                "id": user_data["id"],
                "email": user_data.get("email"),
                "first_name": user_data.get("first_name"),
                "last_name": user_data.get("last_name"),
                "profile_image_url": user_data.get("profile_image_url"),
                "created_at": existing["created_at"] if existing else now,
                "updated_at": now,
            }
            self._users[user["id"]] = user
            return self._copy(user)

    def get_user_projects(self, user_id: str) -> List[ProjectEntity]:
        with self._lock:
            projects = [p for p in self._projects.values() if p["user_id"] == user_id]
            projects.sort(key=lambda p: p["updated_at"], reverse=True)
            return [self._copy(p) for p in projects]

    def get_project(self, project_id: str) -> Optional[ProjectEntity]:
        with self._lock:
            return self._copy(self._projects.get(project_id))

    def create_project(self, project_data: Dict[str, Any]) -> ProjectEntity:
        now = _now()
        project: ProjectEntity = {
            "id": str(uuid.uuid4()),
            "title": project_data["title"],
            "description": project_data.get("description"),
            "user_id": project_data["user_id"],
            "components": copy.deepcopy(project_data.get("components") or []),
            "html_code": project_data.get("html_code"),
            "css_code": project_data.get("css_code"),
            "js_code": project_data.get("js_code"),
            "is_published": False,
            "created_at": now,
            "updated_at": now,
        }
        with self._lock:
            self._projects[project["id"]] = project
            return self._copy(project)

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> ProjectEntity:
        with self._lock:
            existing = self._projects.get(project_id)
            if existing is None:
                raise NotFoundError(f"Project not found: {project_id}")
            for field in PROJECT_FIELDS:
                if field in updates:
                    existing[field] = copy.deepcopy(updates[field])
            existing["updated_at"] = _now()
            return self._copy(existing)

    def delete_project(self, project_id: str) -> bool:
        with self._lock:
            if self._projects.pop(project_id, None) is None:
                return False
            for endpoint_id in [e["id"] for e in self._endpoints.values() if e["project_id"] == project_id]:
                del self._endpoints[endpoint_id]
            return True

    def get_project_endpoints(self, project_id: str) -> List[ApiEndpointEntity]:
        with self._lock:
            endpoints = [e for e in self._endpoints.values() if e["project_id"] == project_id]
            endpoints.sort(key=lambda e: e["created_at"], reverse=True)
            return [self._copy(e) for e in endpoints]

    def get_api_endpoint(self, endpoint_id: str) -> Optional[ApiEndpointEntity]:
        with self._lock:
            return self._copy(self._endpoints.get(endpoint_id))

    def create_api_endpoint(self, endpoint_data: Dict[str, Any]) -> ApiEndpointEntity:
        now = _now()
        endpoint: ApiEndpointEntity = {
            "id": str(uuid.uuid4()),
            "project_id": endpoint_data["project_id"],
            "method": endpoint_data["method"],
            "path": endpoint_data["path"],
            "description": endpoint_data.get("description"),
            "created_at": now,
            "updated_at": now,
        }
        with self._lock:
            self._endpoints[endpoint["id"]] = endpoint
            return self._copy(endpoint)

    def update_api_endpoint(self, endpoint_id: str, updates: Dict[str, Any]) -> ApiEndpointEntity:
        with self._lock:
            existing = self._endpoints.get(endpoint_id)
            if existing is None:
                raise NotFoundError(f"Endpoint not found: {endpoint_id}")
            for field in ENDPOINT_FIELDS:
                if field in updates:
                    existing[field] = updates[field]
            existing["updated_at"] = _now()
            return self._copy(existing)

    def delete_api_endpoint(self, endpoint_id: str) -> bool:
        with self._lock:
            return self._endpoints.pop(endpoint_id, None) is not None

    def get_storage_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "storage_type": "memory",
                "users": len(self._users),
                "projects": len(self._projects),
                "api_endpoints": len(self._endpoints),
            }
