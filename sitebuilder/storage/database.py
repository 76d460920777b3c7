from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from sitebuilder.db.models import ApiEndpoint, Project, User, utcnow
from sitebuilder.domain.entities import ApiEndpointEntity, ProjectEntity, UserEntity
from sitebuilder.domain.errors import NotFoundError
from sitebuilder.storage.interface import ProjectStorage
from sitebuilder.storage.memory import ENDPOINT_FIELDS, PROJECT_FIELDS

USER_FIELDS = ("email", "first_name", "last_name", "profile_image_url")


def _user_to_entity(user: User) -> UserEntity:
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "profile_image_url": user.profile_image_url,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def _project_to_entity(project: Project) -> ProjectEntity:
    return {
        "id": project.id,
        "title": project.title,
        "description": project.description,
        "user_id": project.user_id,
        "components": list(project.components or []),
        "html_code": project.html_code,
        "css_code": project.css_code,
        "js_code": project.js_code,
        "is_published": bool(project.is_published),
        "created_at": project.created_at,
        "updated_at": project.updated_at,
    }


def _endpoint_to_entity(endpoint: ApiEndpoint) -> ApiEndpointEntity:
    return {
        "id": endpoint.id,
        "project_id": endpoint.project_id,
        "method": endpoint.method,
        "path": endpoint.path,
        "description": endpoint.description,
        "created_at": endpoint.created_at,
        "updated_at": endpoint.updated_at,
    }


class DatabaseStorage(ProjectStorage):
    """
    Implements project storage on a relational database through SQLAlchemy.

    Every method opens its own session and commits once, so each write is a
    single unit with no transaction spanning calls.
    """

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize database storage.

        Args:
            session_factory: SQLAlchemy sessionmaker bound to the target engine.
                             Tables are expected to exist (see sitebuilder.db.init_db).
        """
        self._session_factory = session_factory

    def _session(self) -> Session:
        return self._session_factory()

    def get_user(self, user_id: str) -> Optional[UserEntity]:
        with self._session() as db:
            user = db.get(User, user_id)
            return _user_to_entity(user) if user else None

    def upsert_user(self, user_data: Dict[str, Any]) -> UserEntity:
        with self._session() as db:
            user = db.get(User, user_data["id"])
            if user is None:
                user = User(id=user_data["id"])
                db.add(user)
            for field in USER_FIELDS:
                setattr(user, field, user_data.get(field))
            db.commit()
            db.refresh(user)
            return _user_to_entity(user)

    def get_user_projects(self, user_id: str) -> List[ProjectEntity]:
        with self._session() as db:
            rows = db.scalars(
                select(Project)
                .where(Project.user_id == user_id)
                .order_by(Project.updated_at.desc())
            ).all()
            return [_project_to_entity(p) for p in rows]

    def get_project(self, project_id: str) -> Optional[ProjectEntity]:
        with self._session() as db:
            project = db.get(Project, project_id)
            return _project_to_entity(project) if project else None

    def create_project(self, project_data: Dict[str, Any]) -> ProjectEntity:
        with self._session() as db:
            project = Project(
                title=project_data["title"],
                description=project_data.get("description"),
                user_id=project_data["user_id"],
                components=project_data.get("components") or [],
                html_code=project_data.get("html_code"),
                css_code=project_data.get("css_code"),
                js_code=project_data.get("js_code"),
                is_published=False,
            )
            db.add(project)
            db.commit()
            db.refresh(project)
            return _project_to_entity(project)

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> ProjectEntity:
        with self._session() as db:
            project = db.get(Project, project_id)
            if project is None:
                raise NotFoundError(f"Project not found: {project_id}")
            for field in PROJECT_FIELDS:
                if field in updates:
                    setattr(project, field, updates[field])
            # onupdate only fires when a column value changed
            project.updated_at = utcnow()
            db.commit()
            db.refresh(project)
            return _project_to_entity(project)

    def delete_project(self, project_id: str) -> bool:
        with self._session() as db:
            project = db.get(Project, project_id)
            if project is None:
                return False
            db.delete(project)
            db.commit()
            return True

    def get_project_endpoints(self, project_id: str) -> List[ApiEndpointEntity]:
        with self._session() as db:
            rows = db.scalars(
                select(ApiEndpoint)
                .where(ApiEndpoint.project_id == project_id)
                .order_by(ApiEndpoint.created_at.desc())
            ).all()
            return [_endpoint_to_entity(e) for e in rows]

    def get_api_endpoint(self, endpoint_id: str) -> Optional[ApiEndpointEntity]:
        with self._session() as db:
            endpoint = db.get(ApiEndpoint, endpoint_id)
            return _endpoint_to_entity(endpoint) if endpoint else None

    def create_api_endpoint(self, endpoint_data: Dict[str, Any]) -> ApiEndpointEntity:
        with self._session() as db:
            endpoint = ApiEndpoint(
                project_id=endpoint_data["project_id"],
                method=endpoint_data["method"],
                path=endpoint_data["path"],
                description=endpoint_data.get("description"),
            )
            db.add(endpoint)
            db.commit()
            db.refresh(endpoint)
            return _endpoint_to_entity(endpoint)

    def update_api_endpoint(self, endpoint_id: str, updates: Dict[str, Any]) -> ApiEndpointEntity:
        with self._session() as db:
            endpoint = db.get(ApiEndpoint, endpoint_id)
            if endpoint is None:
                raise NotFoundError(f"Endpoint not found: {endpoint_id}")
            for field in ENDPOINT_FIELDS:
                if field in updates:
                    setattr(endpoint, field, updates[field])
            endpoint.updated_at = utcnow()
            db.commit()
            db.refresh(endpoint)
            return _endpoint_to_entity(endpoint)

    def delete_api_endpoint(self, endpoint_id: str) -> bool:
        with self._session() as db:
            endpoint = db.get(ApiEndpoint, endpoint_id)
            if endpoint is None:
                return False
            db.delete(endpoint)
            db.commit()
            return True

    def get_storage_stats(self) -> Dict[str, Any]:
        with self._session() as db:
            return {
                "storage_type": "database",
                "users": db.scalar(select(func.count()).select_from(User)),
                "projects": db.scalar(select(func.count()).select_from(Project)),
                "api_endpoints": db.scalar(select(func.count()).select_from(ApiEndpoint)),
            }
