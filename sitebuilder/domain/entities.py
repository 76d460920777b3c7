"""Internal domain entities as TypedDicts for type safety at boundaries."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, TypedDict


class UserEntity(TypedDict):
    id: str
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    profile_image_url: Optional[str]
    created_at: datetime
    updated_at: datetime


class ProjectEntity(TypedDict):
    id: str
    title: str
    description: Optional[str]
    user_id: str
    components: List[Dict[str, Any]]
    html_code: Optional[str]
    css_code: Optional[str]
    js_code: Optional[str]
    is_published: bool
    created_at: datetime
    updated_at: datetime


class ApiEndpointEntity(TypedDict):
    id: str
    project_id: str
    method: str
    path: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime


class GeneratedWebsite(TypedDict):
    title: str
    description: str
    components: List[Dict[str, Any]]
    html_code: str
    css_code: str
    js_code: str


class BackendCode(TypedDict):
    routes: str
    models: str
    middleware: str
