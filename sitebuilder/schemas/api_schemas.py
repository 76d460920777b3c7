"""
API Request/Response Schemas using Pydantic.

Structure of HTTP requests and responses. Attributes are snake_case in
Python and camelCase on the wire (``htmlCode``, ``userId``, ...), which is
what the React client sends and expects.
"""
import re
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
API_PATH_PATTERN = re.compile(r"^/[a-zA-Z0-9/_:-]*$")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# User schemas
class UserResponse(CamelModel):
    id: str = Field(..., description="Subject claim of the identity provider")
    email: Optional[str] = Field(None, description="Email address")
    first_name: Optional[str] = Field(None, description="Given name")
    last_name: Optional[str] = Field(None, description="Family name")
    profile_image_url: Optional[str] = Field(None, description="Avatar URL")
    created_at: Optional[datetime] = Field(None, description="First login")
    updated_at: Optional[datetime] = Field(None, description="Last profile refresh")


# Project schemas
class ProjectCreate(CamelModel):
    title: str = Field(..., description="Name of the project", min_length=1, max_length=255)
    description: Optional[str] = Field(None, description="Optional description of the project", max_length=2000)
    components: List[Dict[str, Any]] = Field(default_factory=list, description="Serialized builder components")
    html_code: Optional[str] = Field(None, description="Generated HTML")
    css_code: Optional[str] = Field(None, description="Generated CSS")
    js_code: Optional[str] = Field(None, description="Generated JavaScript")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Project title cannot be empty")
        return value.strip()


class ProjectUpdate(CamelModel):
    """Partial update; only the fields present in the request are changed."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    components: Optional[List[Dict[str, Any]]] = None
    html_code: Optional[str] = None
    css_code: Optional[str] = None
    js_code: Optional[str] = None
    is_published: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> str:
        # Only runs when the field is sent, so null here is an explicit null
        if value is None or not value.strip():
            raise ValueError("Project title cannot be empty")
        return value.strip()

    @field_validator("components", "is_published")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class ProjectResponse(CamelModel):
    id: str = Field(..., description="Unique identifier for the project")
    title: str
    description: Optional[str] = None
    user_id: str = Field(..., description="Owner of the project")
    components: List[Dict[str, Any]] = Field(default_factory=list)
    html_code: Optional[str] = None
    css_code: Optional[str] = None
    js_code: Optional[str] = None
    is_published: bool = False
    created_at: datetime
    updated_at: datetime


# API endpoint metadata schemas
def _normalize_method(value: Optional[str]) -> str:
    method = (value or "").strip().upper()
    if method not in HTTP_METHODS:
        raise ValueError(f"method must be one of {', '.join(HTTP_METHODS)}")
    return method


def _check_path(value: Optional[str]) -> str:
    if not value or not value.startswith("/"):
        raise ValueError("API path must start with '/'")
    if not API_PATH_PATTERN.match(value):
        raise ValueError("API path contains invalid characters")
    return value


class ApiEndpointCreate(CamelModel):
    method: str = Field(..., description="HTTP method")
    path: str = Field(..., description="Route path starting with '/'", min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("method")
    @classmethod
    def known_method(cls, value: str) -> str:
        return _normalize_method(value)

    @field_validator("path")
    @classmethod
    def valid_path(cls, value: str) -> str:
        return _check_path(value)


class ApiEndpointUpdate(CamelModel):
    method: Optional[str] = None
    path: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("method")
    @classmethod
    def known_method(cls, value: Optional[str]) -> str:
        return _normalize_method(value)

    @field_validator("path")
    @classmethod
    def valid_path(cls, value: Optional[str]) -> str:
        return _check_path(value)


class ApiEndpointResponse(CamelModel):
    id: str
    project_id: str
    method: str
    path: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# AI generation schemas
class ComponentRequest(CamelModel):
    component_type: str = Field(..., min_length=1, description="e.g. 'Hero Section'")
    framework: str = Field(..., min_length=1, description="e.g. 'React'")
    style_preferences: str = Field(..., min_length=1, description="Free-text styling hints")


class ComponentResponse(CamelModel):
    code: str
    component_type: str
    framework: str


class BackendFeatures(CamelModel):
    user_auth: bool = False
    crud_ops: bool = False
    file_upload: bool = False
    email_integration: bool = False


class BackendRequest(CamelModel):
    database: str = Field(..., min_length=1, description="e.g. 'PostgreSQL' or 'MongoDB'")
    framework: str = Field(..., min_length=1, description="e.g. 'Express'")
    features: BackendFeatures


class BackendResponse(CamelModel):
    routes: str
    models: str
    middleware: str
    database: str
    framework: str


class BuildFromPromptRequest(CamelModel):
    prompt: str = Field(..., min_length=1, max_length=10000, description="Natural-language description of the site")
    mode: Literal["webapp", "flow"] = Field("webapp", description="Web application or workflow chart")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("A valid prompt is required")
        return value

    @field_validator("mode", mode="before")
    @classmethod
    def default_mode(cls, value: Any) -> str:
        # Anything other than a flow chart is built as a web app
        return "flow" if value == "flow" else "webapp"


class GeneratedWebsiteSchema(CamelModel):
    title: str
    description: str
    components: List[Dict[str, Any]] = Field(default_factory=list)
    html_code: str
    css_code: str
    js_code: str


class BuildFromPromptResponse(CamelModel):
    project: ProjectResponse
    generated: GeneratedWebsiteSchema


class OptimizeCodeRequest(CamelModel):
    code: str = Field(..., min_length=1)
    type: Literal["component", "backend"] = "component"


class OptimizeCodeResponse(CamelModel):
    code: str
