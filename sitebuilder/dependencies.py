from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request

from sitebuilder.config import settings
from sitebuilder.auth.oidc import OIDCClient
from sitebuilder.auth.session import resolve_user
from sitebuilder.domain.entities import UserEntity
from sitebuilder.storage import ProjectStorage, get_storage
from sitebuilder.generation.client import create_text_generator
from sitebuilder.generation.service import GenerationService
from sitebuilder.application.project_access_service import ProjectAccessService
from sitebuilder.application.project_service import ProjectService


@lru_cache(maxsize=1)
def get_generation_service() -> GenerationService:
    return GenerationService(create_text_generator())


@lru_cache(maxsize=1)
def get_oidc_client() -> Optional[OIDCClient]:
    if settings.is_local_auth:
        return None
    return OIDCClient(
        issuer_url=settings.ISSUER_URL,
        client_id=settings.OIDC_CLIENT_ID,
        client_secret=settings.OIDC_CLIENT_SECRET,
        config_ttl=settings.OIDC_CONFIG_TTL,
    )


async def get_current_user(
    request: Request,
    storage: ProjectStorage = Depends(get_storage),
    oidc: Optional[OIDCClient] = Depends(get_oidc_client),
) -> UserEntity:
    return await resolve_user(request.session, storage, oidc, local_auth=settings.is_local_auth)


def get_project_access_service(storage: ProjectStorage = Depends(get_storage)) -> ProjectAccessService:
    return ProjectAccessService(storage=storage)


def get_project_service(
    storage: ProjectStorage = Depends(get_storage),
    access: ProjectAccessService = Depends(get_project_access_service),
) -> ProjectService:
    return ProjectService(storage=storage, access=access)
