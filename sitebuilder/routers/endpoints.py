from fastapi import APIRouter, Path, Depends, Response
from typing import List

from sitebuilder.schemas.api_schemas import ApiEndpointCreate, ApiEndpointUpdate, ApiEndpointResponse
from sitebuilder.dependencies import get_current_user, get_project_service
from sitebuilder.application.project_service import ProjectService
from sitebuilder.domain.entities import UserEntity

router = APIRouter()


@router.get("/projects/{project_id}/endpoints", response_model=List[ApiEndpointResponse])
def get_project_endpoints(
    project_id: str = Path(..., title="The ID of the project"),
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """
    API endpoint metadata recorded for a project, newest first.
    """
    return projects.list_endpoints(project_id, user["id"])


@router.post("/projects/{project_id}/endpoints", response_model=ApiEndpointResponse, status_code=201)
def create_project_endpoint(
    endpoint_data: ApiEndpointCreate,
    project_id: str = Path(..., title="The ID of the project"),
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return projects.create_endpoint(project_id, user["id"], endpoint_data.model_dump())


@router.put("/projects/{project_id}/endpoints/{endpoint_id}", response_model=ApiEndpointResponse)
def update_project_endpoint(
    endpoint_data: ApiEndpointUpdate,
    project_id: str = Path(..., title="The ID of the project"),
    endpoint_id: str = Path(..., title="The ID of the endpoint to update"),
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return projects.update_endpoint(
        project_id, endpoint_id, user["id"], endpoint_data.model_dump(exclude_unset=True)
    )


@router.delete("/projects/{project_id}/endpoints/{endpoint_id}", status_code=204)
def delete_project_endpoint(
    project_id: str = Path(..., title="The ID of the project"),
    endpoint_id: str = Path(..., title="The ID of the endpoint to delete"),
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    projects.delete_endpoint(project_id, endpoint_id, user["id"])
    return Response(status_code=204)
