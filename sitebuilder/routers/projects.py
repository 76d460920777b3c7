from fastapi import APIRouter, Path, Depends, Response
from typing import List

from sitebuilder.schemas.api_schemas import ProjectCreate, ProjectUpdate, ProjectResponse
from sitebuilder.dependencies import get_current_user, get_project_service
from sitebuilder.application.project_service import ProjectService
from sitebuilder.domain.entities import UserEntity

router = APIRouter()


@router.get("/projects", response_model=List[ProjectResponse])
def get_projects(
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """
    Retrieve the current user's projects, most recently updated first.
    """
    return projects.list_projects(user["id"])


@router.post("/projects", response_model=ProjectResponse, status_code=201)
def create_project(
    project_data: ProjectCreate,
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """
    Create a project owned by the current user.
    """
    return projects.create_project(user["id"], project_data.model_dump())


@router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str = Path(..., title="The ID of the project to retrieve"),
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return projects.get_project(project_id, user["id"])


@router.put("/projects/{project_id}", response_model=ProjectResponse)
def update_project(
    project_data: ProjectUpdate,
    project_id: str = Path(..., title="The ID of the project to update"),
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """
    Update a project. Only the fields present in the body are changed.
    """
    return projects.update_project(project_id, user["id"], project_data.model_dump(exclude_unset=True))


@router.delete("/projects/{project_id}", status_code=204)
def delete_project(
    project_id: str = Path(..., title="The ID of the project to delete"),
    user: UserEntity = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    projects.delete_project(project_id, user["id"])
    return Response(status_code=204)
