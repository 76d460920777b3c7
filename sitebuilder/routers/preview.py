from fastapi import APIRouter, Path, Depends
from fastapi.responses import HTMLResponse

from sitebuilder.dependencies import get_current_user, get_project_access_service
from sitebuilder.application.project_access_service import ProjectAccessService
from sitebuilder.application.preview import render_preview_page
from sitebuilder.domain.entities import UserEntity

router = APIRouter()


@router.get("/preview/{project_id}", response_class=HTMLResponse)
def preview_project(
    project_id: str = Path(..., title="The ID of the project to preview"),
    user: UserEntity = Depends(get_current_user),
    access: ProjectAccessService = Depends(get_project_access_service),
):
    """
    Serve the project's generated site as a standalone HTML page.
    """
    project = access.require_owned_project(project_id, user["id"])
    return HTMLResponse(render_preview_page(project))
