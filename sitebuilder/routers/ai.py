"""
AI generation endpoints. Every route answers even without an API key:
generation falls back to the static templates.
"""
from fastapi import APIRouter, Depends

from sitebuilder.schemas.api_schemas import (
    BackendRequest,
    BackendResponse,
    BuildFromPromptRequest,
    BuildFromPromptResponse,
    ComponentRequest,
    ComponentResponse,
    OptimizeCodeRequest,
    OptimizeCodeResponse,
)
from sitebuilder.dependencies import get_current_user, get_generation_service, get_project_service
from sitebuilder.generation.service import GenerationService
from sitebuilder.application.project_service import ProjectService
from sitebuilder.domain.entities import UserEntity

router = APIRouter(prefix="/ai")


@router.post("/generate-component", response_model=ComponentResponse)
def generate_component(
    request: ComponentRequest,
    user: UserEntity = Depends(get_current_user),
    generation: GenerationService = Depends(get_generation_service),
):
    code = generation.generate_component(request.component_type, request.framework, request.style_preferences)
    return ComponentResponse(code=code, component_type=request.component_type, framework=request.framework)


@router.post("/generate-backend", response_model=BackendResponse)
def generate_backend(
    request: BackendRequest,
    user: UserEntity = Depends(get_current_user),
    generation: GenerationService = Depends(get_generation_service),
):
    """
    Generate routes, models and middleware sources for the chosen stack.
    """
    code = generation.generate_backend(
        request.database, request.framework, request.features.model_dump(by_alias=True)
    )
    return BackendResponse(**code, database=request.database, framework=request.framework)


@router.post("/build-from-prompt", response_model=BuildFromPromptResponse)
def build_from_prompt(
    request: BuildFromPromptRequest,
    user: UserEntity = Depends(get_current_user),
    generation: GenerationService = Depends(get_generation_service),
    projects: ProjectService = Depends(get_project_service),
):
    """
    Generate a website from a prompt and store it as a new project.
    """
    website, used_fallback = generation.build_from_prompt(request.prompt, request.mode)
    project = projects.create_from_generated(user["id"], website, request.mode, used_fallback)
    return {"project": project, "generated": website}


@router.post("/optimize-code", response_model=OptimizeCodeResponse)
def optimize_code(
    request: OptimizeCodeRequest,
    user: UserEntity = Depends(get_current_user),
    generation: GenerationService = Depends(get_generation_service),
):
    return OptimizeCodeResponse(code=generation.optimize_code(request.code, request.type))
