from fastapi import APIRouter, Depends, Request

from layoutlens.api.dependencies import get_store
from layoutlens.api.limiter import limiter
from layoutlens.api.schemas.project import Project, ProjectCreate
from layoutlens.api.services.project_service import ProjectService
from layoutlens.api.services.store import ProjectStore
from layoutlens.config import config

router = APIRouter()

NOT_FOUND_RESPONSE = {
    404: {"description": "Project not found", "content": {"text/plain": {"example": "Project not found"}}},
}


@router.post(
    "",
    response_model=Project,
    summary="Create a project",
    responses={
        200: {"description": "Created project with a generated ID and no walls"},
        400: {"description": "Malformed request body"},
        429: {"description": "Rate limit exceeded"},
    },
)
@limiter.limit(config.get("rate_limit", "create", "120/minute"))
def create_project(
    request: Request,
    payload: ProjectCreate,
    store: ProjectStore = Depends(get_store),
):
    """Create an empty project. Fields other than name are ignored."""
    return ProjectService.create_project(store, payload.name)


@router.get("/{project_id}", response_model=Project, summary="Get a project", responses=NOT_FOUND_RESPONSE)
def get_project(project_id: str, store: ProjectStore = Depends(get_store)):
    return ProjectService.get_project(store, project_id)


@router.put(
    "/{project_id}",
    response_model=Project,
    summary="Replace a project",
    description="Overwrites the whole record, including the id and name carried in the body.",
    responses={**NOT_FOUND_RESPONSE, 400: {"description": "Malformed request body"}},
)
def update_project(project_id: str, project: Project, store: ProjectStore = Depends(get_store)):
    return ProjectService.replace_project(store, project_id, project)
