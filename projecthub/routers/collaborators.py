from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from projecthub.core.database import get_db
from projecthub.modules.projects.access import ProjectAccess, require_project_owner
from projecthub.modules.projects.schemas import (
    CollaboratorCreate,
    ProjectMessageResponse,
    project_out,
)
from projecthub.modules.projects.service import ProjectService

router = APIRouter(prefix="/projects", tags=["Collaborators"])


@router.post(
    "/{project_id}/collaborators",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectMessageResponse,
)
def add_collaborator(
    payload: CollaboratorCreate,
    access: ProjectAccess = Depends(require_project_owner),
    db: Session = Depends(get_db),
):
    """Invite an existing user to the project by email (owner only)."""
    project = ProjectService(db).add_collaborator(access.project, payload.email)
    return ProjectMessageResponse(
        message="Collaborator added successfully", project=project_out(project)
    )


@router.delete(
    "/{project_id}/collaborators/{user_id}", response_model=ProjectMessageResponse
)
def remove_collaborator(
    user_id: int,
    access: ProjectAccess = Depends(require_project_owner),
    db: Session = Depends(get_db),
):
    """Remove a collaborator (owner only); removing someone absent still succeeds."""
    project = ProjectService(db).remove_collaborator(access.project, user_id)
    return ProjectMessageResponse(
        message="Collaborator removed successfully", project=project_out(project)
    )
