"""Documentation blob and shared code file routes (owner or collaborator)."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from projecthub.core.database import get_db
from projecthub.modules.projects.access import ProjectAccess, require_project_access
from projecthub.modules.projects.schemas import (
    CodeFileMessageResponse,
    CodeFileOut,
    CodeFileUpdate,
    DocumentationMessageResponse,
    DocumentationOut,
    DocumentationUpdate,
    code_file_out,
)
from projecthub.modules.projects.service import ProjectService

router = APIRouter(prefix="/projects", tags=["Documentation"])


@router.get("/{project_id}/documentation", response_model=DocumentationOut)
def get_documentation(access: ProjectAccess = Depends(require_project_access)):
    return DocumentationOut(documentation=access.project.documentation or "")


@router.put(
    "/{project_id}/documentation", response_model=DocumentationMessageResponse
)
def update_documentation(
    payload: DocumentationUpdate,
    access: ProjectAccess = Depends(require_project_access),
    db: Session = Depends(get_db),
):
    project = ProjectService(db).update_documentation(
        access.project, payload.documentation
    )
    return DocumentationMessageResponse(
        message="Documentation updated successfully",
        documentation=project.documentation,
    )


@router.get("/{project_id}/code-file", response_model=CodeFileOut)
def get_code_file(access: ProjectAccess = Depends(require_project_access)):
    return code_file_out(access.project)


@router.put("/{project_id}/code-file", response_model=CodeFileMessageResponse)
def update_code_file(
    payload: CodeFileUpdate,
    access: ProjectAccess = Depends(require_project_access),
    db: Session = Depends(get_db),
):
    project = ProjectService(db).update_code_file(access.project, payload)
    return CodeFileMessageResponse(
        message="Code file saved successfully", code_file=code_file_out(project)
    )
