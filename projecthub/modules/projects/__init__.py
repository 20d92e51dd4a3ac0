"""Project domain package exports."""

from .models import CollaboratorRole, Project, ProjectCollaborator
from .schemas import (
    CodeFileOut,
    CodeFileUpdate,
    CollaboratorCreate,
    CollaboratorOut,
    DocumentationUpdate,
    ProjectCreate,
    ProjectOut,
    ProjectUpdate,
)

__all__ = [
    "CollaboratorRole",
    "Project",
    "ProjectCollaborator",
    "CodeFileOut",
    "CodeFileUpdate",
    "CollaboratorCreate",
    "CollaboratorOut",
    "DocumentationUpdate",
    "ProjectCreate",
    "ProjectOut",
    "ProjectUpdate",
]
