from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from projecthub.core.config import settings
from projecthub.modules.users.schemas import UserOut

from .models import (
    CODE_CONTENT_MAX_LENGTH,
    CODE_FILENAME_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    DOCUMENTATION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    CollaboratorRole,
    Project,
)


class CamelModel(BaseModel):
    """Base schema exposing camelCase keys on the wire while accepting either form."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


def _strip(value):
    return value.strip() if isinstance(value, str) else value


StrippedStr = Annotated[str, BeforeValidator(_strip)]


class ProjectCreate(CamelModel):
    name: StrippedStr = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[StrippedStr] = Field(
        default=None, max_length=DESCRIPTION_MAX_LENGTH
    )


class ProjectUpdate(CamelModel):
    name: Optional[StrippedStr] = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[StrippedStr] = Field(
        default=None, max_length=DESCRIPTION_MAX_LENGTH
    )


class CollaboratorCreate(CamelModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class CollaboratorOut(CamelModel):
    user: UserOut
    role: CollaboratorRole


class CodeFileOut(CamelModel):
    filename: str
    content: str
    updated_at: Optional[datetime] = None


class CodeFileUpdate(CamelModel):
    filename: Optional[StrippedStr] = Field(
        default=None, max_length=CODE_FILENAME_MAX_LENGTH
    )
    content: Optional[str] = Field(default=None, max_length=CODE_CONTENT_MAX_LENGTH)


class DocumentationOut(CamelModel):
    documentation: str


class DocumentationUpdate(CamelModel):
    documentation: Optional[str] = Field(default=None, max_length=DOCUMENTATION_MAX_LENGTH)


class ProjectOut(CamelModel):
    id: int
    name: str
    description: str
    owner: UserOut
    collaborators: List[CollaboratorOut]
    documentation: str
    code_file: CodeFileOut
    current_version: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectResponse(CamelModel):
    project: ProjectOut


class ProjectMessageResponse(CamelModel):
    message: str
    project: ProjectOut


class ProjectListResponse(CamelModel):
    projects: List[ProjectOut]


class MessageResponse(CamelModel):
    message: str


class DocumentationMessageResponse(CamelModel):
    message: str
    documentation: str


class CodeFileMessageResponse(CamelModel):
    message: str
    code_file: CodeFileOut


def code_file_out(project: Project) -> CodeFileOut:
    """Shared code file view with defaults for projects that never saved one."""
    return CodeFileOut(
        filename=project.code_filename or settings.default_code_filename,
        content=project.code_content or "",
        updated_at=project.code_updated_at,
    )


def project_out(project: Project) -> ProjectOut:
    """Serialize a project, listing the owner first with the derived Owner role."""
    collaborators = [
        CollaboratorOut(
            user=UserOut.model_validate(project.owner), role=CollaboratorRole.OWNER
        )
    ]
    collaborators.extend(
        CollaboratorOut(user=UserOut.model_validate(member.user), role=member.role)
        for member in project.members
    )
    return ProjectOut(
        id=project.id,
        name=project.name,
        description=project.description or "",
        owner=UserOut.model_validate(project.owner),
        collaborators=collaborators,
        documentation=project.documentation or "",
        code_file=code_file_out(project),
        current_version=project.current_version_id,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )
