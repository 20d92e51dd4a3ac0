from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from projecthub.modules.projects.schemas import CamelModel, CodeFileOut, StrippedStr
from projecthub.modules.users.schemas import UserOut

from .models import VERSION_DESCRIPTION_MAX_LENGTH, VERSION_NUMBER_MAX_LENGTH, Version


class VersionCreate(CamelModel):
    version_number: StrippedStr = Field(min_length=1, max_length=VERSION_NUMBER_MAX_LENGTH)
    description: Optional[StrippedStr] = Field(
        default=None, max_length=VERSION_DESCRIPTION_MAX_LENGTH
    )


class SnapshotOut(CamelModel):
    filename: Optional[str] = None
    content: str = ""


class VersionOut(CamelModel):
    id: int
    project: int
    version_number: str
    description: str
    created_by: UserOut
    code_file: Optional[SnapshotOut] = None
    created_at: Optional[datetime] = None


class VersionListResponse(CamelModel):
    versions: List[VersionOut]
    current_version: Optional[int] = None


class VersionMessageResponse(CamelModel):
    message: str
    version: VersionOut


class CurrentVersionResponse(CamelModel):
    message: str
    current_version: int
    version: VersionOut
    code_file: CodeFileOut


def version_out(version: Version) -> VersionOut:
    snapshot = None
    if version.snapshot_filename is not None or version.snapshot_content is not None:
        snapshot = SnapshotOut(
            filename=version.snapshot_filename,
            content=version.snapshot_content or "",
        )
    return VersionOut(
        id=version.id,
        project=version.project_id,
        version_number=version.version_number,
        description=version.description or "",
        created_by=UserOut.model_validate(version.created_by),
        code_file=snapshot,
        created_at=version.created_at,
    )
