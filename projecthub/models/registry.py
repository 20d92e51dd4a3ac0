"""Aggregated model registry.

Importing this module registers every table on `Base.metadata`.
"""

from projecthub.modules.projects.models import (
    CollaboratorRole,
    Project,
    ProjectCollaborator,
)
from projecthub.modules.users.models import User
from projecthub.modules.versions.models import Version

__all__ = [
    "CollaboratorRole",
    "Project",
    "ProjectCollaborator",
    "User",
    "Version",
]
