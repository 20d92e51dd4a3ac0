import pytest
from sqlalchemy.exc import OperationalError

from projecthub.core.exceptions import (
    DatabaseException,
    PermissionDeniedException,
    ResourceNotFoundException,
)
from projecthub.modules.projects.access import (
    check_project_access,
    check_project_owner,
    is_project_member,
    is_project_owner,
)
from projecthub.modules.projects.models import (
    CollaboratorRole,
    Project,
    ProjectCollaborator,
)
from projecthub.modules.users.models import User


def _user(session, name):
    user = User(username=name, email=f"{name}@example.com", hashed_password="x")
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def people(session):
    return {name: _user(session, name) for name in ("owner", "member", "stranger")}


@pytest.fixture
def project(session, people):
    project = Project(name="Gate", owner_id=people["owner"].id, documentation="")
    project.members.append(
        ProjectCollaborator(
            user_id=people["member"].id, role=CollaboratorRole.COLLABORATOR
        )
    )
    session.add(project)
    session.commit()
    return project


def test_predicates(project, people):
    assert is_project_owner(project, people["owner"].id)
    assert not is_project_owner(project, people["member"].id)

    assert is_project_member(project, people["owner"].id)
    assert is_project_member(project, people["member"].id)
    assert not is_project_member(project, people["stranger"].id)


def test_membership_ignores_role_value(session, project, people):
    # A stored Owner role does not grant ownership, it only counts as membership.
    project.members[0].role = CollaboratorRole.OWNER
    session.commit()
    assert is_project_member(project, people["member"].id)
    assert not is_project_owner(project, people["member"].id)


@pytest.mark.parametrize("who, is_owner", [("owner", True), ("member", False)])
def test_read_write_gate_allows_members(session, project, people, who, is_owner):
    access = check_project_access(session, project.id, people[who])
    assert access.project.id == project.id
    assert access.is_owner is is_owner
    assert access.user is people[who]


def test_read_write_gate_denies_strangers(session, project, people):
    with pytest.raises(PermissionDeniedException) as exc:
        check_project_access(session, project.id, people["stranger"])
    assert exc.value.status_code == 403
    assert exc.value.message == "Access denied to this project"


@pytest.mark.parametrize("who", ["member", "stranger"])
def test_owner_gate_denies_non_owners(session, project, people, who):
    with pytest.raises(PermissionDeniedException) as exc:
        check_project_owner(session, project.id, people[who])
    assert exc.value.message == "Only project owner can perform this action"


def test_owner_gate_allows_owner(session, project, people):
    access = check_project_owner(session, project.id, people["owner"])
    assert access.is_owner


@pytest.mark.parametrize("gate", [check_project_access, check_project_owner])
def test_missing_project_is_not_found(session, people, gate):
    with pytest.raises(ResourceNotFoundException) as exc:
        gate(session, 12345, people["owner"])
    assert exc.value.status_code == 404
    assert exc.value.message == "Project not found"


def test_store_failure_surfaces_as_internal_error(people):
    class BrokenSession:
        def get(self, *args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

    with pytest.raises(DatabaseException) as exc:
        check_project_access(BrokenSession(), 1, people["owner"])
    assert exc.value.status_code == 500
