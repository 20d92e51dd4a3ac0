from projecthub.modules.projects import service as project_service


def _collaborator_ids(project):
    return [(entry["user"]["id"], entry["role"]) for entry in project["collaborators"]]


def test_add_collaborator_by_email(authorized_client, test_project, test_user, test_user2):
    res = authorized_client.post(
        f"/api/projects/{test_project.id}/collaborators",
        json={"email": "BOB@example.com"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Collaborator added successfully"
    assert _collaborator_ids(body["project"]) == [
        (test_user.id, "Owner"),
        (test_user2.id, "Collaborator"),
    ]


def test_collaborators_keep_insertion_order(
    authorized_client, test_project, test_user, test_user2, test_user3
):
    for email in (test_user3.email, test_user2.email):
        res = authorized_client.post(
            f"/api/projects/{test_project.id}/collaborators", json={"email": email}
        )
        assert res.status_code == 201
    assert _collaborator_ids(res.json()["project"]) == [
        (test_user.id, "Owner"),
        (test_user3.id, "Collaborator"),
        (test_user2.id, "Collaborator"),
    ]


def test_add_unknown_email_is_not_found(authorized_client, test_project):
    res = authorized_client.post(
        f"/api/projects/{test_project.id}/collaborators",
        json={"email": "ghost@example.com"},
    )
    assert res.status_code == 404
    assert res.json()["message"] == "User not found"


def test_add_invalid_email_is_bad_request(authorized_client, test_project):
    res = authorized_client.post(
        f"/api/projects/{test_project.id}/collaborators", json={"email": "ghost"}
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "email"


def test_add_existing_collaborator_conflicts(authorized_client, shared_project, test_user2):
    res = authorized_client.post(
        f"/api/projects/{shared_project.id}/collaborators",
        json={"email": test_user2.email},
    )
    assert res.status_code == 400
    body = res.json()
    assert body["error_code"] == "resource_conflict"
    assert body["message"] == "User is already a collaborator or owner of this project"


def test_add_collaborator_race_is_conflict(authorized_client, shared_project, test_user2, monkeypatch):
    # Both requests pass the membership check; the unique constraint rejects the second.
    monkeypatch.setattr(project_service, "is_project_member", lambda project, user_id: False)
    res = authorized_client.post(
        f"/api/projects/{shared_project.id}/collaborators",
        json={"email": test_user2.email},
    )
    assert res.status_code == 400
    assert res.json()["error_code"] == "resource_conflict"

    project = authorized_client.get(f"/api/projects/{shared_project.id}").json()["project"]
    assert _collaborator_ids(project).count((test_user2.id, "Collaborator")) == 1


def test_add_owner_conflicts(authorized_client, test_project, test_user):
    res = authorized_client.post(
        f"/api/projects/{test_project.id}/collaborators", json={"email": test_user.email}
    )
    assert res.status_code == 400
    assert res.json()["error_code"] == "resource_conflict"


def test_collaborator_cannot_invite(client, shared_project, test_user2, test_user3, auth_headers):
    res = client.post(
        f"/api/projects/{shared_project.id}/collaborators",
        json={"email": test_user3.email},
        headers=auth_headers(test_user2),
    )
    assert res.status_code == 403


def test_owner_cannot_be_removed(authorized_client, test_project, test_user):
    res = authorized_client.delete(
        f"/api/projects/{test_project.id}/collaborators/{test_user.id}"
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Cannot remove project owner"


def test_remove_collaborator_revokes_access(
    client, shared_project, test_user, test_user2, auth_headers
):
    res = client.delete(
        f"/api/projects/{shared_project.id}/collaborators/{test_user2.id}",
        headers=auth_headers(test_user),
    )
    assert res.status_code == 200
    assert _collaborator_ids(res.json()["project"]) == [(test_user.id, "Owner")]

    res = client.get(f"/api/projects/{shared_project.id}", headers=auth_headers(test_user2))
    assert res.status_code == 403


def test_remove_absent_collaborator_is_a_no_op(authorized_client, test_project, test_user):
    res = authorized_client.delete(f"/api/projects/{test_project.id}/collaborators/777")
    assert res.status_code == 200
    assert res.json()["message"] == "Collaborator removed successfully"
    assert _collaborator_ids(res.json()["project"]) == [(test_user.id, "Owner")]


def test_collaborator_cannot_remove_others(client, shared_project, test_user2, auth_headers):
    res = client.delete(
        f"/api/projects/{shared_project.id}/collaborators/{test_user2.id}",
        headers=auth_headers(test_user2),
    )
    assert res.status_code == 403
