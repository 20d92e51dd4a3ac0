def test_documentation_defaults_to_empty(authorized_client, test_project):
    res = authorized_client.get(f"/api/projects/{test_project.id}/documentation")
    assert res.status_code == 200
    assert res.json() == {"documentation": ""}


def test_update_documentation(authorized_client, test_project):
    url = f"/api/projects/{test_project.id}/documentation"
    res = authorized_client.put(url, json={"documentation": "# Setup\nRun make."})
    assert res.status_code == 200
    assert res.json()["message"] == "Documentation updated successfully"
    assert authorized_client.get(url).json()["documentation"] == "# Setup\nRun make."

    res = authorized_client.put(url, json={})
    assert res.json()["documentation"] == ""


def test_documentation_length_limit(authorized_client, test_project):
    url = f"/api/projects/{test_project.id}/documentation"
    assert authorized_client.put(url, json={"documentation": "x" * 10_000}).status_code == 200
    assert authorized_client.put(url, json={"documentation": "x" * 10_001}).status_code == 400


def test_collaborator_edits_documentation(client, shared_project, test_user, test_user2, auth_headers):
    url = f"/api/projects/{shared_project.id}/documentation"
    res = client.put(url, json={"documentation": "from bob"}, headers=auth_headers(test_user2))
    assert res.status_code == 200
    assert client.get(url, headers=auth_headers(test_user)).json()["documentation"] == "from bob"


def test_stranger_cannot_touch_documentation(client, test_project, test_user3, auth_headers):
    url = f"/api/projects/{test_project.id}/documentation"
    assert client.get(url, headers=auth_headers(test_user3)).status_code == 403
    assert (
        client.put(url, json={"documentation": "x"}, headers=auth_headers(test_user3)).status_code
        == 403
    )


def test_code_file_defaults(authorized_client, test_project):
    res = authorized_client.get(f"/api/projects/{test_project.id}/code-file")
    assert res.status_code == 200
    assert res.json() == {"filename": "Main.java", "content": "", "updatedAt": None}


def test_save_code_file(authorized_client, test_project):
    url = f"/api/projects/{test_project.id}/code-file"
    res = authorized_client.put(url, json={"filename": "App.java", "content": "class App {}"})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Code file saved successfully"
    assert body["codeFile"]["filename"] == "App.java"
    assert body["codeFile"]["updatedAt"] is not None

    fetched = authorized_client.get(url).json()
    assert fetched["filename"] == "App.java"
    assert fetched["content"] == "class App {}"


def test_code_file_overwrite_keeps_filename_when_omitted(authorized_client, test_project):
    url = f"/api/projects/{test_project.id}/code-file"
    authorized_client.put(url, json={"filename": "App.java", "content": "v1"})
    res = authorized_client.put(url, json={"content": "v2"})
    assert res.json()["codeFile"] == {
        "filename": "App.java",
        "content": "v2",
        "updatedAt": res.json()["codeFile"]["updatedAt"],
    }

    # A save without content clears it: the whole file is replaced.
    res = authorized_client.put(url, json={"filename": "Other.java"})
    assert res.json()["codeFile"]["content"] == ""


def test_code_file_limits(authorized_client, test_project):
    url = f"/api/projects/{test_project.id}/code-file"
    assert authorized_client.put(url, json={"filename": "f" * 101}).status_code == 400
    assert authorized_client.put(url, json={"content": "c" * 20_001}).status_code == 400


def test_collaborator_last_write_wins(client, shared_project, test_user, test_user2, auth_headers):
    url = f"/api/projects/{shared_project.id}/code-file"
    client.put(url, json={"content": "alice"}, headers=auth_headers(test_user))
    client.put(url, json={"content": "bob"}, headers=auth_headers(test_user2))
    assert client.get(url, headers=auth_headers(test_user)).json()["content"] == "bob"


def test_stranger_cannot_touch_code_file(client, test_project, test_user3, auth_headers):
    url = f"/api/projects/{test_project.id}/code-file"
    assert client.get(url, headers=auth_headers(test_user3)).status_code == 403
    assert client.put(url, json={"content": "x"}, headers=auth_headers(test_user3)).status_code == 403
