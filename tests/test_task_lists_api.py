import asyncio

from conftest import error_codes

CREATE_PROJECT = "mutation($title: String!) { createProject(title: $title) { id userIds progress } }"

CREATE_TASK = """
mutation CreateTask($content: String!, $projectId: ID!) {
  createTaskList(content: $content, projectId: $projectId) {
    id content isCompleted projectId project { id }
  }
}
"""

UPDATE_TASK = """
mutation Update($id: ID!, $content: String, $isCompleted: Boolean) {
  updateTaskList(id: $id, content: $content, isCompleted: $isCompleted) { id content isCompleted }
}
"""

DELETE_TASK = "mutation($id: ID!) { deleteTaskList(id: $id) }"

PROGRESS = "query($id: ID!) { getProject(id: $id) { progress taskLists { id } } }"


def create_task(gql, token, project_id, content="Write spec"):
    result = gql(CREATE_TASK, {"content": content, "projectId": project_id}, token=token)
    assert "errors" not in result, result
    return result["data"]["createTaskList"]


def test_launch_end_to_end(gql, sign_up):
    ada, _ = sign_up(email="ada@example.com", password="secret123")
    signed_in = gql(
        "mutation { signIn(input: {email: \"ada@example.com\", password: \"secret123\"}) { token } }"
    )
    token = signed_in["data"]["signIn"]["token"]

    project = gql(CREATE_PROJECT, {"title": "Launch"}, token=token)["data"]["createProject"]
    assert project["userIds"] == [ada["id"]]
    assert project["progress"] == 0

    task = create_task(gql, token, project["id"], "Write spec")
    assert task["isCompleted"] is False
    assert task["projectId"] == project["id"]
    assert task["project"] == {"id": project["id"]}

    gql(UPDATE_TASK, {"id": task["id"], "isCompleted": True}, token=token)
    assert gql(PROGRESS, {"id": project["id"]}, token=token)["data"]["getProject"]["progress"] == 100.0


def test_create_task_for_missing_project(gql, sign_up):
    _, token = sign_up()
    result = gql(
        CREATE_TASK,
        {"content": "Orphan", "projectId": "5f0e8d1c-0000-4000-8000-000000000000"},
        token=token,
    )
    assert error_codes(result) == ["NotFound"]


def test_create_task_forbidden_for_non_member(gql, sign_up):
    _, ada_token = sign_up(name="Ada", email="ada@example.com")
    _, eve_token = sign_up(name="Eve", email="eve@example.com")
    project = gql(CREATE_PROJECT, {"title": "Launch"}, token=ada_token)["data"]["createProject"]

    result = gql(CREATE_TASK, {"content": "Sneaky", "projectId": project["id"]}, token=eve_token)
    assert error_codes(result) == ["Forbidden"]


def test_update_only_supplied_fields(gql, sign_up):
    _, token = sign_up()
    project = gql(CREATE_PROJECT, {"title": "Launch"}, token=token)["data"]["createProject"]
    task = create_task(gql, token, project["id"], "Draft")

    completed = gql(UPDATE_TASK, {"id": task["id"], "isCompleted": True}, token=token)
    assert completed["data"]["updateTaskList"] == {"id": task["id"], "content": "Draft", "isCompleted": True}

    renamed = gql(UPDATE_TASK, {"id": task["id"], "content": "Final"}, token=token)
    assert renamed["data"]["updateTaskList"] == {"id": task["id"], "content": "Final", "isCompleted": True}


def test_update_missing_task(gql, sign_up):
    _, token = sign_up()
    result = gql(UPDATE_TASK, {"id": "missing", "content": "x"}, token=token)
    assert error_codes(result) == ["NotFound"]


def test_delete_task_is_idempotent(app, gql, sign_up):
    _, token = sign_up()
    project = gql(CREATE_PROJECT, {"title": "Launch"}, token=token)["data"]["createProject"]
    task = create_task(gql, token, project["id"])
    keep = create_task(gql, token, project["id"], "Keep me")

    first = gql(DELETE_TASK, {"id": task["id"]}, token=token)
    assert first["data"]["deleteTaskList"] is True
    assert asyncio.run(app.state.repository.task_lists.find_by_id(task["id"])) is None

    second = gql(DELETE_TASK, {"id": task["id"]}, token=token)
    assert second["data"]["deleteTaskList"] is True
    assert "errors" not in second

    remaining = gql(PROGRESS, {"id": project["id"]}, token=token)["data"]["getProject"]["taskLists"]
    assert remaining == [{"id": keep["id"]}]


def test_delete_task_requires_identity(gql):
    result = gql(DELETE_TASK, {"id": "anything"})
    assert error_codes(result) == ["Unauthenticated"]


def test_delete_all_tasks(gql, sign_up):
    _, token = sign_up()
    project = gql(CREATE_PROJECT, {"title": "Launch"}, token=token)["data"]["createProject"]
    other = gql(CREATE_PROJECT, {"title": "Other"}, token=token)["data"]["createProject"]
    for i in range(3):
        create_task(gql, token, project["id"], f"task {i}")
    create_task(gql, token, other["id"], "untouched")

    result = gql("mutation($id: ID!) { deleteAllTasks(projectId: $id) }", {"id": project["id"]}, token=token)
    assert result["data"]["deleteAllTasks"] is True

    assert gql(PROGRESS, {"id": project["id"]}, token=token)["data"]["getProject"]["taskLists"] == []
    assert len(gql(PROGRESS, {"id": other["id"]}, token=token)["data"]["getProject"]["taskLists"]) == 1


def make_orphan(app, gql, token):
    project = gql(CREATE_PROJECT, {"title": "Launch"}, token=token)["data"]["createProject"]
    task = create_task(gql, token, project["id"])
    # Drop the project row only, leaving the task list behind
    asyncio.run(app.state.repository.projects.delete_one(project["id"]))
    return task


def test_orphan_task_has_null_project(app, gql, sign_up):
    _, token = sign_up()
    task = make_orphan(app, gql, token)

    result = gql(
        "mutation($id: ID!) { updateTaskList(id: $id, isCompleted: true) { isCompleted projectId project { id } } }",
        {"id": task["id"]},
        token=token,
    )
    assert "errors" not in result, result
    updated = result["data"]["updateTaskList"]
    assert updated["isCompleted"] is True
    assert updated["projectId"] == task["projectId"]
    assert updated["project"] is None


def test_orphan_task_can_be_deleted(app, gql, sign_up):
    _, token = sign_up()
    task = make_orphan(app, gql, token)

    result = gql(DELETE_TASK, {"id": task["id"]}, token=token)
    assert result["data"]["deleteTaskList"] is True
    assert asyncio.run(app.state.repository.task_lists.find_by_id(task["id"])) is None


def test_update_task_forbidden_for_non_member(gql, sign_up):
    _, ada_token = sign_up(name="Ada", email="ada@example.com")
    _, eve_token = sign_up(name="Eve", email="eve@example.com")
    project = gql(CREATE_PROJECT, {"title": "Launch"}, token=ada_token)["data"]["createProject"]
    task = create_task(gql, ada_token, project["id"])

    result = gql(UPDATE_TASK, {"id": task["id"], "isCompleted": True}, token=eve_token)
    assert error_codes(result) == ["Forbidden"]
    assert result["errors"][0]["message"] == "Not a member of this project"
