import pytest
from fastapi.testclient import TestClient

from taskbri.main import create_app

SIGN_UP = """
mutation SignUp($input: SignUpInput!) {
  signUp(input: $input) { token user { id name email avatar } }
}
"""


@pytest.fixture
def app(tmp_path):
    return create_app(database_url=f"sqlite:///{tmp_path / 'taskbri_test.db'}", secret="test-secret")


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def gql(client):
    """POST a GraphQL document, optionally as a signed-in user."""

    def execute(query, variables=None, token=None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = client.post(
            "/graphql/",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        return response.json()

    return execute


@pytest.fixture
def sign_up(gql):
    """Create an account and return (user, token)."""

    def create(name="Ada", email="ada@example.com", password="secret123", avatar=None):
        result = gql(SIGN_UP, {"input": {"name": name, "email": email, "password": password, "avatar": avatar}})
        assert "errors" not in result, result
        payload = result["data"]["signUp"]
        return payload["user"], payload["token"]

    return create


def error_codes(result):
    return [error["extensions"]["code"] for error in result.get("errors", [])]
