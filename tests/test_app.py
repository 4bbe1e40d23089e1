def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": "1.0.0"}


def test_root_points_to_graphql(client):
    assert client.get("/").json()["graphql"] == "/graphql/"


def test_graphql_syntax_error_is_reported(gql):
    result = gql("query { myProjects { id ")
    assert result["errors"]
