"""API tests for author endpoints"""
from tests.factories import bearer_header

AUTHORS_URL = "/api/v1/authors"


class TestAuthorsApi:
    """CRUD over /api/v1/authors"""

    def test_create_author(self, client, mock_publisher):
        response = client.post(AUTHORS_URL, json={"firstName": "Grace", "lastName": "Hopper"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["firstName"] == "Grace"
        assert data["lastName"] == "Hopper"
        assert "createdAt" in data and "updatedAt" in data
        mock_publisher.publish_author_created.assert_awaited_once()

    def test_create_author_with_blank_name_returns_bad_request(self, client, mock_publisher):
        response = client.post(AUTHORS_URL, json={"firstName": " ", "lastName": "Hopper"})

        assert response.status_code == 400
        mock_publisher.publish_author_created.assert_not_awaited()

    def test_create_author_missing_fields_returns_bad_request(self, client):
        response = client.post(AUTHORS_URL, json={})

        assert response.status_code == 400

    def test_list_authors(self, client, author):
        response = client.get(AUTHORS_URL)

        assert response.status_code == 200
        assert response.json()["total"] == 1
        assert response.json()["content"][0]["id"] == author["id"]

    def test_get_author(self, client, author):
        response = client.get(f"{AUTHORS_URL}/{author['id']}")

        assert response.status_code == 200
        assert response.json()["lastName"] == "Lovelace"

    def test_get_unknown_author_returns_not_found(self, client):
        response = client.get(f"{AUTHORS_URL}/999")

        assert response.status_code == 404

    def test_update_author(self, client, author, mock_publisher):
        response = client.put(
            f"{AUTHORS_URL}/{author['id']}",
            json={"firstName": "Augusta Ada", "lastName": "King"},
        )

        assert response.status_code == 200
        assert response.json()["firstName"] == "Augusta Ada"
        assert response.json()["lastName"] == "King"
        mock_publisher.publish_author_updated.assert_awaited_once()

    def test_update_unknown_author_returns_not_found(self, client):
        response = client.put(f"{AUTHORS_URL}/999", json={"firstName": "A", "lastName": "B"})

        assert response.status_code == 404

    def test_delete_author(self, client, author, mock_publisher):
        response = client.delete(f"{AUTHORS_URL}/{author['id']}")

        assert response.status_code == 204
        assert client.get(f"{AUTHORS_URL}/{author['id']}").status_code == 404
        mock_publisher.publish_author_deleted.assert_awaited_once()

    def test_delete_unknown_author_returns_not_found(self, client):
        response = client.delete(f"{AUTHORS_URL}/999")

        assert response.status_code == 404

    def test_delete_referenced_author_returns_conflict(self, client, author, document_request, mock_publisher):
        assert client.post("/api/v1/documents", json=document_request).status_code == 201

        response = client.delete(f"{AUTHORS_URL}/{author['id']}")

        assert response.status_code == 409
        assert response.json()["details"]["documents"] == 1
        mock_publisher.publish_author_deleted.assert_not_awaited()

    def test_token_without_author_role_returns_forbidden(self, client):
        client.headers["Authorization"] = bearer_header(["DOCUMENT"])

        response = client.get(AUTHORS_URL)

        assert response.status_code == 403
