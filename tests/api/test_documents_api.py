"""API tests for document endpoints over a real SQLite database"""
import pytest

from tests.factories import basic_auth_header, bearer_header

DOCUMENTS_URL = "/api/v1/documents"


def create_document(client, payload):
    response = client.post(DOCUMENTS_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateDocument:
    """POST /api/v1/documents"""

    def test_create_document_returns_created_and_echoes_fields(self, client, document_request, author):
        response = client.post(DOCUMENTS_URL, json=document_request)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["title"] == "Document1"
        assert data["body"] == "Document Body1"
        assert [a["id"] for a in data["authors"]] == [author["id"]]
        assert data["referenceDocIds"] == []

    def test_create_document_with_null_fields_returns_bad_request(self, client):
        payload = {"title": None, "body": None, "authorIds": None, "referenceDocIds": None}

        response = client.post(DOCUMENTS_URL, json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    @pytest.mark.parametrize("field,value", [
        ("title", ""),
        ("title", "   "),
        ("body", ""),
        ("authorIds", []),
    ])
    def test_create_document_with_empty_field_returns_bad_request(self, client, document_request, field, value):
        document_request[field] = value

        response = client.post(DOCUMENTS_URL, json=document_request)

        assert response.status_code == 400

    def test_create_document_with_unknown_author_returns_bad_request(self, client, document_request):
        document_request["authorIds"] = [9999]

        response = client.post(DOCUMENTS_URL, json=document_request)

        assert response.status_code == 400
        assert response.json()["details"]["missing"] == [9999]

    def test_create_document_with_unknown_reference_returns_bad_request(self, client, document_request):
        document_request["referenceDocIds"] = [4242]

        response = client.post(DOCUMENTS_URL, json=document_request)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "referenceDocIds"

    def test_create_document_with_references(self, client, document_request):
        cited = create_document(client, document_request)
        document_request["title"] = "Citing"
        document_request["referenceDocIds"] = [cited["id"]]

        citing = create_document(client, document_request)

        assert citing["referenceDocIds"] == [cited["id"]]

    def test_create_document_accepts_snake_case_fields(self, client, author):
        payload = {"title": "T", "body": "B", "author_ids": [author["id"]]}

        response = client.post(DOCUMENTS_URL, json=payload)

        assert response.status_code == 201

    def test_create_document_publishes_created_event(self, client, document_request, mock_publisher):
        data = create_document(client, document_request)

        mock_publisher.publish_document_created.assert_awaited_once()
        kwargs = mock_publisher.publish_document_created.call_args.kwargs
        assert kwargs["document_id"] == data["id"]
        assert kwargs["document_data"]["title"] == "Document1"
        assert kwargs["created_by"] == "document-service"

    def test_invalid_create_publishes_nothing(self, client, mock_publisher):
        client.post(DOCUMENTS_URL, json={"title": None})

        mock_publisher.publish_document_created.assert_not_awaited()


class TestUpdateDocument:
    """PUT /api/v1/documents/{id}"""

    def test_update_document_returns_ok_and_new_values(self, client, document_request, mock_publisher):
        document = create_document(client, document_request)
        document_request.update({"title": "Updated Document1", "body": "Updated Document Body1"})

        response = client.put(f"{DOCUMENTS_URL}/{document['id']}", json=document_request)

        assert response.status_code == 200
        assert response.json()["title"] == "Updated Document1"
        assert response.json()["body"] == "Updated Document Body1"
        mock_publisher.publish_document_updated.assert_awaited_once()

    def test_update_document_referencing_itself_returns_bad_request(self, client, document_request, mock_publisher):
        document = create_document(client, document_request)
        document_request.update({
            "title": "Updated Document1",
            "body": "Updated Document Body1",
            "referenceDocIds": [document["id"]],
        })

        response = client.put(f"{DOCUMENTS_URL}/{document['id']}", json=document_request)

        assert response.status_code == 400
        mock_publisher.publish_document_updated.assert_not_awaited()
        unchanged = client.get(f"{DOCUMENTS_URL}/{document['id']}").json()
        assert unchanged["title"] == "Document1"

    def test_update_document_with_null_fields_returns_bad_request(self, client):
        payload = {"title": None, "body": None, "authorIds": None, "referenceDocIds": None}

        response = client.put(f"{DOCUMENTS_URL}/1", json=payload)

        assert response.status_code == 400

    def test_update_unknown_document_returns_not_found(self, client, document_request):
        response = client.put(f"{DOCUMENTS_URL}/555", json=document_request)

        assert response.status_code == 404

    def test_update_replaces_references(self, client, document_request):
        first = create_document(client, document_request)
        second = create_document(client, {**document_request, "title": "Second"})
        target = create_document(client, {**document_request, "referenceDocIds": [first["id"]]})

        response = client.put(
            f"{DOCUMENTS_URL}/{target['id']}",
            json={**document_request, "referenceDocIds": [second["id"]]},
        )

        assert response.status_code == 200
        assert response.json()["referenceDocIds"] == [second["id"]]

    def test_update_replaces_authors(self, client, document_request):
        other = client.post("/api/v1/authors", json={"firstName": "Grace", "lastName": "Hopper"}).json()
        document = create_document(client, document_request)

        response = client.put(
            f"{DOCUMENTS_URL}/{document['id']}",
            json={**document_request, "authorIds": [other["id"]]},
        )

        assert [a["lastName"] for a in response.json()["authors"]] == ["Hopper"]


class TestReadDocuments:
    """GET /api/v1/documents and /api/v1/documents/{id}"""

    def test_list_documents_returns_created_document(self, client, document_request):
        create_document(client, document_request)

        response = client.get(DOCUMENTS_URL)

        assert response.status_code == 200
        assert len(response.json()["content"]) == 1
        assert response.json()["total"] == 1

    def test_list_documents_empty(self, client):
        response = client.get(DOCUMENTS_URL)

        assert response.status_code == 200
        assert response.json()["content"] == []

    def test_list_documents_ordered_and_paginated(self, client, document_request):
        ids = [create_document(client, {**document_request, "title": f"Doc {i}"})["id"] for i in range(3)]

        all_docs = client.get(DOCUMENTS_URL).json()
        page = client.get(DOCUMENTS_URL, params={"skip": 1, "limit": 1}).json()

        assert [d["id"] for d in all_docs["content"]] == ids
        assert [d["id"] for d in page["content"]] == [ids[1]]
        assert page["total"] == 3

    def test_get_document_by_id(self, client, document_request):
        document = create_document(client, document_request)

        response = client.get(f"{DOCUMENTS_URL}/{document['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == document["id"]
        assert data["title"] == document["title"]
        assert data["body"] == document["body"]

    def test_get_unknown_document_returns_not_found(self, client):
        response = client.get(f"{DOCUMENTS_URL}/124")

        assert response.status_code == 404
        assert response.json()["error"] == "Document not found"

    def test_get_document_with_non_numeric_id_returns_bad_request(self, client):
        response = client.get(f"{DOCUMENTS_URL}/abc")

        assert response.status_code == 400


class TestDeleteDocument:
    """DELETE /api/v1/documents/{id}"""

    def test_delete_document_returns_no_content(self, client, document_request, mock_publisher):
        document = create_document(client, document_request)

        response = client.delete(f"{DOCUMENTS_URL}/{document['id']}")

        assert response.status_code == 204
        assert client.get(f"{DOCUMENTS_URL}/{document['id']}").status_code == 404
        mock_publisher.publish_document_deleted.assert_awaited_once_with(
            document_id=document["id"], deleted_by="document-service"
        )

    def test_delete_unknown_document_returns_not_found(self, client, mock_publisher):
        response = client.delete(f"{DOCUMENTS_URL}/787")

        assert response.status_code == 404
        mock_publisher.publish_document_deleted.assert_not_awaited()

    def test_delete_cited_document_removes_citation(self, client, document_request):
        cited = create_document(client, document_request)
        citing = create_document(client, {**document_request, "referenceDocIds": [cited["id"]]})

        assert client.delete(f"{DOCUMENTS_URL}/{cited['id']}").status_code == 204

        remaining = client.get(f"{DOCUMENTS_URL}/{citing['id']}").json()
        assert remaining["referenceDocIds"] == []


class TestDocumentAuthorization:
    """Credentials and the DOCUMENT role"""

    def test_missing_credentials_returns_unauthorized(self, client):
        del client.headers["Authorization"]

        response = client.get(DOCUMENTS_URL)

        assert response.status_code == 401

    def test_wrong_password_returns_unauthorized(self, client):
        client.headers["Authorization"] = basic_auth_header("document-service", "nope")

        response = client.get(DOCUMENTS_URL)

        assert response.status_code == 401

    def test_token_without_document_role_returns_forbidden(self, client):
        client.headers["Authorization"] = bearer_header(["AUTHOR"])

        response = client.get(DOCUMENTS_URL)

        assert response.status_code == 403

    def test_token_with_document_role_is_accepted(self, client, document_request):
        client.headers["Authorization"] = bearer_header(["ROLE_DOCUMENT"], sub="editor-7")

        response = client.post(DOCUMENTS_URL, json=document_request)

        assert response.status_code == 201

    @pytest.mark.parametrize("header", ["Basic !!!not-base64", "Basic bm9jb2xvbg==", "Digest abc"])
    def test_malformed_credentials_return_unauthorized(self, client, header):
        client.headers["Authorization"] = header

        response = client.get(DOCUMENTS_URL)

        assert response.status_code == 401


class TestDocumentReadBack:
    """Stored documents read back through later requests with their relations"""

    def test_get_returns_stored_authors_and_references(self, client, document_request, author):
        cited = create_document(client, document_request)
        citing = create_document(client, {**document_request, "title": "Citing", "referenceDocIds": [cited["id"]]})

        response = client.get(f"{DOCUMENTS_URL}/{citing['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["referenceDocIds"] == [cited["id"]]
        assert [a["id"] for a in data["authors"]] == [author["id"]]

    def test_list_returns_stored_references(self, client, document_request):
        cited = create_document(client, document_request)
        create_document(client, {**document_request, "referenceDocIds": [cited["id"]]})

        content = client.get(DOCUMENTS_URL).json()["content"]

        assert [d["referenceDocIds"] for d in content] == [[], [cited["id"]]]

    def test_update_cited_document_keeps_citation(self, client, document_request):
        cited = create_document(client, document_request)
        citing = create_document(client, {**document_request, "referenceDocIds": [cited["id"]]})

        response = client.put(f"{DOCUMENTS_URL}/{cited['id']}", json={**document_request, "title": "Renamed"})

        assert response.status_code == 200
        assert client.get(f"{DOCUMENTS_URL}/{citing['id']}").json()["referenceDocIds"] == [cited["id"]]
