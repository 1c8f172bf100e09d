"""
Document and Search Integration Tests

End-to-end tests against the running API and PostgreSQL:
submit → process → list chunks → search → reprocess → delete.
"""

import uuid

import httpx
import pytest

LOREM = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "

POLICY_TEXT = (
    "# Vacation Policy\n\n"
    + ("Every employee receives twenty days of paid vacation each year. " * 6).strip()
    + "\n\n# Sick Leave\n\n"
    + ("Sick leave is granted for illness and medical appointments. " * 6).strip()
)


@pytest.mark.integration
class TestDocumentEndpoints:
    """Integration tests for /api/v1/documents."""

    def test_create_short_document(self, api_client: httpx.Client) -> None:
        """A short document is processed into exactly one chunk."""
        response = api_client.post(
            "/api/v1/documents",
            json={"filename": "short.txt", "text": "This is a short document for testing."},
        )
        assert response.status_code == 201, f"Processing failed: {response.text}"

        data = response.json()
        assert data["status"] == "PROCESSED"
        assert data["num_chunks"] == 1

        chunks = api_client.get(f"/api/v1/documents/{data['document_id']}/chunks").json()
        assert chunks["chunks"][0]["content"] == "This is a short document for testing."

    def test_create_long_document_overlaps(self, api_client: httpx.Client) -> None:
        """Consecutive chunks of a long document share overlap text."""
        response = api_client.post(
            "/api/v1/documents",
            json={"filename": "lorem.txt", "text": LOREM * 10 + "\n\n" + LOREM * 10},
        )
        assert response.status_code == 201
        document_id = response.json()["document_id"]

        chunks = api_client.get(f"/api/v1/documents/{document_id}/chunks").json()["chunks"]
        assert len(chunks) > 1
        assert [c["chunk_index"] for c in chunks] == list(range(len(chunks)))
        assert chunks[1]["content"].startswith(LOREM.strip())

    def test_create_policy_document(self, api_client: httpx.Client) -> None:
        """A policy text is categorized, tagged and split by section."""
        response = api_client.post(
            "/api/v1/documents",
            json={"filename": "leave-policy.txt", "text": POLICY_TEXT},
        )
        assert response.status_code == 201
        document_id = response.json()["document_id"]
        self.__class__._document_id = document_id

        detail = api_client.get(f"/api/v1/documents/{document_id}").json()
        assert detail["category"] == "policies_procedures"
        assert detail["tags"][0] == "policies procedures"
        assert detail["num_chunks"] == 2

        chunks = api_client.get(f"/api/v1/documents/{document_id}/chunks").json()["chunks"]
        assert [c["section_title"] for c in chunks] == ["Vacation Policy", "Sick Leave"]

    def test_reprocess_replaces_chunks(self, api_client: httpx.Client) -> None:
        """Reprocessing yields the same chunk set, not a duplicate one."""
        document_id = self.__class__._document_id
        response = api_client.post(f"/api/v1/documents/{document_id}/reprocess")
        assert response.status_code == 200
        assert response.json()["num_chunks"] == 2

        chunks = api_client.get(f"/api/v1/documents/{document_id}/chunks").json()
        assert chunks["total"] == 2

    def test_list_documents_by_category(self, api_client: httpx.Client) -> None:
        """Listing filters by category and reports per-category counts."""
        response = api_client.get(
            "/api/v1/documents", params={"category": "policies_procedures"}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["total"] >= 1
        assert all(d["category"] == "policies_procedures" for d in data["documents"])
        assert data["categories"]["policies_procedures"] == data["total"]

    def test_search_finds_vacation_chunk(self, api_client: httpx.Client) -> None:
        """Search returns the vacation chunk first for a vacation query."""
        document_id = self.__class__._document_id
        response = api_client.post(
            "/api/v1/search",
            json={"query": "paid vacation", "document_id": document_id},
        )
        assert response.status_code == 200

        hits = response.json()["hits"]
        assert len(hits) == 1
        assert hits[0]["section_title"] == "Vacation Policy"
        assert hits[0]["relevance_score"] > 0

    def test_search_context(self, api_client: httpx.Client) -> None:
        """Context blocks are labelled with the source filename."""
        response = api_client.post(
            "/api/v1/search/context",
            json={"query": "sick leave", "categories": ["policies_procedures"]},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["found_relevant_content"] is True
        assert data["context"].startswith("[Source 1: ")

    def test_delete_document(self, api_client: httpx.Client) -> None:
        """Deleting a document removes it and its chunks."""
        document_id = self.__class__._document_id
        response = api_client.delete(f"/api/v1/documents/{document_id}")
        assert response.status_code == 204

        assert api_client.get(f"/api/v1/documents/{document_id}").status_code == 404
        assert api_client.get(f"/api/v1/documents/{document_id}/chunks").status_code == 404

    def test_blank_text_is_rejected(self, api_client: httpx.Client) -> None:
        """Whitespace-only text fails processing with 422."""
        response = api_client.post(
            "/api/v1/documents",
            json={"filename": "blank.txt", "text": "   \n\n  "},
        )
        assert response.status_code == 422

    def test_missing_fields(self, api_client: httpx.Client) -> None:
        """Missing required fields return 422."""
        response = api_client.post("/api/v1/documents", json={"filename": "x.txt"})
        assert response.status_code == 422

    def test_unknown_document_returns_404(self, api_client: httpx.Client) -> None:
        """Unknown document IDs return 404."""
        response = api_client.get(f"/api/v1/documents/{uuid.uuid4()}")
        assert response.status_code == 404

    def test_categories(self, api_client: httpx.Client) -> None:
        """The fixed category table is exposed."""
        response = api_client.get("/api/v1/categories")
        assert response.status_code == 200
        assert len(response.json()) == 7
