"""API resource tests."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest
from falcon.testing import TestClient

from marginalia.application.dto.annotation_dto import PipelineAnnotation
from marginalia.application.dto.search_dto import QuoteResult
from marginalia.domain.entities import Annotation, Folder, Project, ProjectAnnotation, ProjectDocument
from marginalia.domain.value_objects import AnnotationCategory, RelevanceLevel
from marginalia.infrastructure.document_parsers import pdf_parser
from marginalia.interfaces.api.resources.documents import _decode_filename

from tests.api.conftest import ALLOWED_ORIGIN, MAX_UPLOAD_BYTES
from tests.conftest import FakeUnitOfWork, make_chunk, make_document, unit_vector

ESSAY = (
    "Municipal archives record how the town council financed the new bridge. "
    "Loans came from local merchants. The debt took forty years to repay. "
) * 6


def _multipart(filename: str, data: bytes, content_type: str = "text/plain", field: str = "file"):
    boundary = "marginalia-test-boundary"
    body = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
        f"Content-Type: {content_type}\r\n\r\n"
    ).encode() + data + f"\r\n--{boundary}--\r\n".encode()
    return body, {"Content-Type": f"multipart/form-data; boundary={boundary}"}


def _upload(client: TestClient, filename: str, data: bytes, content_type: str = "text/plain"):
    body, headers = _multipart(filename, data, content_type)
    return client.simulate_post("/v1/documents", body=body, headers=headers)


def _seed_document(fake_uow: FakeUnitOfWork, **kwargs):
    doc = make_document(full_text=ESSAY, **kwargs)
    fake_uow.documents.add_document(doc)
    return doc


class TestDecodeFilename:
    """Tests for _decode_filename."""

    def test_empty(self) -> None:
        assert _decode_filename(None) == ""
        assert _decode_filename("   ") == ""

    def test_ascii_unchanged(self) -> None:
        assert _decode_filename("essay.txt") == "essay.txt"

    def test_mojibake_fixed(self) -> None:
        mojibake = "Übersicht.txt".encode("utf-8").decode("latin-1")
        assert _decode_filename(mojibake) == "Übersicht.txt"

    def test_non_latin1_unchanged(self) -> None:
        assert _decode_filename("Документ.txt") == "Документ.txt"


class TestUpload:
    """POST /v1/documents."""

    def test_upload_txt(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        result = _upload(client, "bridge.txt", ESSAY.encode())
        assert result.status_code == 201
        body = result.json
        assert body["filename"] == "bridge.txt"
        assert body["fullText"] == ESSAY.strip()
        assert body["chunkCount"] > 1
        assert body["summary"] is None
        assert fake_uow.documents._by_id

    def test_upload_requires_multipart(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/documents", json={"content": "text"})
        assert result.status_code == 400

    def test_upload_without_file_part(self, client: TestClient) -> None:
        body, headers = _multipart("bridge.txt", ESSAY.encode(), field="other")
        result = client.simulate_post("/v1/documents", body=body, headers=headers)
        assert result.status_code == 400
        assert result.json["error"] == "No file uploaded"

    def test_upload_unsupported_type(self, client: TestClient) -> None:
        result = _upload(client, "slides.pptx", b"binary", content_type="application/octet-stream")
        assert result.status_code == 400
        assert "No parser" in result.json["error"]

    def test_upload_too_short(self, client: TestClient) -> None:
        result = _upload(client, "tiny.txt", b"short")
        assert result.status_code == 400
        assert result.json["error"] == "Could not extract text from file"

    def test_upload_too_large(self, client: TestClient) -> None:
        result = _upload(client, "big.txt", b"a" * (MAX_UPLOAD_BYTES + 1))
        assert result.status_code == 413

    def test_upload_garbled_pdf(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        class _Page:
            def extract_text(self) -> str:
                return "#$%&*+=<>[]{}" * 20

        class _Reader:
            pages = [_Page()]
            metadata = None

            def __init__(self, stream) -> None:
                pass

        monkeypatch.setattr(pdf_parser, "PdfReader", _Reader)
        result = _upload(client, "scan.pdf", b"%PDF-1.4 fake", content_type="application/pdf")
        assert result.status_code == 400
        assert result.json["error"] == pdf_parser.GARBLED_PDF_MESSAGE


class TestDocuments:
    """GET /v1/documents, /v1/documents/{id}, /v1/documents/{id}/summary."""

    def test_list_omits_full_text(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        doc = _seed_document(fake_uow)
        result = client.simulate_get("/v1/documents")
        assert result.status_code == 200
        assert [d["id"] for d in result.json] == [str(doc.id)]
        assert "fullText" not in result.json[0]

    def test_get_document(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        doc = _seed_document(fake_uow, user_intent="how was it paid for")
        result = client.simulate_get(f"/v1/documents/{doc.id}")
        assert result.status_code == 200
        assert result.json["fullText"] == ESSAY
        assert result.json["userIntent"] == "how was it paid for"

    def test_get_document_not_found(self, client: TestClient) -> None:
        result = client.simulate_get(f"/v1/documents/{uuid4()}")
        assert result.status_code == 404
        assert "Document not found" in result.json["error"]

    def test_get_document_invalid_id(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/documents/not-a-uuid")
        assert result.status_code == 400

    def test_summary(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        doc = _seed_document(
            fake_uow, summary="Bridge financing", main_arguments=["Debt"], key_concepts=["loans"]
        )
        result = client.simulate_get(f"/v1/documents/{doc.id}/summary")
        assert result.json == {
            "summary": "Bridge financing",
            "mainArguments": ["Debt"],
            "keyConcepts": ["loans"],
        }


class TestIntent:
    """POST /v1/documents/{id}/intent."""

    def test_set_intent_returns_annotations(
        self, client: TestClient, fake_uow: FakeUnitOfWork, mock_annotation_pipeline
    ) -> None:
        doc = _seed_document(fake_uow)
        fake_uow.chunks.add_chunks(
            [make_chunk(doc.id, 0, ESSAY[:80], embedding=unit_vector(0.8))]
        )
        mock_annotation_pipeline.run.return_value = [
            PipelineAnnotation(
                absolute_start=0,
                absolute_end=26,
                highlight_text=ESSAY[:26],
                category=AnnotationCategory.EVIDENCE,
                note="Primary source",
                confidence=0.9,
            )
        ]

        result = client.simulate_post(
            f"/v1/documents/{doc.id}/intent",
            json={"intent": "bridge financing", "thoroughness": "quick"},
        )

        assert result.status_code == 200
        assert len(result.json) == 1
        assert result.json[0]["isAiGenerated"] is True
        assert result.json[0]["category"] == "evidence"
        assert result.json[0]["startPosition"] == 0

    def test_missing_intent(self, client: TestClient) -> None:
        result = client.simulate_post(f"/v1/documents/{uuid4()}/intent", json={})
        assert result.status_code == 400

    def test_unknown_document(self, client: TestClient) -> None:
        result = client.simulate_post(f"/v1/documents/{uuid4()}/intent", json={"intent": "x"})
        assert result.status_code == 404


class TestAnnotations:
    """Annotation endpoints."""

    def test_create_and_list(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        doc = _seed_document(fake_uow)
        created = client.simulate_post(
            f"/v1/documents/{doc.id}/annotations",
            json={
                "startPosition": 0,
                "endPosition": 9,
                "highlightedText": ESSAY[:9],
                "category": "key_quote",
                "note": "Opening",
            },
        )
        assert created.status_code == 201
        assert created.json["isAiGenerated"] is False

        listed = client.simulate_get(f"/v1/documents/{doc.id}/annotations")
        assert [a["id"] for a in listed.json] == [created.json["id"]]

    def test_create_rejects_unknown_category(
        self, client: TestClient, fake_uow: FakeUnitOfWork
    ) -> None:
        doc = _seed_document(fake_uow)
        result = client.simulate_post(
            f"/v1/documents/{doc.id}/annotations",
            json={
                "startPosition": 0,
                "endPosition": 9,
                "highlightedText": "Municipal",
                "category": "gossip",
                "note": "n",
            },
        )
        assert result.status_code == 400
        assert "Unknown category" in result.json["error"]

    def test_create_missing_fields(self, client: TestClient) -> None:
        result = client.simulate_post(
            f"/v1/documents/{uuid4()}/annotations", json={"startPosition": "0"}
        )
        assert result.status_code == 400
        assert result.json["error"] == "Missing required fields"

    def test_update_and_delete(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        doc = _seed_document(fake_uow)
        annotation = Annotation(
            id=uuid4(),
            document_id=doc.id,
            start_position=0,
            end_position=9,
            highlighted_text="Municipal",
            category=AnnotationCategory.ARGUMENT,
            note="old",
            is_ai_generated=True,
            created_at=datetime.now(UTC),
        )
        fake_uow.annotations.add_annotation(annotation)

        updated = client.simulate_put(
            f"/v1/annotations/{annotation.id}", json={"note": "new", "category": "methodology"}
        )
        assert updated.status_code == 200
        assert updated.json["note"] == "new"
        assert updated.json["category"] == "methodology"

        assert client.simulate_put(f"/v1/annotations/{annotation.id}", json={"note": "x"}).status_code == 400

        deleted = client.simulate_delete(f"/v1/annotations/{annotation.id}")
        assert deleted.json == {"success": True}
        assert client.simulate_delete(f"/v1/annotations/{annotation.id}").status_code == 404


class TestDocumentSearch:
    """POST /v1/documents/{id}/search and /v1/project-documents/{id}/search."""

    def test_search_returns_quotes(
        self, client: TestClient, fake_uow: FakeUnitOfWork, mock_quote_extractor
    ) -> None:
        doc = _seed_document(fake_uow)
        fake_uow.chunks.add_chunks([make_chunk(doc.id, 0, ESSAY[:80])])
        mock_quote_extractor.extract_quotes.return_value = [
            QuoteResult(
                quote="Loans came from local merchants.",
                explanation="Source of the money",
                relevance=RelevanceLevel.HIGH,
                start_position=74,
                end_position=106,
            )
        ]

        result = client.simulate_post(f"/v1/documents/{doc.id}/search", json={"query": "loans"})

        assert result.status_code == 200
        assert result.json == [
            {
                "quote": "Loans came from local merchants.",
                "explanation": "Source of the money",
                "relevance": "high",
                "startPosition": 74,
                "endPosition": 106,
            }
        ]

    def test_search_requires_query(self, client: TestClient) -> None:
        result = client.simulate_post(f"/v1/documents/{uuid4()}/search", json={})
        assert result.status_code == 400
        assert result.json["error"] == "Query is required"

    def test_provider_failure_is_500(
        self, client: TestClient, fake_uow: FakeUnitOfWork, mock_quote_extractor
    ) -> None:
        doc = _seed_document(fake_uow)
        fake_uow.chunks.add_chunks([make_chunk(doc.id, 0, ESSAY[:80])])
        mock_quote_extractor.extract_quotes.side_effect = RuntimeError("upstream timeout")

        result = client.simulate_post(f"/v1/documents/{doc.id}/search", json={"query": "loans"})

        assert result.status_code == 500
        assert result.json == {"error": "Internal server error"}

    def test_project_document_search(
        self, client: TestClient, fake_uow: FakeUnitOfWork, mock_quote_extractor
    ) -> None:
        doc = _seed_document(fake_uow)
        fake_uow.chunks.add_chunks([make_chunk(doc.id, 0, ESSAY[:80])])
        project = Project(id=uuid4(), name="Bridges", thesis="Merchants funded infrastructure")
        pdoc = ProjectDocument(id=uuid4(), project_id=project.id, document_id=doc.id, filename="b.txt")
        fake_uow.projects.projects[project.id] = project
        fake_uow.projects.documents.append(pdoc)

        result = client.simulate_post(f"/v1/project-documents/{pdoc.id}/search", json={"query": "loans"})

        assert result.status_code == 200
        assert mock_quote_extractor.extract_quotes.await_args.args[1] == "Merchants funded infrastructure"


class TestProjectSearch:
    """POST /v1/projects/{id}/search."""

    @pytest.fixture
    def project(self, fake_uow: FakeUnitOfWork) -> Project:
        project = Project(id=uuid4(), name="Bridges", context_summary="Civic infrastructure history")
        folder = Folder(id=uuid4(), project_id=project.id, name="Finance", description="Merchant loans")
        pdoc = ProjectDocument(
            id=uuid4(),
            project_id=project.id,
            document_id=uuid4(),
            filename="ledger.pdf",
            folder_id=folder.id,
            summary="Ledger of merchant loans",
            citation_data={"title": "Town Ledger"},
        )
        fake_uow.projects.projects[project.id] = project
        fake_uow.projects.folders.append(folder)
        fake_uow.projects.documents.append(pdoc)
        fake_uow.projects.annotations.append(
            ProjectAnnotation(
                id=uuid4(),
                project_document_id=pdoc.id,
                start_position=3,
                end_position=30,
                highlighted_text="merchant loans at six percent",
                category=AnnotationCategory.EVIDENCE,
                note="Interest rate",
            )
        )
        return project

    def test_response_shape(self, client: TestClient, project: Project) -> None:
        result = client.simulate_post(
            f"/v1/projects/{project.id}/search", json={"query": "merchant loans", "limit": 2}
        )
        assert result.status_code == 200
        body = result.json
        assert set(body) == {"results", "totalResults", "searchTime"}
        assert body["totalResults"] == 3
        assert len(body["results"]) == 2
        assert all(r["similarityScore"] == pytest.approx(0.9) for r in body["results"])
        assert {r["type"] for r in body["results"]} <= {"folder_context", "document_context", "annotation"}

    def test_annotation_result_fields(self, client: TestClient, project: Project) -> None:
        result = client.simulate_post(
            f"/v1/projects/{project.id}/search",
            json={"query": "six percent", "filters": {"categories": ["evidence"]}},
        )
        (hit,) = result.json["results"]
        assert hit["type"] == "annotation"
        assert hit["category"] == "evidence"
        assert hit["documentFilename"] == "ledger.pdf"
        assert hit["startPosition"] == 3
        assert hit["citationData"] == {"title": "Town Ledger"}
        assert hit["relevanceLevel"] == "high"

    def test_folder_filter(self, client: TestClient, project: Project) -> None:
        result = client.simulate_post(
            f"/v1/projects/{project.id}/search",
            json={"query": "merchant loans", "filters": {"folderIds": [str(uuid4())]}},
        )
        assert result.json["totalResults"] == 0

    def test_unknown_project_is_empty(self, client: TestClient) -> None:
        result = client.simulate_post(f"/v1/projects/{uuid4()}/search", json={"query": "loans"})
        assert result.status_code == 200
        assert result.json["results"] == []
        assert result.json["totalResults"] == 0

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"query": "loans", "limit": "ten"},
            {"query": "loans", "limit": 0},
            {"query": "loans", "filters": {"categories": ["nonsense"]}},
            {"query": "loans", "filters": {"folderIds": ["not-a-uuid"]}},
            {"query": "loans", "filters": []},
        ],
    )
    def test_bad_requests(self, client: TestClient, project: Project, body: dict) -> None:
        result = client.simulate_post(f"/v1/projects/{project.id}/search", json=body)
        assert result.status_code == 400


def test_cors_preflight(client: TestClient) -> None:
    result = client.simulate_options("/v1/documents", headers={"Origin": ALLOWED_ORIGIN})
    assert result.status_code == 204
    assert result.headers["Access-Control-Allow-Origin"] == ALLOWED_ORIGIN
