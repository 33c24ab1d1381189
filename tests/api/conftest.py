"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from marginalia.application.dto.chunking_config import ChunkingConfig
from marginalia.application.use_cases.analysis.set_intent import SetIntentUseCase
from marginalia.application.use_cases.annotation.create_annotation import CreateAnnotationUseCase
from marginalia.application.use_cases.annotation.delete_annotation import DeleteAnnotationUseCase
from marginalia.application.use_cases.annotation.list_annotations import ListAnnotationsUseCase
from marginalia.application.use_cases.annotation.update_annotation import UpdateAnnotationUseCase
from marginalia.application.use_cases.document.create_document import CreateDocumentUseCase
from marginalia.application.use_cases.document.get_document import (
    GetDocumentUseCase,
    ListDocumentsUseCase,
)
from marginalia.application.use_cases.document.summarize_document import (
    SummarizeDocumentUseCase,
)
from marginalia.application.use_cases.search.document_search import DocumentSearchUseCase
from marginalia.application.use_cases.search.global_search import GlobalSearchUseCase
from marginalia.infrastructure.chunking.sentence_chunker import SentenceChunker
from marginalia.interfaces.api.app import ApiUseCases, create_app

MAX_UPLOAD_BYTES = 4096
ALLOWED_ORIGIN = "http://localhost:5173"


@pytest.fixture
def app(
    uow_factory,
    mock_embedding_provider,
    mock_annotation_pipeline,
    mock_quote_extractor,
    mock_summarizer,
):
    """Falcon ASGI app over the in-memory UoW shared by all requests in a test."""
    use_cases = ApiUseCases(
        create_document=CreateDocumentUseCase(
            uow_factory, SentenceChunker(), ChunkingConfig(chunk_size=200, chunk_overlap=20)
        ),
        get_document=GetDocumentUseCase(uow_factory),
        list_documents=ListDocumentsUseCase(uow_factory),
        summarize_document=SummarizeDocumentUseCase(uow_factory, mock_summarizer),
        set_intent=SetIntentUseCase(uow_factory, mock_embedding_provider, mock_annotation_pipeline),
        create_annotation=CreateAnnotationUseCase(uow_factory),
        list_annotations=ListAnnotationsUseCase(uow_factory),
        update_annotation=UpdateAnnotationUseCase(uow_factory),
        delete_annotation=DeleteAnnotationUseCase(uow_factory),
        document_search=DocumentSearchUseCase(
            uow_factory, mock_embedding_provider, mock_quote_extractor
        ),
        global_search=GlobalSearchUseCase(uow_factory),
    )
    return create_app(
        use_cases,
        cors_origins=[ALLOWED_ORIGIN],
        max_upload_bytes=MAX_UPLOAD_BYTES,
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
