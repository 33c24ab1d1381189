"""Pytest fixtures for Marginalia tests."""

from __future__ import annotations

import copy
import math
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from marginalia.application.dto.chunking_config import ChunkingConfig
from marginalia.application.dto.document_dto import DocumentSummary
from marginalia.domain.entities import (
    Annotation,
    Chunk,
    Document,
    Folder,
    Project,
    ProjectAnnotation,
    ProjectDocument,
)


def unit_vector(similarity: float) -> list[float]:
    """2-d unit vector whose cosine with QUERY_VECTOR equals `similarity`."""
    return [similarity, math.sqrt(max(0.0, 1.0 - similarity * similarity))]


QUERY_VECTOR = [1.0, 0.0]


# --- Fake repositories ---


class FakeDocumentRepository:
    """In-memory document repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Document] = {}

    def add_document(self, document: Document) -> None:
        self._by_id[document.id] = document

    async def get_by_id(self, document_id: UUID) -> Document | None:
        return self._by_id.get(document_id)

    async def list(self) -> list[Document]:
        return sorted(self._by_id.values(), key=lambda d: d.created_at, reverse=True)

    async def create(self, document: Document) -> Document:
        self._by_id[document.id] = document
        return document

    async def update(self, document: Document) -> Document:
        self._by_id[document.id] = document
        return document


class FakeChunkRepository:
    """In-memory chunk repository; records embedding writes."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Chunk] = {}
        self.embedding_writes: list[UUID] = []

    def add_chunks(self, chunks: list[Chunk]) -> None:
        for c in chunks:
            self._by_id[c.id] = c

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        for c in chunks:
            self._by_id[c.id] = c
        return chunks

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]:
        chunks = [c for c in self._by_id.values() if c.document_id == document_id]
        return sorted(chunks, key=lambda c: c.start_position)

    async def update_embedding(self, chunk_id: UUID, embedding: list[float]) -> None:
        self.embedding_writes.append(chunk_id)
        self._by_id[chunk_id] = replace(self._by_id[chunk_id], embedding=list(embedding))


class FakeAnnotationRepository:
    """In-memory annotation repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Annotation] = {}

    def add_annotation(self, annotation: Annotation) -> None:
        self._by_id[annotation.id] = annotation

    async def get_by_id(self, annotation_id: UUID) -> Annotation | None:
        return self._by_id.get(annotation_id)

    async def list_by_document(self, document_id: UUID) -> list[Annotation]:
        items = [a for a in self._by_id.values() if a.document_id == document_id]
        return sorted(items, key=lambda a: (a.start_position, a.created_at))

    async def create(self, annotation: Annotation) -> Annotation:
        self._by_id[annotation.id] = annotation
        return annotation

    async def update(self, annotation: Annotation) -> Annotation:
        self._by_id[annotation.id] = annotation
        return annotation

    async def delete(self, annotation_id: UUID) -> None:
        self._by_id.pop(annotation_id, None)


class FakeProjectRepository:
    """In-memory project read model."""

    def __init__(self) -> None:
        self.projects: dict[UUID, Project] = {}
        self.folders: list[Folder] = []
        self.documents: list[ProjectDocument] = []
        self.annotations: list[ProjectAnnotation] = []

    async def get_project(self, project_id: UUID) -> Project | None:
        return self.projects.get(project_id)

    async def list_folders(self, project_id: UUID) -> list[Folder]:
        return [f for f in self.folders if f.project_id == project_id]

    async def list_project_documents(self, project_id: UUID) -> list[ProjectDocument]:
        return [d for d in self.documents if d.project_id == project_id]

    async def get_project_document(self, project_document_id: UUID) -> ProjectDocument | None:
        return next((d for d in self.documents if d.id == project_document_id), None)

    async def list_project_annotations(
        self, project_id: UUID
    ) -> list[tuple[ProjectAnnotation, ProjectDocument]]:
        docs = {d.id: d for d in self.documents if d.project_id == project_id}
        return [
            (a, docs[a.project_document_id])
            for a in self.annotations
            if a.project_document_id in docs
        ]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.documents = FakeDocumentRepository()
        self.chunks = FakeChunkRepository()
        self.annotations = FakeAnnotationRepository()
        self.projects = FakeProjectRepository()
        self.commits = 0
        self.rollbacks = 0
        self.in_transaction = False

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW every time, so state survives across transactions."""

    @asynccontextmanager
    async def _factory():
        yield uow
        await uow.commit()

    return _factory


def make_transactional_factory(uow: FakeUnitOfWork):
    """Factory that commits on success and restores repository state on error."""

    @asynccontextmanager
    async def _factory():
        snapshot = copy.deepcopy(
            (uow.documents._by_id, uow.chunks._by_id, uow.annotations._by_id)
        )
        uow.in_transaction = True
        try:
            yield uow
        except Exception:
            uow.documents._by_id, uow.chunks._by_id, uow.annotations._by_id = snapshot
            await uow.rollback()
            raise
        else:
            await uow.commit()
        finally:
            uow.in_transaction = False

    return _factory


# --- Builders ---


def make_document(full_text: str = "Some document text. " * 10, **kwargs) -> Document:
    defaults = {
        "id": uuid4(),
        "filename": "paper.txt",
        "full_text": full_text,
        "created_at": datetime.now(UTC),
    }
    defaults.update(kwargs)
    return Document(**defaults)


def make_chunk(
    document_id: UUID,
    start: int,
    text: str = "chunk text",
    embedding: list[float] | None = None,
) -> Chunk:
    return Chunk(
        id=uuid4(),
        document_id=document_id,
        text=text,
        start_position=start,
        end_position=start + len(text),
        embedding=embedding,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return make_factory(fake_uow)


@pytest.fixture
def mock_embedding_provider():
    """AsyncMock for EmbeddingProvider - every text embeds to QUERY_VECTOR."""

    async def _embed(texts: list[str]) -> list[list[float]]:
        return [list(QUERY_VECTOR) for _ in texts]

    mock = AsyncMock()
    mock.embed = AsyncMock(side_effect=_embed)
    return mock


@pytest.fixture
def mock_quote_extractor():
    """AsyncMock for QuoteExtractor - returns no quotes unless configured."""
    mock = AsyncMock()
    mock.extract_quotes.return_value = []
    return mock


@pytest.fixture
def mock_annotation_pipeline():
    """AsyncMock for AnnotationPipeline - proposes nothing unless configured."""
    mock = AsyncMock()
    mock.run.return_value = []
    return mock


@pytest.fixture
def mock_summarizer():
    """AsyncMock for DocumentSummarizer."""
    mock = AsyncMock()
    mock.summarize.return_value = DocumentSummary(
        summary="A short summary.",
        main_arguments=["First argument"],
        key_concepts=["concept"],
    )
    return mock


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Default chunking config."""
    return ChunkingConfig(chunk_size=500, chunk_overlap=50)
