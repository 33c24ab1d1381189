"""Embedding ranker - similarity ordering of chunks and thoroughness-bounded selection."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from uuid import UUID

from marginalia.application.ports import EmbeddingProvider, UnitOfWorkFactory
from marginalia.application.services.similarity import cosine_similarity
from marginalia.domain.entities import Chunk
from marginalia.domain.value_objects import ThoroughnessLevel, policy_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedChunk:
    """Chunk with its similarity to the query."""

    chunk: Chunk
    similarity: float


def rank_chunks(chunks: Sequence[Chunk], query_embedding: Sequence[float]) -> list[RankedChunk]:
    """Order chunks by descending similarity; ties keep input order.

    Chunks without an embedding are not ranked.
    """
    scored = [
        RankedChunk(chunk=c, similarity=cosine_similarity(c.embedding, query_embedding))
        for c in chunks
        if c.embedding is not None
    ]
    return sorted(scored, key=lambda r: r.similarity, reverse=True)


def select_candidates(
    ranked: Sequence[RankedChunk], level: ThoroughnessLevel | str | None
) -> list[RankedChunk]:
    """Apply the level's similarity floor, then its size cap (unknown level -> standard)."""
    policy = policy_for(level)
    selected = [r for r in ranked if r.similarity >= policy.min_similarity]
    if policy.max_chunks is not None:
        selected = selected[: policy.max_chunks]
    return selected


def rank(
    chunks: Sequence[Chunk],
    query_embedding: Sequence[float],
    level: ThoroughnessLevel | str | None = ThoroughnessLevel.STANDARD,
) -> list[RankedChunk]:
    """Rank chunks against a query vector and select candidates for a level."""
    return select_candidates(rank_chunks(chunks, query_embedding), level)


class EmbeddingRanker:
    """Ranks a document's chunks against free text, embedding chunks lazily.

    Provider calls run outside any transaction. Filled chunk embeddings are
    committed in their own short unit of work, so a later failure does not
    discard vectors that were already computed.
    """

    def __init__(self, embedding_provider: EmbeddingProvider) -> None:
        self._embedding_provider = embedding_provider

    async def embed_query(self, text: str) -> list[float]:
        """Embed a transient query string."""
        vectors = await self._embedding_provider.embed([text])
        if not vectors:
            raise ValueError("Embedding provider returned no vector for query")
        return vectors[0]

    async def fill_embeddings(
        self, chunks: Sequence[Chunk], unit_of_work_factory: UnitOfWorkFactory
    ) -> list[Chunk]:
        """Return chunks with embeddings, computing and storing only the missing ones."""
        missing = [c for c in chunks if c.embedding is None]
        if not missing:
            return list(chunks)

        vectors = await self._embedding_provider.embed([c.text for c in missing])
        filled: dict[UUID, Chunk] = {
            chunk.id: replace(chunk, embedding=vector)
            for chunk, vector in zip(missing, vectors, strict=True)
        }
        async with unit_of_work_factory() as uow:
            for chunk in filled.values():
                await uow.chunks.update_embedding(chunk.id, chunk.embedding)
        logger.info("Filled %d of %d chunk embeddings", len(missing), len(chunks))
        return [filled.get(c.id, c) for c in chunks]

    async def rank(
        self,
        chunks: Sequence[Chunk],
        query: str,
        unit_of_work_factory: UnitOfWorkFactory,
    ) -> list[RankedChunk]:
        """Embed the query, then any missing chunks, and order chunks by similarity."""
        query_embedding = await self.embed_query(query)
        embedded = await self.fill_embeddings(chunks, unit_of_work_factory)
        return rank_chunks(embedded, query_embedding)
