"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from pgvector.psycopg import register_vector_async
from psycopg_pool import AsyncConnectionPool

from marginalia.infrastructure.persistence.postgres.annotation_repository import (
    PostgresAnnotationRepository,
)
from marginalia.infrastructure.persistence.postgres.chunk_repository import (
    PostgresChunkRepository,
)
from marginalia.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from marginalia.infrastructure.persistence.postgres.project_repository import (
    PostgresProjectRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        await register_vector_async(self._conn)
        self._documents = PostgresDocumentRepository(self._conn)
        self._chunks = PostgresChunkRepository(self._conn)
        self._annotations = PostgresAnnotationRepository(self._conn)
        self._projects = PostgresProjectRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def documents(self) -> PostgresDocumentRepository:
        return self._documents

    @property
    def chunks(self) -> PostgresChunkRepository:
        return self._chunks

    @property
    def annotations(self) -> PostgresAnnotationRepository:
        return self._annotations

    @property
    def projects(self) -> PostgresProjectRepository:
        return self._projects

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
