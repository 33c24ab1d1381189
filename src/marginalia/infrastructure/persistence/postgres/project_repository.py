"""PostgreSQL project repository implementation (read side)."""

from uuid import UUID

from psycopg import AsyncConnection

from marginalia.domain.entities import (
    Folder,
    Project,
    ProjectAnnotation,
    ProjectDocument,
)
from marginalia.domain.value_objects import AnnotationCategory

_PROJECT_DOCUMENT_SELECT = (
    "SELECT pd.id, pd.project_id, pd.document_id, d.filename, pd.folder_id, "
    "pd.retrieval_context, d.summary, pd.citation_data "
    "FROM project_document pd JOIN document d ON d.id = pd.document_id"
)


def _row_to_project_document(r: tuple) -> ProjectDocument:
    return ProjectDocument(
        id=r[0],
        project_id=r[1],
        document_id=r[2],
        filename=r[3],
        folder_id=r[4],
        retrieval_context=r[5],
        summary=r[6],
        citation_data=r[7],
    )


class PostgresProjectRepository:
    """Reads projects with their folders, linked documents and annotations."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_project(self, project_id: UUID) -> Project | None:
        cur = await self._conn.execute(
            "SELECT id, name, thesis, context_summary FROM project WHERE id = %s",
            (project_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Project(id=r[0], name=r[1], thesis=r[2], context_summary=r[3])

    async def list_folders(self, project_id: UUID) -> list[Folder]:
        cur = await self._conn.execute(
            "SELECT id, project_id, name, description, context_summary "
            "FROM folder WHERE project_id = %s ORDER BY name",
            (project_id,),
        )
        return [
            Folder(
                id=r[0],
                project_id=r[1],
                name=r[2],
                description=r[3],
                context_summary=r[4],
            )
            for r in await cur.fetchall()
        ]

    async def list_project_documents(self, project_id: UUID) -> list[ProjectDocument]:
        cur = await self._conn.execute(
            f"{_PROJECT_DOCUMENT_SELECT} WHERE pd.project_id = %s ORDER BY d.filename",
            (project_id,),
        )
        return [_row_to_project_document(r) for r in await cur.fetchall()]

    async def get_project_document(self, project_document_id: UUID) -> ProjectDocument | None:
        cur = await self._conn.execute(
            f"{_PROJECT_DOCUMENT_SELECT} WHERE pd.id = %s",
            (project_document_id,),
        )
        r = await cur.fetchone()
        return _row_to_project_document(r) if r else None

    async def list_project_annotations(
        self, project_id: UUID
    ) -> list[tuple[ProjectAnnotation, ProjectDocument]]:
        cur = await self._conn.execute(
            "SELECT pa.id, pa.project_document_id, pa.start_position, pa.end_position, "
            "pa.highlighted_text, pa.category, pa.note, pa.searchable_content, "
            "pd.id, pd.project_id, pd.document_id, d.filename, pd.folder_id, "
            "pd.retrieval_context, d.summary, pd.citation_data "
            "FROM project_annotation pa "
            "JOIN project_document pd ON pd.id = pa.project_document_id "
            "JOIN document d ON d.id = pd.document_id "
            "WHERE pd.project_id = %s ORDER BY pa.start_position",
            (project_id,),
        )
        rows = await cur.fetchall()
        return [
            (
                ProjectAnnotation(
                    id=r[0],
                    project_document_id=r[1],
                    start_position=r[2],
                    end_position=r[3],
                    highlighted_text=r[4],
                    category=AnnotationCategory(r[5]),
                    note=r[6],
                    searchable_content=r[7],
                ),
                _row_to_project_document(r[8:]),
            )
            for r in rows
        ]
