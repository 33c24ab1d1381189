"""Initial schema - documents, chunks, annotations and the project read model.

Revision ID: 001
Revises:
Create Date: 2026-10-16

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from pgvector.sqlalchemy import Vector
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

EMBEDDING_DIMENSIONS = 1536


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS vector")

    op.create_table(
        "document",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("filename", sa.String(512), nullable=False),
        sa.Column("full_text", sa.Text(), nullable=False),
        sa.Column("chunk_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("user_intent", sa.Text(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("main_arguments", JSONB(), nullable=False, server_default="[]"),
        sa.Column("key_concepts", JSONB(), nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Embeddings are filled lazily on first ranking.
    op.create_table(
        "chunk",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_id", sa.UUID(), sa.ForeignKey("document.id", ondelete="CASCADE"), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("start_position", sa.Integer(), nullable=False),
        sa.Column("end_position", sa.Integer(), nullable=False),
        sa.Column("embedding", Vector(EMBEDDING_DIMENSIONS), nullable=True),
        sa.CheckConstraint("0 <= start_position AND start_position < end_position", name="ck_chunk_span"),
    )
    op.create_index("ix_chunk_document_start", "chunk", ["document_id", "start_position"])

    op.create_table(
        "annotation",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_id", sa.UUID(), sa.ForeignKey("document.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_position", sa.Integer(), nullable=False),
        sa.Column("end_position", sa.Integer(), nullable=False),
        sa.Column("highlighted_text", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("note", sa.Text(), nullable=False),
        sa.Column("is_ai_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("confidence_score", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("0 <= start_position AND start_position < end_position", name="ck_annotation_span"),
    )
    op.create_index("ix_annotation_document_start", "annotation", ["document_id", "start_position"])

    op.create_table(
        "project",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("thesis", sa.Text(), nullable=True),
        sa.Column("context_summary", sa.Text(), nullable=True),
    )

    op.create_table(
        "folder",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("project_id", sa.UUID(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("context_summary", sa.Text(), nullable=True),
    )
    op.create_index("ix_folder_project", "folder", ["project_id"])

    op.create_table(
        "project_document",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("project_id", sa.UUID(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("document_id", sa.UUID(), sa.ForeignKey("document.id", ondelete="CASCADE"), nullable=False),
        sa.Column("folder_id", sa.UUID(), sa.ForeignKey("folder.id", ondelete="SET NULL"), nullable=True),
        sa.Column("retrieval_context", sa.Text(), nullable=True),
        sa.Column("citation_data", JSONB(), nullable=True),
    )
    op.create_index("ix_project_document_project", "project_document", ["project_id"])

    op.create_table(
        "project_annotation",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "project_document_id",
            sa.UUID(),
            sa.ForeignKey("project_document.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_position", sa.Integer(), nullable=False),
        sa.Column("end_position", sa.Integer(), nullable=False),
        sa.Column("highlighted_text", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("searchable_content", sa.Text(), nullable=True),
    )
    op.create_index("ix_project_annotation_document", "project_annotation", ["project_document_id"])


def downgrade() -> None:
    op.drop_table("project_annotation")
    op.drop_table("project_document")
    op.drop_table("folder")
    op.drop_table("project")
    op.drop_table("annotation")
    op.drop_table("chunk")
    op.drop_table("document")
    op.execute("DROP EXTENSION IF EXISTS vector")
