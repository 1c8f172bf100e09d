"""initial_schema_documents_and_chunks

Revision ID: 3f1c2a7be514
Revises:
Create Date: 2026-10-18 09:00:12.418204+00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c2a7be514"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    status_enum = sa.Enum(
        "UPLOADED",
        "PROCESSING",
        "PROCESSED",
        "ERROR",
        name="documentstatus",
    )

    # --- documents table ---
    op.create_table(
        "documents",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("mime_type", sa.String(255), nullable=False, server_default="text/plain"),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column(
            "tags",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("is_legacy", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("status", status_enum, nullable=False, server_default="UPLOADED"),
        sa.Column("extracted_text", sa.Text(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )

    # --- chunks table ---
    op.create_table(
        "chunks",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "document_id",
            sa.UUID(),
            sa.ForeignKey("documents.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("chunk_index", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("word_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("start_position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("end_position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("section_title", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )

    # --- indexes ---
    op.create_index(
        "ix_chunks_document_chunk_index",
        "chunks",
        ["document_id", "chunk_index"],
        unique=True,
    )
    op.create_index("ix_documents_category", "documents", ["category"])


def downgrade() -> None:
    op.drop_index("ix_documents_category", table_name="documents")
    op.drop_index("ix_chunks_document_chunk_index", table_name="chunks")
    op.drop_table("chunks")
    op.drop_table("documents")
    sa.Enum(name="documentstatus").drop(op.get_bind(), checkfirst=True)
