"""create feedbacks table

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2024-05-06 10:00:00
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1c9a2b7d10"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "feedbacks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("video_marca", sa.String(length=120), nullable=False),
        sa.Column("video_tema", sa.String(length=255), nullable=False),
        sa.Column("video_formato", sa.String(length=32), nullable=True),
        sa.Column("video_versao", sa.String(length=16), nullable=True),
        sa.Column("video_file", sa.String(length=255), nullable=True),
        sa.Column("comment_author", sa.String(length=120), nullable=True),
        sa.Column("comment_text", sa.Text(), nullable=True),
        sa.Column("ai_summary", sa.Text(), nullable=True),
        sa.Column("ai_category_topic", sa.Text(), nullable=True),
        sa.Column("ai_action_category", sa.String(length=64), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        sa.Column("sentiment", sa.String(length=16), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_feedbacks_created_at", "feedbacks", ["created_at"], unique=False)
    op.create_index("ix_feedbacks_marca_versao", "feedbacks", ["video_marca", "video_versao"], unique=False)

def downgrade():
    op.drop_index("ix_feedbacks_marca_versao", table_name="feedbacks")
    op.drop_index("ix_feedbacks_created_at", table_name="feedbacks")
    op.drop_table("feedbacks")
