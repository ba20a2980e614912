from alembic import op
import sqlalchemy as sa

revision = "0002_list_items"
down_revision = "0001_agents"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "list_items",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("first_name", sa.String(length=200), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),

        sa.Column("assigned_to", sa.String(), sa.ForeignKey("agents.id", ondelete="CASCADE"), nullable=False),

        sa.Column("upload_id", sa.String(), nullable=False),
        sa.Column("row_number", sa.Integer(), nullable=False),

        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_index("ix_list_items_assigned_to", "list_items", ["assigned_to"])
    op.create_index("ix_list_items_upload_id", "list_items", ["upload_id"])
    op.create_index(
        "ix_list_items_read_order", "list_items", ["created_at", "upload_id", "row_number", "id"]
    )


def downgrade():
    op.drop_index("ix_list_items_read_order", table_name="list_items")
    op.drop_index("ix_list_items_upload_id", table_name="list_items")
    op.drop_index("ix_list_items_assigned_to", table_name="list_items")
    op.drop_table("list_items")
