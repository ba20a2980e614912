from alembic import op
import sqlalchemy as sa

revision = "0001_agents"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "agents",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("mobile", sa.String(length=16), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),

        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),

        sa.UniqueConstraint("email", name="uq_agents_email"),
    )

    op.create_index("ix_agents_created_at", "agents", ["created_at", "id"])


def downgrade():
    op.drop_index("ix_agents_created_at", table_name="agents")
    op.drop_table("agents")
