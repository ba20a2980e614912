from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.core import ids
from app.models.base import Base, TimestampMixin


class Agent(TimestampMixin, Base):
    __tablename__ = "agents"
    __table_args__ = (
        UniqueConstraint("email", name="uq_agents_email"),
        # directory order
        Index("ix_agents_created_at", "created_at", "id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: ids.gen_id(ids.AGENT))

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    # E.164, e.g. +14155550123
    mobile: Mapped[str] = mapped_column(String(16), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
