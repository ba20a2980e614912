from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core import ids
from app.models.base import Base, TimestampMixin


class ListItem(TimestampMixin, Base):
    """One uploaded contact row assigned to one agent."""

    __tablename__ = "list_items"
    __table_args__ = (
        # read order of the distribution view
        Index("ix_list_items_read_order", "created_at", "upload_id", "row_number", "id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: ids.gen_id(ids.LIST_ITEM))

    first_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    assigned_to: Mapped[str] = mapped_column(
        String, ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Batch the row arrived in and its 1-based position in the source file
    upload_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    row_number: Mapped[int] = mapped_column(Integer, nullable=False)
