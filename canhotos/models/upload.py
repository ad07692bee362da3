from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from canhotos.db.base import Base
from canhotos.models.common import IntegerPrimaryKeyMixin, utcnow


class Upload(IntegerPrimaryKeyMixin, Base):
    """A proof-of-delivery record. Rows are append-only."""

    __tablename__ = "uploads"

    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    invoice_ref: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    artifact_locator: Mapped[str] = mapped_column(String(1000), nullable=False)
    original_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    owner = relationship("User", back_populates="uploads")
