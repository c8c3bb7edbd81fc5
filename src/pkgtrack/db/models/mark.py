"""Mark table (append-only event log)."""

from sqlalchemy import BigInteger, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from pkgtrack.db.base import Base


class MarkRow(Base):
    __tablename__ = "mark"

    # Surrogate key; also the insertion order of the log
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    marked_by: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("packager.tg_uid"), nullable=True
    )
    marked_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    msg_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    for_pkg: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("pkg.id"), nullable=True, index=True
    )
