"""Assignment table."""

from sqlalchemy import BigInteger, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from pkgtrack.db.base import Base


class AssignmentRow(Base):
    """One claim on a package. Rows are never updated; newer rows supersede older ones."""

    __tablename__ = "assignment"
    __table_args__ = (Index("ix_assignment_pkg_assigned_at", "pkg", "assigned_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pkg: Mapped[int] = mapped_column(BigInteger, ForeignKey("pkg.id"), nullable=False)
    # NULL marks an unassign
    assignee: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("packager.tg_uid"), nullable=True
    )
    assigned_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
