"""Package relation table."""

from sqlalchemy import BigInteger, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from pkgtrack.db.base import Base


class PackageRelationRow(Base):
    """Directed edge: ``request`` is blocked until ``required`` is dealt with."""

    __tablename__ = "pkg_relation"

    # outdated_dep, missing_dep...
    status: Mapped[str] = mapped_column(Text, nullable=False)
    required: Mapped[int] = mapped_column(BigInteger, ForeignKey("pkg.id"), primary_key=True)
    request: Mapped[int] = mapped_column(BigInteger, ForeignKey("pkg.id"), primary_key=True)
