"""Package table."""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from pkgtrack.db.base import Base


class PackageRow(Base):
    __tablename__ = "pkg"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
