"""Packager table."""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from pkgtrack.db.base import Base


class PackagerRow(Base):
    __tablename__ = "packager"

    # External identity (chat platform user id), used directly as the join key
    tg_uid: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    alias: Mapped[str] = mapped_column(Text, nullable=False)
