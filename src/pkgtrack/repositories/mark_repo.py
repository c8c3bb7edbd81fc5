"""Repository for the append-only Mark log."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pkgtrack.db.models.mark import MarkRow
from pkgtrack.db.models.package import PackageRow
from pkgtrack.db.models.packager import PackagerRow
from pkgtrack.repositories.base import BaseRepository


class MarkRepository(BaseRepository):
    """Marks are only ever inserted; there is no update or delete path."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, MarkRow)

    async def append(self, **kwargs) -> MarkRow:
        return await self.create(**kwargs)

    async def list_for_package(self, package_id: int | None = None) -> list[MarkRow]:
        stmt = select(MarkRow).order_by(MarkRow.id)
        if package_id is not None:
            stmt = stmt.where(MarkRow.for_pkg == package_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_joined(self) -> list[tuple[MarkRow, str | None, str | None]]:
        """Marks with the package name and marker alias, in insertion order."""
        stmt = (
            select(MarkRow, PackageRow.name, PackagerRow.alias)
            .outerjoin(PackageRow, PackageRow.id == MarkRow.for_pkg)
            .outerjoin(PackagerRow, PackagerRow.tg_uid == MarkRow.marked_by)
            .order_by(MarkRow.id)
        )
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]
