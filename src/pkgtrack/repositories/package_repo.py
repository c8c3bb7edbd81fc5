"""Repository for Package records."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pkgtrack.db.models.package import PackageRow
from pkgtrack.repositories.base import BaseRepository


class PackageRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, PackageRow)

    async def get(self, package_id: int) -> PackageRow | None:
        return await self.get_by_id(package_id)

    async def get_by_name(self, name: str) -> PackageRow | None:
        """Lowest-id package carrying ``name`` (names are not unique)."""
        stmt = select(PackageRow).where(PackageRow.name == name).order_by(PackageRow.id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, package_id: int, name: str) -> tuple[PackageRow, bool]:
        """Create the package or rename it. Returns (row, created)."""
        row = await self.get(package_id)
        if row is None:
            return await self.create(id=package_id, name=name), True
        if row.name != name:
            await self.update(row, name=name)
        return row, False
