"""Repository for Packager records."""

from sqlalchemy.ext.asyncio import AsyncSession

from pkgtrack.db.models.packager import PackagerRow
from pkgtrack.repositories.base import BaseRepository


class PackagerRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, PackagerRow)

    async def get(self, tg_uid: int) -> PackagerRow | None:
        return await self.get_by_id(tg_uid)

    async def upsert(self, tg_uid: int, alias: str) -> tuple[PackagerRow, bool]:
        """Create the packager or refresh its alias. Returns (row, created)."""
        row = await self.get(tg_uid)
        if row is None:
            return await self.create(tg_uid=tg_uid, alias=alias), True
        if row.alias != alias:
            await self.update(row, alias=alias)
        return row, False
