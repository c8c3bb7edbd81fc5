"""Repository for Assignment records."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pkgtrack.db.models.assignment import AssignmentRow
from pkgtrack.db.models.package import PackageRow
from pkgtrack.db.models.packager import PackagerRow
from pkgtrack.repositories.base import BaseRepository


class AssignmentRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, AssignmentRow)

    async def get_latest(self, package_id: int) -> AssignmentRow | None:
        """The authoritative assignment: greatest assigned_at, then greatest id."""
        stmt = (
            select(AssignmentRow)
            .where(AssignmentRow.pkg == package_id)
            .order_by(AssignmentRow.assigned_at.desc(), AssignmentRow.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_package(self, package_id: int) -> list[AssignmentRow]:
        stmt = (
            select(AssignmentRow)
            .where(AssignmentRow.pkg == package_id)
            .order_by(AssignmentRow.assigned_at, AssignmentRow.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_current(self) -> list[tuple[PackageRow, PackagerRow, AssignmentRow]]:
        """Every package whose authoritative assignment names a packager."""
        ranked = (
            select(
                AssignmentRow.id.label("assignment_id"),
                func.row_number()
                .over(
                    partition_by=AssignmentRow.pkg,
                    order_by=(AssignmentRow.assigned_at.desc(), AssignmentRow.id.desc()),
                )
                .label("rank"),
            )
            .subquery()
        )
        stmt = (
            select(PackageRow, PackagerRow, AssignmentRow)
            .join(ranked, ranked.c.assignment_id == AssignmentRow.id)
            .join(PackageRow, PackageRow.id == AssignmentRow.pkg)
            .join(PackagerRow, PackagerRow.tg_uid == AssignmentRow.assignee)
            .where(ranked.c.rank == 1)
            .order_by(AssignmentRow.assigned_at, PackageRow.id)
        )
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]
