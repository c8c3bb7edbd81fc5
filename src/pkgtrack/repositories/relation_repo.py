"""Repository for PackageRelation edges."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pkgtrack.db.models.relation import PackageRelationRow
from pkgtrack.repositories.base import BaseRepository


class PackageRelationRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, PackageRelationRow)

    async def get(self, request: int, required: int) -> PackageRelationRow | None:
        return await self.get_by_id({"request": request, "required": required})

    async def upsert(self, request: int, required: int, status: str) -> tuple[PackageRelationRow, bool]:
        """Insert the edge or overwrite its status. Returns (row, created)."""
        row = await self.get(request, required)
        if row is None:
            return await self.create(request=request, required=required, status=status), True
        if row.status != status:
            await self.update(row, status=status)
        return row, False

    async def delete(self, request: int, required: int) -> bool:
        row = await self.get(request, required)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True

    async def list_outgoing(self, request: int) -> list[PackageRelationRow]:
        """Relations in which ``request`` waits on another package."""
        stmt = (
            select(PackageRelationRow)
            .where(PackageRelationRow.request == request)
            .order_by(PackageRelationRow.required)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def reachable_from(self, package_id: int) -> dict[int, list[int]]:
        """Relation subgraph reachable from ``package_id`` as request -> [required, ...].

        Walks one level per query, so the cost is bounded by the reachable part of
        the graph rather than the whole table.
        """
        graph: dict[int, list[int]] = {}
        frontier = {package_id}
        while frontier:
            stmt = (
                select(PackageRelationRow.request, PackageRelationRow.required)
                .where(PackageRelationRow.request.in_(frontier))
                .order_by(PackageRelationRow.request, PackageRelationRow.required)
            )
            result = await self.session.execute(stmt)
            for request in frontier:
                graph.setdefault(request, [])
            for request, required in result.all():
                graph[request].append(required)
            frontier = {
                required
                for edges in graph.values()
                for required in edges
                if required not in graph
            }
        return graph
