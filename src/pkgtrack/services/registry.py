"""Package registry service: assignments, marks and dependency relations.

Every public coroutine runs in its own database transaction. Upserts,
assignment writes and relation writes hold the lock of every id involved
(packagers and packages keep separate lock tables), so two concurrent
writers on the same id are applied one after the other. Reads take no
locks and see the latest committed state.
"""

import logging
import time
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pkgtrack.errors.exceptions import (
    ConstraintViolationError,
    CyclicDependencyError,
    SelfDependencyError,
    UnknownPackageError,
    UnknownPackagerError,
    ValidationError,
)
from pkgtrack.models.enums import PackageState
from pkgtrack.models.registry import (
    Assignment,
    Mark,
    MarkListUnit,
    Package,
    PackageRelation,
    Packager,
    PackageStatus,
    WorkListUnit,
)
from pkgtrack.repositories.assignment_repo import AssignmentRepository
from pkgtrack.repositories.mark_repo import MarkRepository
from pkgtrack.repositories.package_repo import PackageRepository
from pkgtrack.repositories.packager_repo import PackagerRepository
from pkgtrack.repositories.relation_repo import PackageRelationRepository
from pkgtrack.services.package_locks import PackageLocks
from pkgtrack.services.readiness import evaluate_readiness, find_cycle

logger = logging.getLogger(__name__)


def _epoch(now: int | None) -> int:
    return int(time.time()) if now is None else now


class Registry:
    """Single source of truth for packagers, packages and their workflow state."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        allowed_relation_statuses: Sequence[str] | None = None,
    ):
        self._session_factory = session_factory
        self._allowed_statuses = (
            frozenset(allowed_relation_statuses) if allowed_relation_statuses else None
        )
        self._locks = PackageLocks()
        self._packager_locks = PackageLocks()

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """One session, one transaction: commit on success, roll back on any error."""
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except IntegrityError as exc:
                raise ConstraintViolationError(
                    "Write rejected by the database",
                    details={"reason": str(exc.orig)},
                ) from exc

    @asynccontextmanager
    async def _read(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    # -- lookups shared by reads and writes ---------------------------------

    @staticmethod
    async def _require_package(session: AsyncSession, package_id: int):
        row = await PackageRepository(session).get(package_id)
        if row is None:
            raise UnknownPackageError(package_id)
        return row

    @staticmethod
    async def _require_packager(session: AsyncSession, packager_id: int):
        row = await PackagerRepository(session).get(packager_id)
        if row is None:
            raise UnknownPackagerError(packager_id)
        return row

    @staticmethod
    async def _assignee_of(session: AsyncSession, package_id: int):
        latest = await AssignmentRepository(session).get_latest(package_id)
        if latest is None or latest.assignee is None:
            return None
        return await PackagerRepository(session).get(latest.assignee)

    # -- packagers and packages ---------------------------------------------

    async def upsert_packager(self, tg_uid: int, alias: str) -> Packager:
        """Create a packager or update its alias. Never fails for a missing row."""
        async with self._packager_locks.hold([tg_uid]):
            async with self._transaction() as session:
                row, created = await PackagerRepository(session).upsert(tg_uid, alias)
                result = Packager.model_validate(row)
        logger.info(
            "packager_upserted", extra={"tg_uid": tg_uid, "alias": alias, "created": created}
        )
        return result

    async def get_packager(self, tg_uid: int) -> Packager:
        async with self._read() as session:
            return Packager.model_validate(await self._require_packager(session, tg_uid))

    async def upsert_package(self, package_id: int, name: str) -> Package:
        """Create a package or rename it. Idempotent."""
        async with self._locks.hold([package_id]):
            async with self._transaction() as session:
                row, created = await PackageRepository(session).upsert(package_id, name)
                result = Package.model_validate(row)
        logger.info(
            "package_upserted", extra={"package_id": package_id, "pkgname": name, "created": created}
        )
        return result

    async def get_package(self, package_id: int) -> Package:
        async with self._read() as session:
            return Package.model_validate(await self._require_package(session, package_id))

    async def find_package_by_name(self, name: str) -> Package:
        async with self._read() as session:
            row = await PackageRepository(session).get_by_name(name)
            if row is None:
                raise UnknownPackageError(name)
            return Package.model_validate(row)

    # -- assignments ---------------------------------------------------------

    async def assign(self, package_id: int, packager_id: int, now: int | None = None) -> Assignment:
        """Make ``packager_id`` responsible for ``package_id``, superseding earlier claims."""
        assigned_at = _epoch(now)
        async with self._locks.hold([package_id]):
            async with self._transaction() as session:
                await self._require_package(session, package_id)
                await self._require_packager(session, packager_id)
                repo = AssignmentRepository(session)
                previous = await repo.get_latest(package_id)
                if previous is not None and previous.assigned_at > assigned_at:
                    logger.warning(
                        "assignment_older_than_current",
                        extra={
                            "package_id": package_id,
                            "assigned_at": assigned_at,
                            "current_assigned_at": previous.assigned_at,
                        },
                    )
                row = await repo.create(pkg=package_id, assignee=packager_id, assigned_at=assigned_at)
                result = Assignment.model_validate(row)
        logger.info(
            "package_assigned",
            extra={"package_id": package_id, "packager_id": packager_id, "assigned_at": assigned_at},
        )
        return result

    async def unassign(
        self,
        package_id: int,
        now: int | None = None,
        packager_id: int | None = None,
    ) -> Assignment | None:
        """Release a package by appending a no-assignee entry.

        When ``packager_id`` is given the release only goes through if that
        packager is the current assignee. Releasing a package that is already
        unassigned writes nothing and returns None.
        """
        assigned_at = _epoch(now)
        async with self._locks.hold([package_id]):
            async with self._transaction() as session:
                await self._require_package(session, package_id)
                if packager_id is not None:
                    await self._require_packager(session, packager_id)
                repo = AssignmentRepository(session)
                current = await repo.get_latest(package_id)
                current_assignee = current.assignee if current is not None else None
                if packager_id is not None and current_assignee != packager_id:
                    raise ConstraintViolationError(
                        f"Package '{package_id}' is not assigned to packager '{packager_id}'",
                        details={
                            "package_id": package_id,
                            "packager_id": packager_id,
                            "current_assignee": current_assignee,
                        },
                    )
                if current_assignee is None:
                    return None
                row = await repo.create(pkg=package_id, assignee=None, assigned_at=assigned_at)
                result = Assignment.model_validate(row)
        logger.info(
            "package_unassigned",
            extra={"package_id": package_id, "previous_assignee": current_assignee},
        )
        return result

    async def current_assignee(self, package_id: int) -> Packager | None:
        """Packager holding the package, or None when it is unassigned."""
        async with self._read() as session:
            await self._require_package(session, package_id)
            row = await self._assignee_of(session, package_id)
            return Packager.model_validate(row) if row is not None else None

    async def assignment_history(self, package_id: int) -> list[Assignment]:
        async with self._read() as session:
            await self._require_package(session, package_id)
            rows = await AssignmentRepository(session).list_for_package(package_id)
            return [Assignment.model_validate(r) for r in rows]

    # -- marks ---------------------------------------------------------------

    async def record_mark(
        self,
        name: str,
        msg_id: int,
        package_id: int | None = None,
        packager_id: int | None = None,
        comment: str | None = None,
        now: int | None = None,
    ) -> Mark:
        """Append an immutable mark. Nothing else changes."""
        async with self._transaction() as session:
            if package_id is not None:
                await self._require_package(session, package_id)
            if packager_id is not None:
                await self._require_packager(session, packager_id)
            row = await MarkRepository(session).append(
                name=name,
                marked_by=packager_id,
                marked_at=_epoch(now),
                msg_id=msg_id,
                comment=comment,
                for_pkg=package_id,
            )
            result = Mark.model_validate(row)
        logger.info(
            "mark_recorded",
            extra={"mark": name, "package_id": package_id, "packager_id": packager_id, "msg_id": msg_id},
        )
        return result

    async def list_marks(self, package_id: int | None = None) -> list[Mark]:
        async with self._read() as session:
            if package_id is not None:
                await self._require_package(session, package_id)
            rows = await MarkRepository(session).list_for_package(package_id)
            return [Mark.model_validate(r) for r in rows]

    # -- relations -----------------------------------------------------------

    async def add_relation(self, request_pkg: int, required_pkg: int, status: str) -> PackageRelation:
        """Record that ``request_pkg`` waits on ``required_pkg``. Last write wins on status."""
        if request_pkg == required_pkg:
            raise SelfDependencyError(request_pkg)
        if self._allowed_statuses is not None and status not in self._allowed_statuses:
            raise ValidationError(
                f"Unsupported relation status '{status}'",
                details={"status": status, "allowed": sorted(self._allowed_statuses)},
            )

        async with self._locks.hold([request_pkg, required_pkg]):
            async with self._transaction() as session:
                await self._require_package(session, request_pkg)
                await self._require_package(session, required_pkg)
                repo = PackageRelationRepository(session)
                row, created = await repo.upsert(request_pkg, required_pkg, status)
                result = PackageRelation.model_validate(row)
                cycle = find_cycle(request_pkg, await repo.reachable_from(request_pkg))

        logger.info(
            "relation_added",
            extra={
                "request": request_pkg,
                "required": required_pkg,
                "status": status,
                "created": created,
            },
        )
        if cycle is not None:
            logger.warning("relation_cycle_detected", extra={"cycle": cycle})
        return result

    async def resolve_relation(self, request_pkg: int, required_pkg: int) -> bool:
        """Drop the edge for this pair. Returns False when there was nothing to drop."""
        async with self._locks.hold([request_pkg, required_pkg]):
            async with self._transaction() as session:
                removed = await PackageRelationRepository(session).delete(request_pkg, required_pkg)
        if removed:
            logger.info("relation_resolved", extra={"request": request_pkg, "required": required_pkg})
        return removed

    async def list_relations(self, package_id: int) -> list[PackageRelation]:
        async with self._read() as session:
            await self._require_package(session, package_id)
            rows = await PackageRelationRepository(session).list_outgoing(package_id)
            return [PackageRelation.model_validate(r) for r in rows]

    # -- derived state -------------------------------------------------------

    async def is_ready(self, package_id: int) -> bool:
        """True when no unresolved relation blocks the package.

        Raises:
            CyclicDependencyError: the relation graph reachable from the package has a cycle.
        """
        async with self._read() as session:
            await self._require_package(session, package_id)
            graph = await PackageRelationRepository(session).reachable_from(package_id)
        return evaluate_readiness(package_id, graph).ready

    async def package_status(self, package_id: int) -> PackageStatus:
        """Project assignment and readiness into a single view.

        A cycle does not raise here: the package is reported as not ready with
        the offending cycle attached.
        """
        async with self._read() as session:
            package = await self._require_package(session, package_id)
            assignee = await self._assignee_of(session, package_id)
            graph = await PackageRelationRepository(session).reachable_from(package_id)
            package_model = Package.model_validate(package)
            assignee_model = Packager.model_validate(assignee) if assignee is not None else None

        cycle = None
        try:
            readiness = evaluate_readiness(package_id, graph)
            ready = readiness.ready
            blocked_by = readiness.blocked_by
            transitive = readiness.transitive_blockers
        except CyclicDependencyError as exc:
            ready = False
            cycle = exc.cycle
            blocked_by = sorted(set(graph.get(package_id, ())))
            transitive = sorted({p for edges in graph.values() for p in edges})

        if assignee_model is None:
            state = PackageState.UNASSIGNED
        elif ready:
            state = PackageState.READY
        else:
            state = PackageState.BLOCKED

        return PackageStatus(
            package=package_model,
            assignee=assignee_model,
            state=state,
            ready=ready,
            blocked_by=blocked_by,
            transitive_blockers=transitive,
            cycle=cycle,
        )

    async def work_list(self) -> list[WorkListUnit]:
        """Packages that currently have an assignee, oldest claim first."""
        async with self._read() as session:
            rows = await AssignmentRepository(session).list_current()
        return [
            WorkListUnit(
                pkgname=package.name,
                packager=packager.alias,
                tg_uid=packager.tg_uid,
                assigned_at=assignment.assigned_at,
            )
            for package, packager, assignment in rows
        ]

    async def mark_list(self) -> list[MarkListUnit]:
        """Every mark with its package name and marker alias, in insertion order."""
        async with self._read() as session:
            rows = await MarkRepository(session).list_joined()
        return [
            MarkListUnit(
                name=mark.name,
                pkgname=pkgname,
                marked_by=alias,
                marked_at=mark.marked_at,
                msg_id=mark.msg_id,
                comment=mark.comment,
            )
            for mark, pkgname, alias in rows
        ]
