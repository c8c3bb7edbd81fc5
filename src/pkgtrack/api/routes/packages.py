"""Package, assignment and relation API routes."""

from fastapi import APIRouter, Response

from pkgtrack.dependencies import IdPath, OptionalIdQuery, RegistryDep
from pkgtrack.models.registry import (
    AssignRequest,
    Assignment,
    Mark,
    Package,
    PackageRelation,
    PackageStatus,
    PackageUpsert,
    Packager,
    RelationUpsert,
)

router = APIRouter(prefix="/packages", tags=["Packages"])


@router.get("/by-name/{name}", response_model=Package)
async def find_package_by_name(name: str, registry: RegistryDep) -> Package:
    return await registry.find_package_by_name(name)


@router.put("/{package_id}", response_model=Package)
async def upsert_package(package_id: IdPath, body: PackageUpsert, registry: RegistryDep) -> Package:
    return await registry.upsert_package(package_id, body.name)


@router.get("/{package_id}", response_model=Package)
async def get_package(package_id: IdPath, registry: RegistryDep) -> Package:
    return await registry.get_package(package_id)


@router.get("/{package_id}/status", response_model=PackageStatus)
async def get_package_status(package_id: IdPath, registry: RegistryDep) -> PackageStatus:
    return await registry.package_status(package_id)


@router.get("/{package_id}/ready")
async def get_package_ready(package_id: IdPath, registry: RegistryDep) -> dict:
    """Readiness only. A dependency cycle is answered with 409."""
    return {"package_id": package_id, "ready": await registry.is_ready(package_id)}


# ---------------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------------

@router.get("/{package_id}/assignee", response_model=Packager | None)
async def get_current_assignee(package_id: IdPath, registry: RegistryDep) -> Packager | None:
    return await registry.current_assignee(package_id)


@router.get("/{package_id}/assignments", response_model=list[Assignment])
async def list_assignments(package_id: IdPath, registry: RegistryDep) -> list[Assignment]:
    return await registry.assignment_history(package_id)


@router.post("/{package_id}/assignments", status_code=201, response_model=Assignment)
async def assign_package(package_id: IdPath, body: AssignRequest, registry: RegistryDep) -> Assignment:
    return await registry.assign(package_id, body.packager_id, now=body.now)


@router.delete("/{package_id}/assignments/current")
async def unassign_package(
    package_id: IdPath,
    registry: RegistryDep,
    packager_id: OptionalIdQuery = None,
    now: OptionalIdQuery = None,
) -> Response:
    """Release the package. With ``packager_id`` only that packager may release it."""
    row = await registry.unassign(package_id, now=now, packager_id=packager_id)
    if row is None:
        return Response(status_code=204)
    return Response(
        status_code=200,
        content=row.model_dump_json(),
        media_type="application/json",
    )


# ---------------------------------------------------------------------------
# Marks
# ---------------------------------------------------------------------------

@router.get("/{package_id}/marks", response_model=list[Mark])
async def list_package_marks(package_id: IdPath, registry: RegistryDep) -> list[Mark]:
    return await registry.list_marks(package_id)


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

@router.get("/{package_id}/relations", response_model=list[PackageRelation])
async def list_relations(package_id: IdPath, registry: RegistryDep) -> list[PackageRelation]:
    return await registry.list_relations(package_id)


@router.put("/{package_id}/relations/{required_id}", response_model=PackageRelation)
async def add_relation(
    package_id: IdPath,
    required_id: IdPath,
    body: RelationUpsert,
    registry: RegistryDep,
) -> PackageRelation:
    return await registry.add_relation(package_id, required_id, body.status)


@router.delete("/{package_id}/relations/{required_id}", status_code=204)
async def resolve_relation(package_id: IdPath, required_id: IdPath, registry: RegistryDep) -> None:
    await registry.resolve_relation(package_id, required_id)
