"""Mark log API routes."""

from fastapi import APIRouter

from pkgtrack.dependencies import RegistryDep
from pkgtrack.models.registry import Mark, MarkCreate

router = APIRouter(prefix="/marks", tags=["Marks"])


@router.post("", status_code=201, response_model=Mark)
async def record_mark(body: MarkCreate, registry: RegistryDep) -> Mark:
    return await registry.record_mark(
        body.name,
        body.msg_id,
        package_id=body.for_pkg,
        packager_id=body.marked_by,
        comment=body.comment,
        now=body.now,
    )


@router.get("", response_model=list[Mark])
async def list_marks(registry: RegistryDep) -> list[Mark]:
    return await registry.list_marks()
