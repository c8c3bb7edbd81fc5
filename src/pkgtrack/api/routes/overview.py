"""Combined work list / mark list view consumed by the web front end."""

from fastapi import APIRouter

from pkgtrack.dependencies import RegistryDep
from pkgtrack.models.registry import PkgListResponse

router = APIRouter(tags=["Overview"])


@router.get("/pkg", response_model=PkgListResponse)
async def pkg_overview(registry: RegistryDep) -> PkgListResponse:
    """Current assignments and every mark, in the original front end's camelCase shape."""
    return PkgListResponse(
        work_list=await registry.work_list(),
        mark_list=await registry.mark_list(),
    )
