"""Packager API routes."""

from fastapi import APIRouter

from pkgtrack.dependencies import IdPath, RegistryDep
from pkgtrack.models.registry import Packager, PackagerUpsert

router = APIRouter(prefix="/packagers", tags=["Packagers"])


@router.put("/{tg_uid}", response_model=Packager)
async def upsert_packager(tg_uid: IdPath, body: PackagerUpsert, registry: RegistryDep) -> Packager:
    return await registry.upsert_packager(tg_uid, body.alias)


@router.get("/{tg_uid}", response_model=Packager)
async def get_packager(tg_uid: IdPath, registry: RegistryDep) -> Packager:
    return await registry.get_packager(tg_uid)
