from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import AsyncClient

from tourbook.api.deps import require_admin
from tourbook.schemas.product import AreaCreate, AreaPatch, AreaRow, ThemeProducts, ThemeRow, ThemeUpsert
from tourbook.services.catalog_service import CatalogService
from tourbook.services.taxonomy_service import TaxonomyService
from tourbook.supabase_client import get_client

router = APIRouter()
areas_router = APIRouter()


@router.get("", response_model=List[ThemeRow])
async def list_themes_active(client: AsyncClient = Depends(get_client)):
    return await TaxonomyService(client).list_themes_active()


@router.get("/admin", response_model=List[ThemeRow], dependencies=[Depends(require_admin)])
async def list_themes_admin(client: AsyncClient = Depends(get_client)):
    return await TaxonomyService(client).list_themes_admin()


@router.get("/{slug}/products", response_model=ThemeProducts)
async def list_theme_products(
    slug: str,
    client: AsyncClient = Depends(get_client),
    area_id: str | None = Query(default=None, alias="areaId"),
):
    result = await CatalogService(client).list_theme_products(slug, area_id=area_id)
    if result is None:
        raise HTTPException(status_code=404, detail="테마를 찾을 수 없습니다")
    return result


@router.get("/{theme_id}/areas", response_model=List[AreaRow])
async def list_areas_by_theme(theme_id: str, client: AsyncClient = Depends(get_client)):
    return await TaxonomyService(client).list_areas_by_theme(theme_id)


@router.post("", response_model=ThemeRow, status_code=201, dependencies=[Depends(require_admin)])
async def create_theme(payload: ThemeUpsert, client: AsyncClient = Depends(get_client)):
    try:
        return await TaxonomyService(client).create_theme(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{theme_id}", response_model=ThemeRow, dependencies=[Depends(require_admin)])
async def update_theme(theme_id: str, payload: ThemeUpsert, client: AsyncClient = Depends(get_client)):
    theme = await TaxonomyService(client).update_theme(theme_id, payload)
    if theme is None:
        raise HTTPException(status_code=404, detail="테마를 찾을 수 없습니다")
    return theme


@router.delete("/{theme_id}", dependencies=[Depends(require_admin)])
async def delete_theme(theme_id: str, client: AsyncClient = Depends(get_client)) -> dict:
    await TaxonomyService(client).delete_theme(theme_id)
    return {"ok": True}


@areas_router.get("", response_model=List[AreaRow], dependencies=[Depends(require_admin)])
async def admin_list_areas(
    client: AsyncClient = Depends(get_client),
    theme_id: str | None = Query(default=None, alias="themeId"),
):
    return await TaxonomyService(client).admin_list_areas(theme_id)


@areas_router.post("", response_model=AreaRow, status_code=201, dependencies=[Depends(require_admin)])
async def create_area(payload: AreaCreate, client: AsyncClient = Depends(get_client)):
    try:
        return await TaxonomyService(client).create_area(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@areas_router.patch("/{area_id}", response_model=AreaRow, dependencies=[Depends(require_admin)])
async def update_area(area_id: str, patch: AreaPatch, client: AsyncClient = Depends(get_client)):
    try:
        area = await TaxonomyService(client).update_area(area_id, patch)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if area is None:
        raise HTTPException(status_code=404, detail="지역을 찾을 수 없습니다")
    return area


@areas_router.delete("/{area_id}", dependencies=[Depends(require_admin)])
async def delete_area(area_id: str, client: AsyncClient = Depends(get_client)) -> dict:
    await TaxonomyService(client).delete_area(area_id)
    return {"ok": True}
