from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from supabase import AsyncClient

from tourbook.api.deps import require_admin
from tourbook.schemas.product import Product, ProductFilter, ProductStatus, ProductUpsert
from tourbook.services.catalog_service import CatalogService
from tourbook.supabase_client import get_client

router = APIRouter()

MAX_THUMBNAIL_BYTES = 5 * 1024 * 1024


@router.get("", response_model=List[Product])
async def list_products(
    client: AsyncClient = Depends(get_client),
    q: str | None = Query(default=None),
    region: str | None = Query(default=None),
):
    return await CatalogService(client).list_products(ProductFilter(text=q, region=region, status="PUBLISHED"))


@router.get("/search", response_model=List[Product])
async def search_products(
    client: AsyncClient = Depends(get_client),
    q: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
):
    return await CatalogService(client).search_published_products(q, limit)


@router.get("/admin", response_model=List[Product], dependencies=[Depends(require_admin)])
async def admin_list_products(
    client: AsyncClient = Depends(get_client),
    q: str | None = Query(default=None),
    region: str | None = Query(default=None),
    status: ProductStatus | None = Query(default=None),
):
    return await CatalogService(client).list_products(ProductFilter(text=q, region=region, status=status))


@router.get("/admin/{product_id}", response_model=Product, dependencies=[Depends(require_admin)])
async def admin_get_product(product_id: str, client: AsyncClient = Depends(get_client)):
    product = await CatalogService(client).get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다")
    return product


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, client: AsyncClient = Depends(get_client)):
    product = await CatalogService(client).get_product(product_id, published_only=True)
    if product is None:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다")
    return product


@router.post("", response_model=Product, status_code=201, dependencies=[Depends(require_admin)])
async def create_product(payload: ProductUpsert, client: AsyncClient = Depends(get_client)):
    return await CatalogService(client).create_product(payload)


@router.put("/{product_id}", response_model=Product, dependencies=[Depends(require_admin)])
async def update_product(product_id: str, payload: ProductUpsert, client: AsyncClient = Depends(get_client)):
    product = await CatalogService(client).update_product(product_id, payload)
    if product is None:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다")
    return product


@router.delete("/{product_id}", dependencies=[Depends(require_admin)])
async def delete_product(product_id: str, client: AsyncClient = Depends(get_client)) -> dict:
    await CatalogService(client).delete_product(product_id)
    return {"ok": True}


@router.post("/thumbnail", dependencies=[Depends(require_admin)])
async def upload_thumbnail(file: UploadFile = File(...), client: AsyncClient = Depends(get_client)) -> dict:
    content_type = file.content_type or "application/octet-stream"
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="이미지 파일만 업로드할 수 있습니다")

    data = await file.read()
    if len(data) > MAX_THUMBNAIL_BYTES:
        raise HTTPException(status_code=400, detail="썸네일은 최대 5MB까지 업로드할 수 있습니다")

    service = CatalogService(client)
    path = await service.upload_thumbnail(data, file.filename or "", content_type)
    return {"path": path, "previewUrl": await service.storage.resolve_or_blank(path)}
