from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel
from supabase import AsyncClient

from tourbook.api.deps import require_admin
from tourbook.schemas.profile import Branding, HeroSlide
from tourbook.services.site_settings_service import SiteSettingsService
from tourbook.supabase_client import get_client

router = APIRouter()


class PrimaryColorIn(BaseModel):
    color: str


def _require_image(file: UploadFile) -> str:
    content_type = file.content_type or "application/octet-stream"
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="이미지 파일만 업로드할 수 있습니다")
    return content_type


@router.get("/branding", response_model=Branding)
async def get_branding(client: AsyncClient = Depends(get_client)):
    return await SiteSettingsService(client).get_branding()


@router.put("/branding/color", dependencies=[Depends(require_admin)])
async def set_primary_color(payload: PrimaryColorIn, client: AsyncClient = Depends(get_client)) -> dict:
    try:
        await SiteSettingsService(client).set_primary_color(payload.color)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True}


@router.post("/branding/logo", dependencies=[Depends(require_admin)])
async def upload_logo(file: UploadFile = File(...), client: AsyncClient = Depends(get_client)) -> dict:
    content_type = _require_image(file)
    service = SiteSettingsService(client)
    path = await service.upload_logo(await file.read(), file.filename or "", content_type)
    return {"path": path, "publicUrl": service.storage.public_url(path)}


@router.get("/hero-slides", response_model=List[HeroSlide])
async def get_hero_slides(client: AsyncClient = Depends(get_client)):
    return await SiteSettingsService(client).get_hero_slides(defaults=[])


@router.put("/hero-slides", dependencies=[Depends(require_admin)])
async def save_hero_slides(slides: List[HeroSlide], client: AsyncClient = Depends(get_client)) -> dict:
    await SiteSettingsService(client).save_hero_slides(slides)
    return {"ok": True, "count": len(slides)}


@router.post("/assets", dependencies=[Depends(require_admin)])
async def upload_site_asset(
    file: UploadFile = File(...),
    directory: str = Form(default="hero"),
    client: AsyncClient = Depends(get_client),
) -> dict:
    content_type = _require_image(file)
    service = SiteSettingsService(client)
    path = await service.upload_site_asset(await file.read(), file.filename or "", directory, content_type)
    return {"path": path, "publicUrl": service.storage.public_url(path)}
