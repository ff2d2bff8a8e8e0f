"""
사이트 설정(브랜딩/히어로 슬라이드) 서비스.

site_settings 테이블의 key/value 로 저장하고, 이미지 자산은 public bucket(site-assets)에 둡니다.
"""
import json
import logging
import re
from typing import Optional

from pydantic import TypeAdapter, ValidationError
from supabase import AsyncClient

from tourbook.schemas.profile import Branding, HeroSlide
from tourbook.services.query_utils import first_row
from tourbook.services.storage_service import StorageService, site_asset_storage

logger = logging.getLogger(__name__)

SETTING_TABLE = "site_settings"
LOGO_KEY = "logo_path"
PRIMARY_COLOR_KEY = "primary_color"
HERO_SLIDES_KEY = "hero_slides"

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_hero_slides_adapter = TypeAdapter(list[HeroSlide])


class SiteSettingsService:
    def __init__(self, client: AsyncClient, storage: Optional[StorageService] = None):
        self.client = client
        self.storage = storage or site_asset_storage(client)

    async def get_setting(self, key: str) -> str:
        response = await self.client.table(SETTING_TABLE).select("value").eq("key", key).limit(1).execute()
        row = first_row(response)
        return (row or {}).get("value") or ""

    async def upsert_setting(self, key: str, value: str) -> None:
        await self.client.table(SETTING_TABLE).upsert({"key": key, "value": value}, on_conflict="key").execute()

    async def get_logo_url(self) -> str:
        return self.storage.public_url(await self.get_setting(LOGO_KEY))

    async def get_primary_color(self) -> str:
        return (await self.get_setting(PRIMARY_COLOR_KEY)).strip()

    async def set_primary_color(self, color: str) -> None:
        value = (color or "").strip()
        if value and not _HEX_COLOR_RE.match(value):
            raise ValueError(f"색상은 #RGB 또는 #RRGGBB 형식이어야 합니다: {color}")
        await self.upsert_setting(PRIMARY_COLOR_KEY, value)

    async def get_branding(self) -> Branding:
        return Branding(logo_url=await self.get_logo_url(), primary_color=await self.get_primary_color())

    async def upload_logo(self, file_content: bytes, filename: str, content_type: Optional[str] = None) -> str:
        path = await self.storage.upload(file_content, filename, "branding", content_type)
        await self.upsert_setting(LOGO_KEY, path)
        return path

    async def upload_site_asset(
        self, file_content: bytes, filename: str, directory: str, content_type: Optional[str] = None
    ) -> str:
        return await self.storage.upload(file_content, filename, directory, content_type)

    async def get_hero_slides(self, defaults: list[HeroSlide]) -> list[HeroSlide]:
        raw = await self.get_setting(HERO_SLIDES_KEY)
        if not raw:
            return defaults
        try:
            slides = _hero_slides_adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"hero_slides 설정 파싱 실패, 기본값 사용: {e}")
            return defaults
        return slides or defaults

    async def save_hero_slides(self, slides: list[HeroSlide]) -> None:
        value = json.dumps([s.model_dump(by_alias=True) for s in slides], ensure_ascii=False)
        await self.upsert_setting(HERO_SLIDES_KEY, value)
