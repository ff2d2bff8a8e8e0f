"""
테마/지역(2단계 분류) 서비스.

테마 삭제는 cascade 하지 않습니다. 연결된 지역/상품의 참조는 그대로 남습니다.
"""
import logging
from typing import Optional

from supabase import AsyncClient

from tourbook.schemas.product import AreaCreate, AreaPatch, AreaRow, ThemeRow, ThemeUpsert
from tourbook.services.query_utils import first_row, rows_of, utc_now_iso
from tourbook.services.slugs import area_slug, theme_slug

logger = logging.getLogger(__name__)

THEME_TABLE = "product_themes"
AREA_TABLE = "product_areas"
THEME_COLUMNS = "id,name,slug,sort_order,is_active,created_at,updated_at"
AREA_COLUMNS = "id,theme_id,name,slug,sort_order,is_active,created_at,updated_at"


class TaxonomyService:
    def __init__(self, client: AsyncClient):
        self.client = client

    # ---- themes ----

    async def list_themes_admin(self) -> list[ThemeRow]:
        response = await self.client.table(THEME_TABLE).select(THEME_COLUMNS).order("sort_order").execute()
        return [ThemeRow(**r) for r in rows_of(response)]

    async def list_themes_active(self) -> list[ThemeRow]:
        response = await (
            self.client.table(THEME_TABLE)
            .select(THEME_COLUMNS)
            .eq("is_active", True)
            .order("sort_order")
            .execute()
        )
        return [ThemeRow(**r) for r in rows_of(response)]

    async def get_theme(self, theme_id: str) -> Optional[ThemeRow]:
        response = await self.client.table(THEME_TABLE).select(THEME_COLUMNS).eq("id", theme_id).limit(1).execute()
        row = first_row(response)
        return ThemeRow(**row) if row else None

    async def get_theme_by_slug(self, slug: str) -> Optional[ThemeRow]:
        response = await self.client.table(THEME_TABLE).select(THEME_COLUMNS).eq("slug", slug).limit(1).execute()
        row = first_row(response)
        return ThemeRow(**row) if row else None

    async def create_theme(self, payload: ThemeUpsert) -> ThemeRow:
        data = payload.model_dump()
        data["slug"] = payload.slug.strip() or theme_slug(payload.name)
        if not data["slug"]:
            raise ValueError("slug를 입력하세요")
        response = await self.client.table(THEME_TABLE).insert(data).execute()
        row = first_row(response)
        logger.info(f"테마 생성: {data['name']} ({data['slug']})")
        return ThemeRow(**row)

    async def update_theme(self, theme_id: str, payload: ThemeUpsert) -> Optional[ThemeRow]:
        data = payload.model_dump()
        data["slug"] = payload.slug.strip() or theme_slug(payload.name)
        data["updated_at"] = utc_now_iso()
        response = await self.client.table(THEME_TABLE).update(data).eq("id", theme_id).execute()
        row = first_row(response)
        return ThemeRow(**row) if row else None

    async def delete_theme(self, theme_id: str) -> bool:
        await self.client.table(THEME_TABLE).delete().eq("id", theme_id).execute()
        logger.info(f"테마 삭제: {theme_id} (연결된 지역/상품은 유지)")
        return True

    # ---- areas ----

    async def admin_list_areas(self, theme_id: Optional[str] = None) -> list[AreaRow]:
        query = (
            self.client.table(AREA_TABLE)
            .select(AREA_COLUMNS)
            .order("theme_id")
            .order("sort_order")
            .order("name")
        )
        if theme_id:
            query = query.eq("theme_id", theme_id)
        response = await query.execute()
        return [AreaRow(**r) for r in rows_of(response)]

    async def list_areas_by_theme(self, theme_id: str) -> list[AreaRow]:
        response = await (
            self.client.table(AREA_TABLE)
            .select(AREA_COLUMNS)
            .eq("theme_id", theme_id)
            .eq("is_active", True)
            .order("sort_order")
            .order("name")
            .execute()
        )
        return [AreaRow(**r) for r in rows_of(response)]

    async def create_area(self, payload: AreaCreate) -> AreaRow:
        if await self.get_theme(payload.theme_id) is None:
            raise ValueError(f"존재하지 않는 테마입니다: {payload.theme_id}")

        data = {
            "theme_id": payload.theme_id,
            "name": payload.name.strip(),
            "slug": area_slug(payload.slug) or area_slug(payload.name),
            "sort_order": payload.sort_order,
            "is_active": payload.is_active,
        }
        if not data["slug"]:
            raise ValueError("slug를 입력하세요")
        response = await self.client.table(AREA_TABLE).insert(data).execute()
        return AreaRow(**first_row(response))

    async def update_area(self, area_id: str, patch: AreaPatch) -> Optional[AreaRow]:
        data = patch.model_dump(exclude_unset=True)
        if "slug" in data and data["slug"] is not None:
            data["slug"] = area_slug(data["slug"])
        if data.get("theme_id") and await self.get_theme(data["theme_id"]) is None:
            raise ValueError(f"존재하지 않는 테마입니다: {data['theme_id']}")
        data["updated_at"] = utc_now_iso()

        response = await self.client.table(AREA_TABLE).update(data).eq("id", area_id).execute()
        row = first_row(response)
        return AreaRow(**row) if row else None

    async def delete_area(self, area_id: str) -> bool:
        await self.client.table(AREA_TABLE).delete().eq("id", area_id).execute()
        return True
