"""
상품 카탈로그 서비스.

products 테이블 CRUD와 목록 필터링, 저장 row ↔ 공개 Product 변환,
썸네일 signed url 해석을 담당합니다.
"""
import asyncio
import logging
from typing import Any, Optional

from supabase import AsyncClient

from tourbook.schemas.product import Product, ProductFilter, ProductUpsert, ThemeProducts
from tourbook.services.itinerary import clamp_int
from tourbook.services.query_utils import first_row, ilike_any, rows_of, search_term, utc_now_iso
from tourbook.services.storage_service import StorageService, thumbnail_storage
from tourbook.services.taxonomy_service import TaxonomyService
from tourbook.settings import settings

logger = logging.getLogger(__name__)

PRODUCT_TABLE = "products"
_ALL_REGION_VALUES = {"all", "ALL"}


def is_all_region(region: str | None) -> bool:
    value = (region or "").strip()
    return not value or value == settings.region_all_label or value in _ALL_REGION_VALUES


def stored_thumbnail_ref(row: dict[str, Any]) -> str:
    """표시용 참조: path 우선, 없으면 url"""
    return str(row.get("thumbnail_path") or row.get("thumbnail_url") or "").strip()


def product_to_row(data: ProductUpsert) -> dict[str, Any]:
    """공개 입력 shape → products row. 썸네일은 null 없이 빈 문자열로 저장"""
    path = (data.thumbnail_path or "").strip()
    url = (data.thumbnail_url or "").strip()
    return {
        "title": data.title.strip(),
        "subtitle": data.subtitle,
        "region": data.region,
        "nights": clamp_int(data.nights),
        "days": clamp_int(data.days),
        "status": data.status,
        "price_text": data.price_text,
        "description": data.description,
        "thumbnail_path": path,
        # 정책 유지: path가 있으면 url 칼럼에도 path 저장
        "thumbnail_url": path or url,
        "images": list(data.images),
        "included": list(data.included),
        "excluded": list(data.excluded),
        "notices": list(data.notices),
        "itinerary": [d.model_dump(by_alias=True) for d in data.itinerary],
        "departures": [d.model_dump(by_alias=True) for d in data.departures],
        "theme_id": data.theme_id or None,
        "area_id": data.area_id or None,
    }


def row_to_product(row: dict[str, Any], display_url: str = "") -> Product:
    return Product(
        id=str(row["id"]),
        title=row.get("title") or "",
        subtitle=row.get("subtitle") or "",
        region=row.get("region"),
        nights=clamp_int(row.get("nights")),
        days=clamp_int(row.get("days")),
        status=row.get("status") or "DRAFT",
        price_text=row.get("price_text"),
        description=row.get("description") or "",
        thumbnail_url=display_url,
        thumbnail_path=str(row.get("thumbnail_path") or ""),
        images=row.get("images") or [],
        included=row.get("included") or [],
        excluded=row.get("excluded") or [],
        notices=row.get("notices") or [],
        itinerary=row.get("itinerary") or [],
        departures=row.get("departures") or [],
        theme_id=str(row["theme_id"]) if row.get("theme_id") else None,
        area_id=str(row["area_id"]) if row.get("area_id") else None,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class CatalogService:
    def __init__(self, client: AsyncClient, storage: Optional[StorageService] = None):
        self.client = client
        self.storage = storage or thumbnail_storage(client)

    async def _to_products(self, rows: list[dict[str, Any]]) -> list[Product]:
        # 행마다 썸네일 해석을 동시에 수행. 개별 실패는 빈 URL로 처리
        urls = await asyncio.gather(
            *(self.storage.resolve_signed_url(stored_thumbnail_ref(r)) for r in rows),
            return_exceptions=True,
        )
        out: list[Product] = []
        for row, url in zip(rows, urls):
            if isinstance(url, BaseException):
                logger.warning(f"상품 썸네일 해석 실패 (product={row.get('id')}): {url}")
                url = ""
            out.append(row_to_product(row, url))
        return out

    async def list_products(self, filters: Optional[ProductFilter] = None) -> list[Product]:
        filters = filters or ProductFilter()
        query = self.client.table(PRODUCT_TABLE).select("*").order("updated_at", desc=True)

        keyword = search_term(filters.text)
        if keyword:
            query = query.or_(ilike_any(["title", "subtitle"], keyword))

        if not is_all_region(filters.region):
            query = query.eq("region", filters.region.strip())

        if filters.status:
            query = query.eq("status", filters.status)

        response = await query.execute()
        return await self._to_products(rows_of(response))

    async def search_published_products(self, q: Optional[str], limit: Optional[int] = None) -> list[Product]:
        """고객 검색: 게시된 상품만, 검색어가 비어 있으면 조회하지 않음"""
        keyword = search_term(q)
        if not keyword:
            return []

        response = await (
            self.client.table(PRODUCT_TABLE)
            .select("*")
            .eq("status", "PUBLISHED")
            .or_(ilike_any(["title", "subtitle"], keyword))
            .order("updated_at", desc=True)
            .limit(limit or settings.product_search_limit)
            .execute()
        )
        return await self._to_products(rows_of(response))

    async def get_product(self, product_id: str, published_only: bool = False) -> Optional[Product]:
        query = self.client.table(PRODUCT_TABLE).select("*").eq("id", product_id)
        if published_only:
            query = query.eq("status", "PUBLISHED")
        row = first_row(await query.limit(1).execute())
        if row is None:
            return None
        products = await self._to_products([row])
        return products[0]

    async def create_product(self, data: ProductUpsert) -> Product:
        now = utc_now_iso()
        payload = {**product_to_row(data), "created_at": now, "updated_at": now}
        response = await self.client.table(PRODUCT_TABLE).insert(payload).execute()
        row = first_row(response)
        if row is None:
            raise RuntimeError("상품 생성 응답에 데이터가 없습니다")
        logger.info(f"상품 생성: {row['id']} ({data.title})")
        products = await self._to_products([row])
        return products[0]

    async def update_product(self, product_id: str, data: ProductUpsert) -> Optional[Product]:
        payload = {**product_to_row(data), "updated_at": utc_now_iso()}
        response = await self.client.table(PRODUCT_TABLE).update(payload).eq("id", product_id).execute()
        row = first_row(response)
        if row is None:
            return None
        logger.info(f"상품 수정: {product_id} (status={data.status})")
        products = await self._to_products([row])
        return products[0]

    async def delete_product(self, product_id: str) -> bool:
        # 없는 id 삭제도 성공으로 취급 (영향 row 0)
        await self.client.table(PRODUCT_TABLE).delete().eq("id", product_id).execute()
        logger.info(f"상품 삭제: {product_id}")
        return True

    async def list_theme_products(self, slug: str, area_id: Optional[str] = None) -> Optional[ThemeProducts]:
        """고객 테마 페이지: slug로 테마를 찾고 DRAFT가 아닌 상품만 반환"""
        theme = await TaxonomyService(self.client).get_theme_by_slug(slug)
        if theme is None:
            return None

        query = (
            self.client.table(PRODUCT_TABLE)
            .select("*")
            .eq("theme_id", theme.id)
            .neq("status", "DRAFT")
            .order("updated_at", desc=True)
        )
        if area_id:
            query = query.eq("area_id", area_id)

        response = await query.execute()
        return ThemeProducts(theme=theme, products=await self._to_products(rows_of(response)))

    async def upload_thumbnail(self, file_content: bytes, filename: str, content_type: str | None = None) -> str:
        return await self.storage.upload(file_content, filename, "thumb", content_type)
