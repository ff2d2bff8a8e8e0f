import asyncio
import logging
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from supabase import AsyncClient

from tourbook.schemas.engagement import FavoriteProduct, MyFavoriteRow
from tourbook.services.query_utils import first_row, normalize_embedded, parse_timestamp, rows_of
from tourbook.services.storage_service import StorageService, thumbnail_storage

logger = logging.getLogger(__name__)

FAVORITE_TABLE = "product_favorites"
KST = ZoneInfo("Asia/Seoul")
MY_FAVORITE_COLUMNS = (
    "id, product_id, created_at, "
    "products:product_id ( id, title, price_text, thumbnail_url, thumbnail_path, region )"
)


def to_kst_text(value: Any) -> Optional[str]:
    if not value:
        return None
    ts = value if isinstance(value, datetime) else parse_timestamp(value)
    return ts.astimezone(KST).strftime("%Y-%m-%d %H:%M")


class FavoriteService:
    """
    찜하기.

    추가 전 중복 확인을 하지 않습니다. (user, product) 유일성은 이 계층에서 보장하지 않음
    """

    def __init__(self, client: AsyncClient, storage: Optional[StorageService] = None):
        self.client = client
        self.storage = storage or thumbnail_storage(client)

    async def is_favorited(self, product_id: str, user_id: str) -> bool:
        response = await (
            self.client.table(FAVORITE_TABLE)
            .select("id")
            .eq("product_id", product_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        row = first_row(response)
        return bool(row and row.get("id"))

    async def add_favorite(self, product_id: str, user_id: str) -> bool:
        await self.client.table(FAVORITE_TABLE).insert({"product_id": product_id, "user_id": user_id}).execute()
        return True

    async def remove_favorite(self, product_id: str, user_id: str) -> bool:
        await (
            self.client.table(FAVORITE_TABLE)
            .delete()
            .eq("product_id", product_id)
            .eq("user_id", user_id)
            .execute()
        )
        return True

    async def _favorite_product(self, row: dict[str, Any]) -> Optional[FavoriteProduct]:
        product = normalize_embedded(row.get("products"))
        if product is None:
            return None
        display = await self.storage.resolve_or_blank(product.get("thumbnail_path") or product.get("thumbnail_url"))
        return FavoriteProduct(**{**product, "id": str(product["id"]), "display_thumbnail_url": display})

    async def list_my_favorites(self, user_id: str) -> list[MyFavoriteRow]:
        response = await (
            self.client.table(FAVORITE_TABLE)
            .select(MY_FAVORITE_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        rows = rows_of(response)
        products = await asyncio.gather(*(self._favorite_product(r) for r in rows))
        return [
            MyFavoriteRow(
                id=str(r["id"]),
                product_id=str(r["product_id"]),
                created_at=r["created_at"],
                created_at_kst=to_kst_text(r.get("created_at")),
                product=p,
            )
            for r, p in zip(rows, products)
        ]
