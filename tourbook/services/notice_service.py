"""
공지사항 서비스.

- 고객용 목록: 게시(is_published=true)만, 상단고정/일반 탭 필터
- 관리자 목록: 게시 여부 Y/N/ALL 필터
둘 다 상단고정 우선 → 최신순, 제목 검색, 정확한 전체 건수 반환.
"""
import logging
from typing import Optional

from supabase import AsyncClient

from tourbook.schemas.engagement import Notice, NoticeCreate, NoticeListItem, NoticePage, NoticePatch
from tourbook.services.query_utils import first_row, like_pattern, page_range, rows_of, search_term, utc_now_iso
from tourbook.settings import settings

logger = logging.getLogger(__name__)

NOTICE_TABLE = "notices"
LIST_COLUMNS = "id,title,category,is_pinned,is_published,created_at,updated_at"
DETAIL_COLUMNS = "id,title,content,category,is_pinned,is_published,created_at,updated_at"
DEFAULT_CATEGORY = "일반"


class NoticeService:
    def __init__(self, client: AsyncClient):
        self.client = client

    def _list_query(self, q: Optional[str], page: int, limit: int):
        start, end = page_range(page, limit)
        query = (
            self.client.table(NOTICE_TABLE)
            .select(LIST_COLUMNS, count="exact")
            .order("is_pinned", desc=True)
            .order("created_at", desc=True)
            .range(start, end)
        )
        keyword = search_term(q)
        if keyword:
            query = query.ilike("title", like_pattern(keyword))
        return query

    async def list_notices(
        self,
        q: Optional[str] = None,
        tab: str = "ALL",
        page: int = 1,
        limit: Optional[int] = None,
    ) -> NoticePage:
        query = self._list_query(q, page, limit or settings.notice_page_size).eq("is_published", True)
        if tab == "PINNED":
            query = query.eq("is_pinned", True)
        elif tab == "NORMAL":
            query = query.eq("is_pinned", False)

        response = await query.execute()
        return NoticePage(rows=[NoticeListItem(**r) for r in rows_of(response)], count=response.count or 0)

    async def admin_list_notices(
        self,
        q: Optional[str] = None,
        published: str = "ALL",
        page: int = 1,
        limit: Optional[int] = None,
    ) -> NoticePage:
        query = self._list_query(q, page, limit or settings.admin_notice_page_size)
        if published == "Y":
            query = query.eq("is_published", True)
        elif published == "N":
            query = query.eq("is_published", False)

        response = await query.execute()
        return NoticePage(rows=[NoticeListItem(**r) for r in rows_of(response)], count=response.count or 0)

    async def get_notice(self, notice_id: str, published_only: bool = False) -> Optional[Notice]:
        query = self.client.table(NOTICE_TABLE).select(DETAIL_COLUMNS).eq("id", notice_id)
        if published_only:
            query = query.eq("is_published", True)
        response = await query.limit(1).execute()
        row = first_row(response)
        return Notice(**row) if row else None

    async def create_notice(self, payload: NoticeCreate) -> str:
        now = utc_now_iso()
        data = {
            "title": payload.title,
            "content": payload.content or "",
            "category": payload.category or DEFAULT_CATEGORY,
            "is_pinned": bool(payload.is_pinned),
            "is_published": payload.is_published,
            "created_at": now,
            "updated_at": now,
        }
        response = await self.client.table(NOTICE_TABLE).insert(data).execute()
        row = first_row(response)
        logger.info(f"공지 등록: {row['id']} ({payload.title})")
        return str(row["id"])

    async def update_notice(self, notice_id: str, patch: NoticePatch) -> bool:
        data = patch.model_dump(exclude_unset=True)
        data["updated_at"] = utc_now_iso()
        response = await self.client.table(NOTICE_TABLE).update(data).eq("id", notice_id).execute()
        return bool(rows_of(response))

    async def delete_notice(self, notice_id: str) -> bool:
        await self.client.table(NOTICE_TABLE).delete().eq("id", notice_id).execute()
        logger.info(f"공지 삭제: {notice_id}")
        return True
