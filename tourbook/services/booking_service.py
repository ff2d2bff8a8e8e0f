"""
예약 라이프사이클 서비스.

- 생성: 고객 본인만, 초기 상태는 항상 REQUESTED
- 관리자 수정: status / memo_admin 부분 수정 (전이 규칙 없음)
- 고객 취소: id + user_id 동시 매칭으로만 CANCELLED 처리 (삭제하지 않음)

오류는 감싸지 않고 그대로 올려보내며 재시도하지 않습니다.
"""
import asyncio
import logging
from typing import Any, Optional

from supabase import AsyncClient

from tourbook.schemas.booking import (
    AdminBookingRow,
    BookingAdminPatch,
    BookingPage,
    BookingProduct,
    BookingProfile,
    CreateBookingPayload,
    MyBookingRow,
)
from tourbook.services.query_utils import first_row, normalize_embedded, rows_of, utc_now_iso
from tourbook.services.storage_service import StorageService, thumbnail_storage
from tourbook.settings import settings

logger = logging.getLogger(__name__)

BOOKING_TABLE = "bookings"
INITIAL_STATUS = "REQUESTED"

_PRODUCT_EMBED = "products:product_id ( id, title, region, thumbnail_path, thumbnail_url )"
_PROFILE_EMBED = "profiles:user_id ( user_id, email, name, phone )"
MY_BOOKING_COLUMNS = f"id, status, travel_date, people_count, created_at, {_PRODUCT_EMBED}"
ADMIN_BOOKING_COLUMNS = (
    "id, status, travel_date, people_count, contact_name, contact_phone, memo_user, memo_admin, created_at, "
    f"{_PRODUCT_EMBED}, {_PROFILE_EMBED}"
)


class BookingService:
    def __init__(self, client: AsyncClient, storage: Optional[StorageService] = None):
        self.client = client
        self.storage = storage or thumbnail_storage(client)

    async def _embedded_product(self, row: dict[str, Any]) -> Optional[BookingProduct]:
        product = normalize_embedded(row.get("products"))
        if product is None:
            return None
        ref = product.get("thumbnail_path") or product.get("thumbnail_url")
        display = await self.storage.resolve_or_blank(ref)
        return BookingProduct(**{**product, "id": str(product["id"]), "display_thumbnail_url": display})

    async def create_booking(self, user_id: str, payload: CreateBookingPayload) -> str:
        data = payload.model_dump(mode="json")
        data["user_id"] = user_id
        # 초기 상태는 서버가 결정 (payload의 status는 무시)
        data["status"] = INITIAL_STATUS

        response = await self.client.table(BOOKING_TABLE).insert(data).execute()
        row = first_row(response)
        if row is None:
            raise RuntimeError("예약 생성 응답에 id가 없습니다")
        logger.info(f"예약 접수: {row['id']} (user={user_id}, product={payload.product_id})")
        return str(row["id"])

    async def get_my_bookings(self, user_id: str) -> list[MyBookingRow]:
        response = await (
            self.client.table(BOOKING_TABLE)
            .select(MY_BOOKING_COLUMNS)
            .eq("user_id", user_id)
            .neq("status", "CANCELLED")
            .order("created_at", desc=True)
            .execute()
        )
        rows = rows_of(response)
        products = await asyncio.gather(*(self._embedded_product(r) for r in rows))
        return [
            MyBookingRow(
                id=str(r["id"]),
                status=r["status"],
                travel_date=r.get("travel_date"),
                people_count=r.get("people_count") or 1,
                created_at=r.get("created_at"),
                product=p,
            )
            for r, p in zip(rows, products)
        ]

    async def get_admin_bookings(
        self,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> BookingPage:
        limit = limit or settings.admin_bookings_page_size
        query = (
            self.client.table(BOOKING_TABLE)
            .select(ADMIN_BOOKING_COLUMNS, count="exact")
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
        )
        if status:
            query = query.eq("status", status)

        response = await query.execute()
        rows = rows_of(response)
        products = await asyncio.gather(*(self._embedded_product(r) for r in rows))

        out: list[AdminBookingRow] = []
        for r, product in zip(rows, products):
            profile = normalize_embedded(r.get("profiles"))
            out.append(
                AdminBookingRow(
                    id=str(r["id"]),
                    status=r["status"],
                    travel_date=r.get("travel_date"),
                    people_count=r.get("people_count") or 1,
                    contact_name=r.get("contact_name"),
                    contact_phone=r.get("contact_phone"),
                    memo_user=r.get("memo_user"),
                    memo_admin=r.get("memo_admin"),
                    created_at=r.get("created_at"),
                    product=product,
                    profile=BookingProfile(**{**profile, "user_id": str(profile["user_id"])}) if profile else None,
                )
            )

        count = response.count if response.count is not None else len(out)
        return BookingPage(rows=out, count=count)

    async def update_booking_admin(self, booking_id: str, patch: BookingAdminPatch) -> Optional[str]:
        """전이 검증 없이 덮어쓴다. 매칭된 row가 없으면 None"""
        data = patch.model_dump(exclude_unset=True)
        data["updated_at"] = utc_now_iso()

        response = await self.client.table(BOOKING_TABLE).update(data).eq("id", booking_id).execute()
        row = first_row(response)
        if row is None:
            return None
        logger.info(f"예약 관리자 수정: {booking_id} ({', '.join(k for k in data if k != 'updated_at')})")
        return str(row["id"])

    async def cancel_my_booking(self, booking_id: str, user_id: str) -> bool:
        """
        본인 예약 취소.

        id와 user_id를 같은 조건으로 묶어 수정하므로 남의 예약이면 0건 수정 → False.
        (없음/권한없음을 구분하지 않음)
        """
        response = await (
            self.client.table(BOOKING_TABLE)
            .update({"status": "CANCELLED", "updated_at": utc_now_iso()})
            .eq("id", booking_id)
            .eq("user_id", user_id)
            .execute()
        )
        cancelled = bool(rows_of(response))
        if cancelled:
            logger.info(f"예약 고객 취소: {booking_id} (user={user_id})")
        return cancelled
