"""
관리자 회원 조회/집계 서비스.

회원 목록은 N+2 쿼리로 구성합니다.
1) profiles 한 페이지 조회
2) 해당 페이지 user_id 들의 bookings 일괄 조회
3) 해당 페이지 user_id 들의 product_favorites 일괄 조회
이후 메모리에서 user_id 기준으로 접어서(fold) 프로필 row에 합칩니다.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from supabase import AsyncClient

from tourbook.schemas.admin import (
    AdminUserBookingRow,
    AdminUserFavoriteRow,
    AdminUserFilter,
    AdminUserProfile,
    AdminUserRow,
    AdminUsersSummary,
)
from tourbook.services.query_utils import first_row, ilike_any, normalize_embedded, parse_timestamp, rows_of, search_term
from tourbook.settings import settings

PROFILE_LIST_COLUMNS = "user_id,email,name,phone,country_code,preferred_lang,marketing_opt_in,created_at"
PROFILE_DETAIL_COLUMNS = (
    "user_id,email,name,phone,birth_date,country_code,preferred_lang,"
    "marketing_opt_in,marketing_opt_in_at,created_at,updated_at"
)


@dataclass
class _BookingStat:
    count: int = 0
    last: Optional[datetime] = None


def _parse_ts(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return parse_timestamp(value)


def fold_booking_stats(rows: list[dict[str, Any]]) -> dict[str, _BookingStat]:
    stats: dict[str, _BookingStat] = {}
    for row in rows:
        stat = stats.setdefault(str(row["user_id"]), _BookingStat())
        stat.count += 1
        ts = _parse_ts(row.get("created_at"))
        if ts is not None and (stat.last is None or ts > stat.last):
            stat.last = ts
    return stats


def fold_favorite_counts(rows: list[dict[str, Any]]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for row in rows:
        key = str(row["user_id"])
        counts[key] = counts.get(key, 0) + 1
    return counts


class AdminUserService:
    def __init__(self, client: AsyncClient):
        self.client = client

    async def is_admin(self, user_id: str) -> bool:
        """admin_users 화이트리스트에 있으면 관리자"""
        if not user_id:
            return False
        response = await self.client.table("admin_users").select("user_id").eq("user_id", user_id).limit(1).execute()
        row = first_row(response)
        return bool(row and row.get("user_id"))

    async def fetch_admin_users_summary(self) -> AdminUsersSummary:
        response = await self.client.rpc("admin_users_summary").execute()
        row = first_row(response) or {}
        return AdminUsersSummary(
            total_users=int(row.get("total_users") or 0),
            today_new_users=int(row.get("today_new_users") or 0),
            marketing_opt_in_users=int(row.get("marketing_opt_in_users") or 0),
        )

    async def list_admin_users(self, filters: Optional[AdminUserFilter] = None) -> list[AdminUserRow]:
        filters = filters or AdminUserFilter(limit=settings.admin_users_page_size)

        query = (
            self.client.table("profiles")
            .select(PROFILE_LIST_COLUMNS)
            .order("created_at", desc=True)
            .range(filters.offset, filters.offset + filters.limit - 1)
        )
        keyword = search_term(filters.q)
        if keyword:
            query = query.or_(ilike_any(["email", "name", "phone"], keyword))

        profiles = rows_of(await query.execute())
        user_ids = [str(p["user_id"]) for p in profiles]
        if not user_ids:
            return []

        bookings = rows_of(
            await self.client.table("bookings").select("user_id, created_at").in_("user_id", user_ids).execute()
        )
        favorites = rows_of(
            await self.client.table("product_favorites").select("user_id, created_at").in_("user_id", user_ids).execute()
        )

        booking_stats = fold_booking_stats(bookings)
        favorite_counts = fold_favorite_counts(favorites)

        out: list[AdminUserRow] = []
        for p in profiles:
            uid = str(p["user_id"])
            stat = booking_stats.get(uid, _BookingStat())
            out.append(
                AdminUserRow(
                    **{**p, "user_id": uid},
                    booking_count=stat.count,
                    favorite_count=favorite_counts.get(uid, 0),
                    last_booking_at=stat.last,
                )
            )
        return out

    async def get_admin_user_profile(self, user_id: str) -> Optional[AdminUserProfile]:
        response = await self.client.table("profiles").select(PROFILE_DETAIL_COLUMNS).eq("user_id", user_id).limit(1).execute()
        row = first_row(response)
        return AdminUserProfile(**{**row, "user_id": str(row["user_id"])}) if row else None

    async def list_admin_user_bookings(self, user_id: str) -> list[AdminUserBookingRow]:
        response = await (
            self.client.table("bookings")
            .select(
                "id,user_id,product_id,status,travel_date,people_count,contact_name,contact_phone,"
                "memo_user,memo_admin,created_at,updated_at, products(title)"
            )
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(settings.admin_user_detail_limit)
            .execute()
        )
        out: list[AdminUserBookingRow] = []
        for r in rows_of(response):
            product = normalize_embedded(r.get("products")) or {}
            out.append(
                AdminUserBookingRow(
                    id=str(r["id"]),
                    product_id=str(r["product_id"]),
                    product_title=product.get("title") or "",
                    status=r["status"],
                    travel_date=r.get("travel_date"),
                    people_count=r.get("people_count") or 1,
                    contact_name=r.get("contact_name"),
                    contact_phone=r.get("contact_phone"),
                    memo_user=r.get("memo_user"),
                    memo_admin=r.get("memo_admin"),
                    created_at=r.get("created_at"),
                    updated_at=r.get("updated_at"),
                )
            )
        return out

    async def list_admin_user_favorites(self, user_id: str) -> list[AdminUserFavoriteRow]:
        response = await (
            self.client.table("product_favorites")
            .select("id,user_id,product_id,created_at, products(title)")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(settings.admin_user_detail_limit)
            .execute()
        )
        return [
            AdminUserFavoriteRow(
                id=str(r["id"]),
                product_id=str(r["product_id"]),
                product_title=(normalize_embedded(r.get("products")) or {}).get("title") or "",
                created_at=r.get("created_at"),
            )
            for r in rows_of(response)
        ]
