from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import AsyncClient

from tourbook.api.deps import require_admin
from tourbook.schemas.admin import (
    AdminUserBookingRow,
    AdminUserFavoriteRow,
    AdminUserFilter,
    AdminUserProfile,
    AdminUserRow,
    AdminUsersSummary,
)
from tourbook.services.admin_user_service import AdminUserService
from tourbook.settings import settings
from tourbook.supabase_client import get_client

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/summary", response_model=AdminUsersSummary)
async def get_admin_users_summary(client: AsyncClient = Depends(get_client)):
    return await AdminUserService(client).fetch_admin_users_summary()


@router.get("", response_model=List[AdminUserRow])
async def list_admin_users(
    client: AsyncClient = Depends(get_client),
    q: str | None = Query(default=None),
    limit: int = Query(default=settings.admin_users_page_size, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
):
    return await AdminUserService(client).list_admin_users(AdminUserFilter(q=q, limit=limit, offset=offset))


@router.get("/{user_id}", response_model=AdminUserProfile)
async def get_admin_user_profile(user_id: str, client: AsyncClient = Depends(get_client)):
    profile = await AdminUserService(client).get_admin_user_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="회원을 찾을 수 없습니다")
    return profile


@router.get("/{user_id}/bookings", response_model=List[AdminUserBookingRow])
async def list_admin_user_bookings(user_id: str, client: AsyncClient = Depends(get_client)):
    return await AdminUserService(client).list_admin_user_bookings(user_id)


@router.get("/{user_id}/favorites", response_model=List[AdminUserFavoriteRow])
async def list_admin_user_favorites(user_id: str, client: AsyncClient = Depends(get_client)):
    return await AdminUserService(client).list_admin_user_favorites(user_id)
