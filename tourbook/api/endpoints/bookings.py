from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import AsyncClient

from tourbook.api.deps import get_current_user, require_admin
from tourbook.schemas.booking import (
    BookingAdminPatch,
    BookingCreated,
    BookingPage,
    BookingStatus,
    CreateBookingPayload,
    MyBookingRow,
)
from tourbook.services.auth_service import AuthUser
from tourbook.services.booking_service import BookingService
from tourbook.settings import settings
from tourbook.supabase_client import get_client

router = APIRouter()


@router.post("", response_model=BookingCreated, status_code=201)
async def create_booking(
    payload: CreateBookingPayload,
    user: AuthUser = Depends(get_current_user),
    client: AsyncClient = Depends(get_client),
):
    booking_id = await BookingService(client).create_booking(user.id, payload)
    return BookingCreated(id=booking_id)


@router.get("/me", response_model=List[MyBookingRow])
async def get_my_bookings(user: AuthUser = Depends(get_current_user), client: AsyncClient = Depends(get_client)):
    return await BookingService(client).get_my_bookings(user.id)


@router.post("/{booking_id}/cancel")
async def cancel_my_booking(
    booking_id: str,
    user: AuthUser = Depends(get_current_user),
    client: AsyncClient = Depends(get_client),
) -> dict:
    if not await BookingService(client).cancel_my_booking(booking_id, user.id):
        # 없음/본인 아님 구분하지 않음
        raise HTTPException(status_code=404, detail="취소할 예약을 찾을 수 없습니다")
    return {"ok": True}


@router.get("/admin", response_model=BookingPage, dependencies=[Depends(require_admin)])
async def get_admin_bookings(
    client: AsyncClient = Depends(get_client),
    status: BookingStatus | None = Query(default=None),
    limit: int = Query(default=settings.admin_bookings_page_size, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
):
    return await BookingService(client).get_admin_bookings(status, limit=limit, offset=offset)


@router.patch("/admin/{booking_id}", dependencies=[Depends(require_admin)])
async def update_booking_admin(
    booking_id: str,
    patch: BookingAdminPatch,
    client: AsyncClient = Depends(get_client),
) -> dict:
    updated = await BookingService(client).update_booking_admin(booking_id, patch)
    if updated is None:
        raise HTTPException(status_code=404, detail="예약을 찾을 수 없습니다")
    return {"id": updated}
