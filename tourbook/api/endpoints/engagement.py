"""
찜/공지/문의 엔드포인트.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import AsyncClient

from tourbook.api.deps import get_current_user, get_optional_user, require_admin
from tourbook.schemas.engagement import (
    FavoriteState,
    InquiryCreate,
    InquiryPatch,
    InquiryRow,
    MyFavoriteRow,
    Notice,
    NoticeCreate,
    NoticePage,
    NoticePatch,
    NoticeTab,
    PublishedFilter,
)
from tourbook.services.auth_service import AuthUser
from tourbook.services.favorite_service import FavoriteService
from tourbook.services.inquiry_service import InquiryService
from tourbook.services.notice_service import NoticeService
from tourbook.supabase_client import get_client

favorites_router = APIRouter()
notices_router = APIRouter()
inquiries_router = APIRouter()


# ---- favorites ----

@favorites_router.get("/me", response_model=List[MyFavoriteRow])
async def list_my_favorites(user: AuthUser = Depends(get_current_user), client: AsyncClient = Depends(get_client)):
    return await FavoriteService(client).list_my_favorites(user.id)


@favorites_router.get("/{product_id}", response_model=FavoriteState)
async def get_favorite_state(
    product_id: str,
    user: AuthUser = Depends(get_current_user),
    client: AsyncClient = Depends(get_client),
):
    favorited = await FavoriteService(client).is_favorited(product_id, user.id)
    return FavoriteState(product_id=product_id, favorited=favorited)


@favorites_router.put("/{product_id}", response_model=FavoriteState)
async def add_favorite(
    product_id: str,
    user: AuthUser = Depends(get_current_user),
    client: AsyncClient = Depends(get_client),
):
    await FavoriteService(client).add_favorite(product_id, user.id)
    return FavoriteState(product_id=product_id, favorited=True)


@favorites_router.delete("/{product_id}", response_model=FavoriteState)
async def remove_favorite(
    product_id: str,
    user: AuthUser = Depends(get_current_user),
    client: AsyncClient = Depends(get_client),
):
    await FavoriteService(client).remove_favorite(product_id, user.id)
    return FavoriteState(product_id=product_id, favorited=False)


# ---- notices ----

@notices_router.get("", response_model=NoticePage)
async def list_notices(
    client: AsyncClient = Depends(get_client),
    q: str | None = Query(default=None),
    tab: NoticeTab = Query(default="ALL"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
):
    return await NoticeService(client).list_notices(q=q, tab=tab, page=page, limit=limit)


@notices_router.get("/admin/list", response_model=NoticePage, dependencies=[Depends(require_admin)])
async def admin_list_notices(
    client: AsyncClient = Depends(get_client),
    q: str | None = Query(default=None),
    published: PublishedFilter = Query(default="ALL"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
):
    return await NoticeService(client).admin_list_notices(q=q, published=published, page=page, limit=limit)


@notices_router.get("/admin/{notice_id}", response_model=Notice, dependencies=[Depends(require_admin)])
async def admin_get_notice(notice_id: str, client: AsyncClient = Depends(get_client)):
    notice = await NoticeService(client).get_notice(notice_id)
    if notice is None:
        raise HTTPException(status_code=404, detail="공지를 찾을 수 없습니다")
    return notice


@notices_router.get("/{notice_id}", response_model=Notice)
async def get_notice(notice_id: str, client: AsyncClient = Depends(get_client)):
    notice = await NoticeService(client).get_notice(notice_id, published_only=True)
    if notice is None:
        raise HTTPException(status_code=404, detail="공지를 찾을 수 없습니다")
    return notice


@notices_router.post("/admin", status_code=201, dependencies=[Depends(require_admin)])
async def create_notice(payload: NoticeCreate, client: AsyncClient = Depends(get_client)) -> dict:
    return {"id": await NoticeService(client).create_notice(payload)}


@notices_router.patch("/admin/{notice_id}", dependencies=[Depends(require_admin)])
async def update_notice(notice_id: str, patch: NoticePatch, client: AsyncClient = Depends(get_client)) -> dict:
    if not await NoticeService(client).update_notice(notice_id, patch):
        raise HTTPException(status_code=404, detail="공지를 찾을 수 없습니다")
    return {"ok": True}


@notices_router.delete("/admin/{notice_id}", dependencies=[Depends(require_admin)])
async def delete_notice(notice_id: str, client: AsyncClient = Depends(get_client)) -> dict:
    await NoticeService(client).delete_notice(notice_id)
    return {"ok": True}


# ---- inquiries ----

@inquiries_router.post("", status_code=201)
async def create_inquiry(
    payload: InquiryCreate,
    user: AuthUser | None = Depends(get_optional_user),
    client: AsyncClient = Depends(get_client),
) -> dict:
    await InquiryService(client).create_inquiry(payload, user_id=user.id if user else None)
    return {"ok": True}


@inquiries_router.get("/admin", response_model=List[InquiryRow], dependencies=[Depends(require_admin)])
async def admin_list_inquiries(
    client: AsyncClient = Depends(get_client),
    limit: int | None = Query(default=None, ge=1, le=1000),
):
    return await InquiryService(client).admin_list_inquiries(limit)


@inquiries_router.patch("/admin/{inquiry_id}", dependencies=[Depends(require_admin)])
async def admin_update_inquiry(inquiry_id: str, patch: InquiryPatch, client: AsyncClient = Depends(get_client)) -> dict:
    if not await InquiryService(client).admin_update_inquiry(inquiry_id, patch):
        raise HTTPException(status_code=404, detail="문의를 찾을 수 없습니다")
    return {"ok": True}
