"""
찜/공지/문의 스키마.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

NoticeTab = Literal["ALL", "PINNED", "NORMAL"]
PublishedFilter = Literal["ALL", "Y", "N"]
InquiryStatus = Literal["NEW", "IN_PROGRESS", "DONE"]


class FavoriteProduct(BaseModel):
    id: str
    title: str = ""
    price_text: Optional[str] = None
    thumbnail_url: Optional[str] = None
    thumbnail_path: Optional[str] = None
    region: Optional[str] = None
    display_thumbnail_url: str = ""


class MyFavoriteRow(BaseModel):
    id: str  # product_favorites.id
    product_id: str
    created_at: datetime
    created_at_kst: Optional[str] = None
    product: Optional[FavoriteProduct] = None


class FavoriteState(BaseModel):
    product_id: str
    favorited: bool


class NoticeListItem(BaseModel):
    id: str
    title: str
    category: str = "일반"
    is_pinned: bool = False
    is_published: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Notice(NoticeListItem):
    content: str = ""


class NoticePage(BaseModel):
    rows: List[NoticeListItem]
    count: int


class NoticeCreate(BaseModel):
    title: str = Field(min_length=1)
    content: str = ""
    category: Optional[str] = None
    is_pinned: bool = False
    is_published: bool = True


class NoticePatch(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    is_pinned: Optional[bool] = None
    is_published: Optional[bool] = None

    @field_validator("title", "content", "category", "is_pinned", "is_published")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} 는 null 로 변경할 수 없습니다")
        return v


class InquiryCreate(BaseModel):
    contact_name: str = Field(min_length=1)
    contact_phone: str = Field(min_length=1)
    contact_email: Optional[str] = None
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class InquiryRow(BaseModel):
    id: str
    user_id: Optional[str] = None
    contact_name: str
    contact_phone: str
    contact_email: Optional[str] = None
    title: str
    content: str
    status: InquiryStatus = "NEW"
    memo_admin: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class InquiryPatch(BaseModel):
    """관리자 수정 가능 필드. 제목/내용은 생성 후 변경 불가"""
    status: Optional[InquiryStatus] = None
    memo_admin: Optional[str] = None

    @field_validator("status")
    @classmethod
    def reject_null_status(cls, v):
        if v is None:
            raise ValueError("status 는 null 로 변경할 수 없습니다")
        return v
