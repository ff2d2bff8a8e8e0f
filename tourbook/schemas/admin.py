from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class AdminUserFilter(BaseModel):
    q: Optional[str] = None  # email/name/phone 부분검색
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class AdminUserRow(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    country_code: Optional[str] = None
    preferred_lang: Optional[str] = None
    marketing_opt_in: bool = False
    created_at: Optional[datetime] = None

    booking_count: int = 0
    favorite_count: int = 0
    last_booking_at: Optional[datetime] = None


class AdminUsersSummary(BaseModel):
    total_users: int = 0
    today_new_users: int = 0
    marketing_opt_in_users: int = 0


class AdminUserProfile(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    country_code: Optional[str] = None
    preferred_lang: Optional[str] = None
    marketing_opt_in: bool = False
    marketing_opt_in_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdminUserBookingRow(BaseModel):
    id: str
    product_id: str
    product_title: str = ""
    status: str
    travel_date: Optional[date] = None
    people_count: int = 1
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    memo_user: Optional[str] = None
    memo_admin: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdminUserFavoriteRow(BaseModel):
    id: str
    product_id: str
    product_title: str = ""
    created_at: Optional[datetime] = None
