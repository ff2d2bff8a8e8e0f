from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    marketing_opt_in: bool = False
    marketing_opt_in_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    marketing_opt_in: bool = False


class HeroCard(BaseModel):
    id: str
    title: str
    price: str = ""
    img: str = ""
    badge: Optional[str] = None


class HeroSlide(BaseModel):
    id: str
    title: str  # 줄바꿈("\n") 포함 가능
    tags: str = ""
    hero_image: str = Field(default="", alias="heroImage")
    cards: List[HeroCard] = []

    model_config = ConfigDict(populate_by_name=True)


class Branding(BaseModel):
    logo_url: str = ""
    primary_color: str = ""


class AuthCredentials(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)


class AuthSession(BaseModel):
    user_id: Optional[str] = None
    email: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
