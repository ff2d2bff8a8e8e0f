from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ProductStatus = Literal["DRAFT", "PUBLISHED", "HIDDEN"]
MealType = Literal["NONE", "INCLUDED", "NOT_INCLUDED"]
OfferType = Literal["NORMAL", "EVENT", "SPECIAL"]
DepartStatus = Literal["AVAILABLE", "CONFIRMED", "INQUIRY"]


# itinerary/departures 는 products 의 jsonb 컬럼에 camelCase 키로 저장되어 있음
class ItineraryRow(BaseModel):
    id: str
    place: str = ""
    transport: str = ""
    time: str = ""
    content: str = ""
    meal_morning: MealType = Field(default="NONE", alias="mealMorning")
    meal_lunch: MealType = Field(default="NONE", alias="mealLunch")
    meal_dinner: MealType = Field(default="NONE", alias="mealDinner")

    model_config = ConfigDict(populate_by_name=True)


class ItineraryDay(BaseModel):
    id: str
    day_no: int = Field(alias="dayNo", ge=1)
    title: str = ""
    date_text: str = Field(default="", alias="dateText")
    rows: List[ItineraryRow] = []

    model_config = ConfigDict(populate_by_name=True)


class Departure(BaseModel):
    id: str
    date_iso: str = Field(alias="dateISO", pattern=r"^\d{4}-\d{2}-\d{2}$")
    offer_type: OfferType = Field(default="NORMAL", alias="offerType")
    status: DepartStatus = "AVAILABLE"
    # INQUIRY 일 때는 의미 없음(0). 입력만 막고 값 검증은 하지 않는다
    price_adult: int = Field(default=0, alias="priceAdult")
    remain: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None
    note: str = ""

    model_config = ConfigDict(populate_by_name=True)


class ProductUpsert(BaseModel):
    """관리자 상품 생성/수정 입력 (편집 가능한 필드 전체)"""
    title: str
    subtitle: str = ""
    region: str = ""
    nights: int = 0
    days: int = 0
    status: ProductStatus = "DRAFT"
    price_text: str = ""
    description: str = ""
    thumbnail_url: str = ""  # 외부 URL
    thumbnail_path: str = ""  # 내부 스토리지 path
    images: List[str] = []
    included: List[str] = []
    excluded: List[str] = []
    notices: List[str] = []
    itinerary: List[ItineraryDay] = []
    departures: List[Departure] = []
    theme_id: Optional[str] = None
    area_id: Optional[str] = None


class Product(BaseModel):
    id: str
    title: str
    subtitle: str = ""
    region: Optional[str] = None
    nights: int = 0
    days: int = 0
    status: ProductStatus = "DRAFT"
    price_text: Optional[str] = None
    description: str = ""
    thumbnail_url: str = ""  # 화면 표시용 (signed url / 외부 URL)
    thumbnail_path: str = ""  # 저장된 원본 참조
    images: List[str] = []
    included: List[str] = []
    excluded: List[str] = []
    notices: List[str] = []
    itinerary: List[ItineraryDay] = []
    departures: List[Departure] = []
    theme_id: Optional[str] = None
    area_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductFilter(BaseModel):
    """상품 목록 필터. 화면 간 공유 상태 대신 호출마다 명시적으로 전달한다."""
    text: Optional[str] = None
    region: Optional[str] = None
    status: Optional[ProductStatus] = None


class ThemeRow(BaseModel):
    id: str
    name: str
    slug: str
    sort_order: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ThemeUpsert(BaseModel):
    name: str = Field(min_length=1)
    slug: str = ""  # 비어 있으면 name 으로 생성
    sort_order: int = 0
    is_active: bool = True


class AreaRow(BaseModel):
    id: str
    theme_id: Optional[str] = None
    name: str
    slug: str
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AreaCreate(BaseModel):
    theme_id: str
    name: str = Field(min_length=1)
    slug: str = ""
    sort_order: int = 0
    is_active: bool = True


class AreaPatch(BaseModel):
    theme_id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("theme_id", "name", "slug")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} 는 null 로 변경할 수 없습니다")
        return v


class ThemeProducts(BaseModel):
    theme: ThemeRow
    products: List[Product]
