"""
Unit tests for CatalogService.

상품 저장 형태 변환, 목록 필터, 썸네일 해석 실패 시의 행 단위 강등을 검증합니다.
"""

import pytest

from tourbook.schemas.product import Departure, ItineraryDay, ProductFilter, ProductUpsert
from tourbook.services.catalog_service import (
    CatalogService,
    is_all_region,
    product_to_row,
    row_to_product,
    stored_thumbnail_ref,
)


def _upsert(**overrides) -> ProductUpsert:
    data = {"title": "  제주 3일  ", "region": "제주", "nights": 2, "days": 3, "status": "PUBLISHED"}
    data.update(overrides)
    return ProductUpsert(**data)


@pytest.mark.unit
class TestRowConversion:
    def test_path_wins_and_is_mirrored_into_url_column(self):
        row = product_to_row(_upsert(thumbnail_path="thumb/a.png", thumbnail_url="https://x.com/a.png"))
        assert row["thumbnail_path"] == "thumb/a.png"
        assert row["thumbnail_url"] == "thumb/a.png"

    def test_external_url_only(self):
        row = product_to_row(_upsert(thumbnail_url=" https://x.com/a.png "))
        assert row["thumbnail_path"] == ""
        assert row["thumbnail_url"] == "https://x.com/a.png"

    def test_no_thumbnail_stores_empty_strings(self):
        row = product_to_row(_upsert())
        assert row["thumbnail_path"] == ""
        assert row["thumbnail_url"] == ""

    def test_title_trimmed_and_counts_clamped(self):
        row = product_to_row(_upsert(nights=-3, days=4))
        assert row["title"] == "제주 3일"
        assert row["nights"] == 0
        assert row["days"] == 4

    def test_blank_taxonomy_ids_become_null(self):
        row = product_to_row(_upsert(theme_id="", area_id=""))
        assert row["theme_id"] is None
        assert row["area_id"] is None

    def test_nested_json_uses_camel_case_keys(self):
        row = product_to_row(
            _upsert(
                itinerary=[ItineraryDay(id="d1", day_no=1, title="1일차")],
                departures=[Departure(id="p1", date_iso="2026-05-01", price_adult=100000)],
            )
        )
        assert row["itinerary"][0]["dayNo"] == 1
        assert row["itinerary"][0]["dateText"] == ""
        assert row["departures"][0]["dateISO"] == "2026-05-01"
        assert row["departures"][0]["priceAdult"] == 100000

    def test_stored_ref_prefers_path(self):
        assert stored_thumbnail_ref({"thumbnail_path": "thumb/a.png", "thumbnail_url": "https://x"}) == "thumb/a.png"
        assert stored_thumbnail_ref({"thumbnail_path": "", "thumbnail_url": "https://x"}) == "https://x"
        assert stored_thumbnail_ref({"thumbnail_path": None, "thumbnail_url": None}) == ""

    def test_row_to_product_handles_missing_fields(self):
        product = row_to_product({"id": 7, "title": "t", "nights": None, "images": None}, "https://signed")
        assert product.id == "7"
        assert product.nights == 0
        assert product.images == []
        assert product.thumbnail_url == "https://signed"
        assert product.thumbnail_path == ""

    def test_all_region_values(self):
        for value in (None, "", "  ", "전체", "all", "ALL"):
            assert is_all_region(value)
        assert not is_all_region("제주")


@pytest.mark.unit
class TestCatalogQueries:
    async def test_list_filters_by_text_and_region(self, fake_client, thumb_storage):
        fake_client.seed("products", title="제주 올레길", subtitle="", region="제주")
        fake_client.seed("products", title="부산 야경", subtitle="해운대 포함", region="부산")
        fake_client.seed("products", title="서울 야경", subtitle="", region="서울")
        service = CatalogService(fake_client, thumb_storage)

        titles = [p.title for p in await service.list_products(ProductFilter(text="야경"))]
        assert titles == ["서울 야경", "부산 야경"]

        by_subtitle = await service.list_products(ProductFilter(text="해운대"))
        assert [p.title for p in by_subtitle] == ["부산 야경"]

        busan = await service.list_products(ProductFilter(text="야경", region="부산"))
        assert [p.title for p in busan] == ["부산 야경"]

        everything = await service.list_products(ProductFilter(region="전체"))
        assert len(everything) == 3

    async def test_text_search_is_literal(self, fake_client, thumb_storage):
        fake_client.seed("products", title="GOLF_TOUR 3일")
        fake_client.seed("products", title="GOLFXTOUR 4일")
        fake_client.seed("products", title="오사카, 교토 5일")
        fake_client.seed("products", title="할인 100% 특가")
        fake_client.seed("products", title="할인 1000 특가")
        service = CatalogService(fake_client, thumb_storage)

        async def titles(text):
            return [p.title for p in await service.list_products(ProductFilter(text=text))]

        assert await titles("golf_tour") == ["GOLF_TOUR 3일"]
        assert await titles("오사카, 교토") == ["오사카, 교토 5일"]
        assert await titles("100%") == ["할인 100% 특가"]
        assert await titles("(없음)") == []

    async def test_status_filter(self, fake_client, thumb_storage):
        fake_client.seed("products", title="draft", status="DRAFT")
        fake_client.seed("products", title="pub", status="PUBLISHED")
        service = CatalogService(fake_client, thumb_storage)

        assert [p.title for p in await service.list_products(ProductFilter(status="PUBLISHED"))] == ["pub"]

    async def test_search_published_products(self, fake_client, thumb_storage):
        fake_client.seed("products", title="제주 초안", status="DRAFT")
        fake_client.seed("products", title="제주 숨김", status="HIDDEN")
        for i in range(3):
            fake_client.seed("products", title=f"제주 {i}", status="PUBLISHED")
        service = CatalogService(fake_client, thumb_storage)

        found = await service.search_published_products("제주")
        assert [p.title for p in found] == ["제주 2", "제주 1", "제주 0"]
        assert len(await service.search_published_products("제주", limit=2)) == 2

        before = len(fake_client.query_log)
        assert await service.search_published_products("   ") == []
        assert len(fake_client.query_log) == before

    async def test_get_published_only(self, fake_client, thumb_storage):
        draft = fake_client.seed("products", title="draft", status="DRAFT")
        service = CatalogService(fake_client, thumb_storage)

        assert await service.get_product(draft["id"], published_only=True) is None
        assert (await service.get_product(draft["id"])).title == "draft"

    async def test_list_is_newest_first(self, fake_client, thumb_storage):
        fake_client.seed("products", title="old")
        fake_client.seed("products", title="new")
        service = CatalogService(fake_client, thumb_storage)

        assert [p.title for p in await service.list_products()] == ["new", "old"]

    async def test_thumbnail_failure_degrades_single_row(self, fake_client, thumb_storage):
        fake_client.storage.missing.add("thumb/gone.png")
        fake_client.seed("products", title="ok", thumbnail_path="thumb/ok.png", thumbnail_url="thumb/ok.png")
        fake_client.seed("products", title="broken", thumbnail_path="thumb/gone.png", thumbnail_url="thumb/gone.png")
        fake_client.seed("products", title="external", thumbnail_url="https://cdn.example.com/e.jpg")
        service = CatalogService(fake_client, thumb_storage)

        products = {p.title: p for p in await service.list_products()}

        assert products["broken"].thumbnail_url == ""
        assert products["broken"].thumbnail_path == "thumb/gone.png"
        assert products["ok"].thumbnail_url.startswith("https://fake.supabase.co/sign/")
        assert products["external"].thumbnail_url == "https://cdn.example.com/e.jpg"

    async def test_get_missing_returns_none(self, fake_client, thumb_storage):
        assert await CatalogService(fake_client, thumb_storage).get_product("nope") is None

    async def test_create_update_delete(self, fake_client, thumb_storage):
        service = CatalogService(fake_client, thumb_storage)

        created = await service.create_product(_upsert(thumbnail_path="thumb/a.png"))
        assert created.title == "제주 3일"
        assert created.thumbnail_path == "thumb/a.png"
        assert created.thumbnail_url.startswith("https://fake.supabase.co/sign/")

        updated = await service.update_product(created.id, _upsert(title="제주 4일", status="HIDDEN"))
        assert updated is not None
        assert updated.title == "제주 4일"
        assert updated.status == "HIDDEN"
        assert updated.thumbnail_url == ""

        assert await service.update_product("missing", _upsert()) is None

        assert await service.delete_product(created.id) is True
        assert await service.get_product(created.id) is None
        # 없는 id 삭제도 성공
        assert await service.delete_product(created.id) is True

    async def test_theme_products_exclude_drafts(self, fake_client, thumb_storage):
        theme = fake_client.seed("product_themes", name="골프", slug="골프")
        area = fake_client.seed("product_areas", theme_id=theme["id"], name="태국", slug="thailand")
        fake_client.seed("products", title="draft", status="DRAFT", theme_id=theme["id"])
        fake_client.seed("products", title="published", status="PUBLISHED", theme_id=theme["id"], area_id=area["id"])
        fake_client.seed("products", title="hidden", status="HIDDEN", theme_id=theme["id"])
        fake_client.seed("products", title="other", status="PUBLISHED")
        service = CatalogService(fake_client, thumb_storage)

        result = await service.list_theme_products("골프")
        assert result is not None
        assert result.theme.slug == "골프"
        assert sorted(p.title for p in result.products) == ["hidden", "published"]

        by_area = await service.list_theme_products("골프", area_id=area["id"])
        assert [p.title for p in by_area.products] == ["published"]

        assert await service.list_theme_products("없는테마") is None

    async def test_upload_thumbnail_goes_under_thumb(self, fake_client, thumb_storage):
        path = await CatalogService(fake_client, thumb_storage).upload_thumbnail(b"img", "a.jpg", "image/jpeg")
        assert path.startswith("thumb/")
        assert path.endswith(".jpg")
