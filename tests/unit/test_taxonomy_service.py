import pytest

from tourbook.schemas.product import AreaCreate, AreaPatch, ThemeUpsert
from tourbook.services.slugs import area_slug, theme_slug
from tourbook.services.taxonomy_service import TaxonomyService


@pytest.mark.unit
class TestSlugs:
    def test_theme_slug_keeps_hangul(self):
        assert theme_slug("  골프 여행  ") == "골프-여행"

    def test_area_slug_ascii_only(self):
        assert area_slug("Chiang Mai") == "chiang-mai"
        assert area_slug("다낭 Da_Nang!") == "-da_nang"
        assert area_slug("제주") == ""


@pytest.mark.unit
class TestThemes:
    async def test_create_derives_slug(self, fake_client):
        service = TaxonomyService(fake_client)
        theme = await service.create_theme(ThemeUpsert(name="허니문 여행"))
        assert theme.slug == "허니문-여행"
        assert theme.is_active is True

    async def test_create_keeps_explicit_slug(self, fake_client):
        theme = await TaxonomyService(fake_client).create_theme(ThemeUpsert(name="골프", slug=" golf "))
        assert theme.slug == "golf"

    async def test_active_list_sorted(self, fake_client):
        fake_client.seed("product_themes", name="b", slug="b", sort_order=2)
        fake_client.seed("product_themes", name="a", slug="a", sort_order=1)
        fake_client.seed("product_themes", name="off", slug="off", sort_order=0, is_active=False)
        service = TaxonomyService(fake_client)

        assert [t.name for t in await service.list_themes_active()] == ["a", "b"]
        assert [t.name for t in await service.list_themes_admin()] == ["off", "a", "b"]

    async def test_update_missing_returns_none(self, fake_client):
        assert await TaxonomyService(fake_client).update_theme("nope", ThemeUpsert(name="x")) is None

    async def test_delete_theme_keeps_areas_and_products(self, fake_client):
        theme = fake_client.seed("product_themes", name="골프", slug="골프")
        area = fake_client.seed("product_areas", theme_id=theme["id"], name="태국", slug="thailand")
        product = fake_client.seed("products", title="p", theme_id=theme["id"], area_id=area["id"])
        service = TaxonomyService(fake_client)

        assert await service.delete_theme(theme["id"]) is True

        assert await service.get_theme(theme["id"]) is None
        areas = await service.admin_list_areas()
        assert [(a.id, a.theme_id) for a in areas] == [(area["id"], None)]
        stored = next(p for p in fake_client.tables["products"] if p["id"] == product["id"])
        assert stored["theme_id"] is None
        assert stored["area_id"] == area["id"]


@pytest.mark.unit
class TestAreas:
    async def test_create_requires_existing_theme(self, fake_client):
        with pytest.raises(ValueError, match="존재하지 않는 테마입니다"):
            await TaxonomyService(fake_client).create_area(AreaCreate(theme_id="missing", name="태국"))

    async def test_create_normalizes_slug(self, fake_client):
        theme = fake_client.seed("product_themes", name="골프", slug="골프")
        area = await TaxonomyService(fake_client).create_area(
            AreaCreate(theme_id=theme["id"], name=" Chiang Mai ", sort_order=3)
        )
        assert area.slug == "chiang-mai"
        assert area.name == "Chiang Mai"
        assert area.sort_order == 3

    async def test_create_rejects_empty_slug(self, fake_client):
        theme = fake_client.seed("product_themes", name="골프", slug="골프")
        with pytest.raises(ValueError, match="slug를 입력하세요"):
            await TaxonomyService(fake_client).create_area(AreaCreate(theme_id=theme["id"], name="제주"))

    async def test_customer_list_active_only_in_order(self, fake_client):
        theme = fake_client.seed("product_themes", name="골프", slug="골프")
        fake_client.seed("product_areas", theme_id=theme["id"], name="b", slug="b", sort_order=1)
        fake_client.seed("product_areas", theme_id=theme["id"], name="a", slug="a", sort_order=1)
        fake_client.seed("product_areas", theme_id=theme["id"], name="first", slug="first", sort_order=0)
        fake_client.seed("product_areas", theme_id=theme["id"], name="off", slug="off", sort_order=0, is_active=False)

        areas = await TaxonomyService(fake_client).list_areas_by_theme(theme["id"])
        assert [a.name for a in areas] == ["first", "a", "b"]

    async def test_patch_only_sent_fields(self, fake_client):
        theme = fake_client.seed("product_themes", name="골프", slug="골프")
        area = fake_client.seed("product_areas", theme_id=theme["id"], name="태국", slug="thailand", sort_order=5)
        service = TaxonomyService(fake_client)

        updated = await service.update_area(area["id"], AreaPatch(is_active=False, slug="Thai Land"))
        assert updated is not None
        assert updated.is_active is False
        assert updated.slug == "thai-land"
        assert updated.name == "태국"
        assert updated.sort_order == 5

        assert await service.update_area("missing", AreaPatch(name="x")) is None

    async def test_patch_rejects_unknown_theme(self, fake_client):
        theme = fake_client.seed("product_themes", name="골프", slug="골프")
        area = fake_client.seed("product_areas", theme_id=theme["id"], name="태국", slug="thailand")
        with pytest.raises(ValueError):
            await TaxonomyService(fake_client).update_area(area["id"], AreaPatch(theme_id="missing"))

    @pytest.mark.parametrize("field", ["theme_id", "name", "slug"])
    def test_patch_rejects_null_required_fields(self, field):
        with pytest.raises(ValueError, match="null"):
            AreaPatch.model_validate({field: None})

    def test_patch_allows_null_sort_order(self):
        assert AreaPatch.model_validate({"sort_order": None}).model_dump(exclude_unset=True) == {"sort_order": None}
