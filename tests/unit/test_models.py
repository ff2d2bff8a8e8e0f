import pytest

from tourbook.models import TourBase


@pytest.mark.unit
class TestSchemaMetadata:
    def test_all_tables_registered(self):
        assert set(TourBase.metadata.tables) == {
            "profiles",
            "admin_users",
            "product_themes",
            "product_areas",
            "products",
            "bookings",
            "product_favorites",
            "notices",
            "inquiries",
            "site_settings",
        }

    def test_theme_delete_nulls_area_reference(self):
        column = TourBase.metadata.tables["product_areas"].c.theme_id
        fk = next(iter(column.foreign_keys))
        assert fk.ondelete == "SET NULL"
        assert column.nullable is True

    def test_product_taxonomy_set_null(self):
        products = TourBase.metadata.tables["products"]
        for column in ("theme_id", "area_id"):
            fk = next(iter(products.c[column].foreign_keys))
            assert fk.ondelete == "SET NULL"

    def test_favorites_have_no_unique_pair(self):
        table = TourBase.metadata.tables["product_favorites"]
        assert not [c for c in table.constraints if c.__class__.__name__ == "UniqueConstraint"]
