"""
Unit tests for StorageService.

signed url 캐시 재사용/재발급과 path 정규화, 업로드 경로 규칙을 검증합니다.
"""

import pytest

from tourbook.services.storage_service import (
    StorageService,
    is_external_url,
    normalize_storage_path,
    safe_image_ext,
)
from tourbook.settings import settings


@pytest.mark.unit
class TestPathHelpers:
    def test_external_url_detection(self):
        assert is_external_url("https://cdn.example.com/a.png")
        assert is_external_url("HTTP://cdn.example.com/a.png")
        assert not is_external_url("thumb/a.png")

    def test_normalize_strips_leading_slash_and_bucket(self):
        assert normalize_storage_path("/thumb/a.png", "product-thumbnails") == "thumb/a.png"
        assert normalize_storage_path("product-thumbnails/thumb/a.png", "product-thumbnails") == "thumb/a.png"
        assert normalize_storage_path("  thumb/a.png ", "product-thumbnails") == "thumb/a.png"

    def test_safe_image_ext(self):
        assert safe_image_ext("logo.SVG") == "svg"
        assert safe_image_ext("photo.jpeg") == "jpeg"
        assert safe_image_ext("script.exe") == "png"
        assert safe_image_ext("noext") == "png"


@pytest.mark.unit
class TestSignedUrl:
    async def test_blank_and_external_refs_do_not_hit_storage(self, thumb_storage, fake_client):
        assert await thumb_storage.resolve_signed_url(None) == ""
        assert await thumb_storage.resolve_signed_url("   ") == ""
        assert await thumb_storage.resolve_signed_url("https://img.example.com/x.jpg") == "https://img.example.com/x.jpg"
        assert fake_client.storage.sign_calls == []

    async def test_cached_url_reused_within_window(self, thumb_storage, fake_client, clock):
        first = await thumb_storage.resolve_signed_url("thumb/a.png")
        clock.advance(settings.signed_url_expires_in - settings.signed_url_refresh_margin - 1)
        second = await thumb_storage.resolve_signed_url("/thumb/a.png")

        assert first == second
        assert len(fake_client.storage.sign_calls) == 1

    async def test_reissued_inside_refresh_margin(self, thumb_storage, fake_client, clock):
        first = await thumb_storage.resolve_signed_url("thumb/a.png")
        clock.advance(settings.signed_url_expires_in - settings.signed_url_refresh_margin)
        second = await thumb_storage.resolve_signed_url("thumb/a.png")

        assert first != second
        assert len(fake_client.storage.sign_calls) == 2

    async def test_cache_shared_between_instances(self, fake_client, clock):
        a = StorageService(fake_client, settings.thumbnail_bucket, clock=clock)
        b = StorageService(fake_client, settings.thumbnail_bucket, clock=clock)

        assert await a.resolve_signed_url("thumb/a.png") == await b.resolve_signed_url("thumb/a.png")
        assert len(fake_client.storage.sign_calls) == 1

    async def test_cache_keyed_by_bucket(self, fake_client, clock):
        a = StorageService(fake_client, "bucket-a", clock=clock)
        b = StorageService(fake_client, "bucket-b", clock=clock)

        await a.resolve_signed_url("same/path.png")
        await b.resolve_signed_url("same/path.png")
        assert len(fake_client.storage.sign_calls) == 2

    async def test_missing_object_propagates(self, thumb_storage, fake_client):
        fake_client.storage.missing.add("thumb/gone.png")
        with pytest.raises(RuntimeError):
            await thumb_storage.resolve_signed_url("thumb/gone.png")

    async def test_resolve_or_blank_swallows_failure(self, thumb_storage, fake_client):
        fake_client.storage.missing.add("thumb/gone.png")
        assert await thumb_storage.resolve_or_blank("thumb/gone.png") == ""


@pytest.mark.unit
class TestPublicUrlAndUpload:
    def test_public_url(self, fake_client):
        storage = StorageService(fake_client, "site-assets")
        assert storage.public_url("branding/logo.png") == (
            f"{settings.supabase_url}/storage/v1/object/public/site-assets/branding/logo.png"
        )
        assert storage.public_url("") == ""
        assert storage.public_url("https://cdn.example.com/logo.png") == "https://cdn.example.com/logo.png"

    async def test_upload_path_and_options(self, fake_client):
        storage = StorageService(fake_client, "site-assets")
        path = await storage.upload(b"<svg/>", "Logo.SVG", "/branding/")

        assert path.startswith("branding/")
        assert path.endswith(".svg")
        content, options = fake_client.storage.objects[("site-assets", path)]
        assert content == b"<svg/>"
        assert options["content-type"] == "image/svg+xml"
        assert options["cache-control"] == settings.upload_cache_control
        assert options["upsert"] == "false"

    async def test_upload_unknown_extension_defaults_to_png(self, fake_client):
        storage = StorageService(fake_client, "site-assets")
        path = await storage.upload(b"bin", "file.bmp", "hero", "image/bmp")

        assert path.endswith(".png")
        _, options = fake_client.storage.objects[("site-assets", path)]
        assert options["content-type"] == "image/bmp"
