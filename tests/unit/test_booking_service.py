"""
Unit tests for BookingService.

생성 시 초기 상태 고정, 본인 예약만 취소, 관리자 목록의 정확한 건수와 FK 조인 정규화를 검증합니다.
"""

import pytest

from fake_supabase import FakeSupabase
from tourbook.schemas.booking import BookingAdminPatch, CreateBookingPayload
from tourbook.services.booking_service import BookingService
from tourbook.services.storage_service import StorageService
from tourbook.settings import settings

USER_A = "00000000-0000-0000-0000-00000000000a"
USER_B = "00000000-0000-0000-0000-00000000000b"


def _seed_product(client: FakeSupabase, **overrides) -> dict:
    data = {"title": "제주 3일", "region": "제주", "thumbnail_path": "thumb/a.png", "thumbnail_url": "thumb/a.png"}
    data.update(overrides)
    return client.seed("products", **data)


@pytest.mark.unit
class TestCreateBooking:
    async def test_status_always_requested(self, fake_client, thumb_storage):
        product = _seed_product(fake_client)
        payload = CreateBookingPayload.model_validate(
            {"product_id": product["id"], "people_count": 2, "status": "CONFIRMED", "travel_date": "2026-05-01"}
        )

        booking_id = await BookingService(fake_client, thumb_storage).create_booking(USER_A, payload)

        stored = fake_client.tables["bookings"][0]
        assert stored["id"] == booking_id
        assert stored["status"] == "REQUESTED"
        assert stored["user_id"] == USER_A
        assert stored["travel_date"] == "2026-05-01"
        assert stored["people_count"] == 2

    def test_people_count_must_be_positive(self):
        with pytest.raises(ValueError):
            CreateBookingPayload(product_id="p", people_count=0)


@pytest.mark.unit
class TestMyBookings:
    async def test_excludes_cancelled_and_other_users(self, fake_client, thumb_storage):
        product = _seed_product(fake_client)
        fake_client.seed("bookings", user_id=USER_A, product_id=product["id"], status="REQUESTED")
        fake_client.seed("bookings", user_id=USER_A, product_id=product["id"], status="CANCELLED")
        fake_client.seed("bookings", user_id=USER_A, product_id=product["id"], status="CONFIRMED")
        fake_client.seed("bookings", user_id=USER_B, product_id=product["id"], status="REQUESTED")

        rows = await BookingService(fake_client, thumb_storage).get_my_bookings(USER_A)

        assert [r.status for r in rows] == ["CONFIRMED", "REQUESTED"]
        assert rows[0].product is not None
        assert rows[0].product.title == "제주 3일"
        assert rows[0].product.display_thumbnail_url.startswith("https://fake.supabase.co/sign/")

    async def test_embedded_product_as_list_is_normalized(self, clock):
        client = FakeSupabase(embed_as_list=True)
        storage = StorageService(client, settings.thumbnail_bucket, clock=clock)
        product = _seed_product(client)
        client.seed("bookings", user_id=USER_A, product_id=product["id"])
        client.seed("bookings", user_id=USER_A, product_id="deleted-product")

        rows = await BookingService(client, storage).get_my_bookings(USER_A)

        assert rows[0].product is None
        assert rows[1].product is not None
        assert rows[1].product.id == product["id"]

    async def test_thumbnail_failure_does_not_break_list(self, fake_client, thumb_storage):
        fake_client.storage.missing.add("thumb/a.png")
        product = _seed_product(fake_client)
        fake_client.seed("bookings", user_id=USER_A, product_id=product["id"])

        rows = await BookingService(fake_client, thumb_storage).get_my_bookings(USER_A)
        assert rows[0].product.display_thumbnail_url == ""


@pytest.mark.unit
class TestCancelMyBooking:
    async def test_owner_can_cancel(self, fake_client, thumb_storage):
        product = _seed_product(fake_client)
        booking = fake_client.seed("bookings", user_id=USER_A, product_id=product["id"])

        assert await BookingService(fake_client, thumb_storage).cancel_my_booking(booking["id"], USER_A) is True
        assert fake_client.tables["bookings"][0]["status"] == "CANCELLED"
        # 삭제가 아니라 상태 변경
        assert len(fake_client.tables["bookings"]) == 1

    async def test_other_user_cannot_cancel(self, fake_client, thumb_storage):
        product = _seed_product(fake_client)
        booking = fake_client.seed("bookings", user_id=USER_A, product_id=product["id"])

        assert await BookingService(fake_client, thumb_storage).cancel_my_booking(booking["id"], USER_B) is False
        assert fake_client.tables["bookings"][0]["status"] == "REQUESTED"

    async def test_unknown_booking(self, fake_client, thumb_storage):
        assert await BookingService(fake_client, thumb_storage).cancel_my_booking("missing", USER_A) is False


@pytest.mark.unit
class TestAdminBookings:
    async def test_page_with_exact_count(self, fake_client, thumb_storage):
        product = _seed_product(fake_client)
        fake_client.seed("profiles", user_id=USER_A, email="a@example.com", name="에이")
        for _ in range(5):
            fake_client.seed("bookings", user_id=USER_A, product_id=product["id"], status="REQUESTED")
        fake_client.seed("bookings", user_id=USER_A, product_id=product["id"], status="CONFIRMED")

        service = BookingService(fake_client, thumb_storage)
        page = await service.get_admin_bookings("REQUESTED", limit=2, offset=2)

        assert page.count == 5
        assert len(page.rows) == 2
        assert all(r.status == "REQUESTED" for r in page.rows)
        assert page.rows[0].profile is not None
        assert page.rows[0].profile.email == "a@example.com"
        assert page.rows[0].product.title == "제주 3일"

        everything = await service.get_admin_bookings(limit=50)
        assert everything.count == 6

    async def test_default_page_size(self, fake_client, thumb_storage):
        product = _seed_product(fake_client, thumbnail_path="", thumbnail_url="")
        for _ in range(120):
            fake_client.seed("bookings", user_id=USER_A, product_id=product["id"])

        page = await BookingService(fake_client, thumb_storage).get_admin_bookings()

        assert len(page.rows) == settings.admin_bookings_page_size == 50
        assert page.count == 120

    async def test_missing_profile_is_none(self, fake_client, thumb_storage):
        product = _seed_product(fake_client)
        fake_client.seed("bookings", user_id=USER_B, product_id=product["id"])

        page = await BookingService(fake_client, thumb_storage).get_admin_bookings()
        assert page.rows[0].profile is None

    async def test_admin_patch_without_transition_rules(self, fake_client, thumb_storage):
        product = _seed_product(fake_client)
        booking = fake_client.seed("bookings", user_id=USER_A, product_id=product["id"], status="COMPLETED")
        service = BookingService(fake_client, thumb_storage)

        assert await service.update_booking_admin(booking["id"], BookingAdminPatch(status="REQUESTED")) == booking["id"]
        stored = fake_client.tables["bookings"][0]
        assert stored["status"] == "REQUESTED"
        assert stored["memo_admin"] is None

        await service.update_booking_admin(booking["id"], BookingAdminPatch(memo_admin="전화 완료"))
        assert stored["status"] == "REQUESTED"
        assert stored["memo_admin"] == "전화 완료"

        assert await service.update_booking_admin("missing", BookingAdminPatch(status="CONFIRMED")) is None

    def test_admin_patch_rejects_null_status(self):
        with pytest.raises(ValueError, match="null"):
            BookingAdminPatch.model_validate({"status": None})
        # memo 는 비울 수 있다
        assert BookingAdminPatch.model_validate({"memo_admin": None}).model_dump(exclude_unset=True) == {"memo_admin": None}
