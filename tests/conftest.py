"""Pytest configuration and fixtures."""

import pytest

from fake_supabase import FakeSupabase
from tourbook.services.storage_service import StorageService, clear_signed_url_cache
from tourbook.settings import settings


class FakeClock:
    """수동으로 진행시키는 시계 (signed url 만료 테스트용)"""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _reset_signed_url_cache():
    """signed url 캐시는 프로세스 전역이므로 테스트마다 비운다."""
    clear_signed_url_cache()
    yield
    clear_signed_url_cache()


@pytest.fixture(scope="function")
def fake_client() -> FakeSupabase:
    """
    테스트용 인메모리 Supabase 클라이언트.
    각 테스트마다 새로운 테이블 상태로 시작.
    """
    return FakeSupabase()


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def thumb_storage(fake_client: FakeSupabase, clock: FakeClock) -> StorageService:
    return StorageService(fake_client, settings.thumbnail_bucket, clock=clock)


# 테스트 마커 정의
def pytest_configure(config):
    """Pytest 마커 등록."""
    config.addinivalue_line("markers", "unit: 단위 테스트 (외부 서비스 불필요)")
    config.addinivalue_line("markers", "api: FastAPI 라우터 테스트 (TestClient)")
