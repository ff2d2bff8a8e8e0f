import logging
import re
import time
import uuid
from dataclasses import dataclass
from typing import Callable

from supabase import AsyncClient

from tourbook.settings import settings

logger = logging.getLogger(__name__)

_EXTERNAL_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
_ALLOWED_IMAGE_EXTS = ("svg", "png", "jpg", "jpeg", "webp")


@dataclass(frozen=True)
class _SignedUrl:
    url: str
    expires_at: float


# 프로세스 전역 캐시: (bucket, path) -> signed url. 크기 제한/삭제 연동 없음
_signed_url_cache: dict[tuple[str, str], _SignedUrl] = {}


def clear_signed_url_cache() -> None:
    _signed_url_cache.clear()


def is_external_url(ref: str) -> bool:
    return bool(_EXTERNAL_URL_RE.match(ref))


def normalize_storage_path(ref: str, bucket: str) -> str:
    """
    DB에 저장된 참조를 bucket 내부 path로 정리.

    "/thumb/a.png", "product-thumbnails/thumb/a.png" 처럼 들어와도 "thumb/a.png" 로 맞춘다.
    """
    path = (ref or "").strip().lstrip("/")
    prefix = f"{bucket}/"
    if path.startswith(prefix):
        path = path[len(prefix):]
    return path


def safe_image_ext(filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return ext if ext in _ALLOWED_IMAGE_EXTS else "png"


class StorageService:
    """
    Supabase Storage 참조(외부 URL 또는 내부 path)를 화면에 쓸 수 있는 URL로 바꿔줍니다.

    - private bucket: signed url 발급 + 만료 직전까지 메모리 캐시
    - public bucket: public url 문자열 조합 (실패하지 않음)
    """

    def __init__(
        self,
        client: AsyncClient,
        bucket: str,
        expires_in: int | None = None,
        refresh_margin: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.bucket = bucket
        self.expires_in = expires_in or settings.signed_url_expires_in
        self.refresh_margin = settings.signed_url_refresh_margin if refresh_margin is None else refresh_margin
        self._clock = clock

    async def resolve_signed_url(self, ref: str | None) -> str:
        raw = (ref or "").strip()
        if not raw:
            return ""
        if is_external_url(raw):
            return raw

        path = normalize_storage_path(raw, self.bucket)
        key = (self.bucket, path)
        now = self._clock()

        cached = _signed_url_cache.get(key)
        if cached and now < cached.expires_at - self.refresh_margin:
            return cached.url

        # 오류(없는 path, 권한 없음)는 그대로 호출자에게 전달
        result = await self.client.storage.from_(self.bucket).create_signed_url(path, self.expires_in)
        url = result.get("signedURL") or result.get("signedUrl") or ""
        if url:
            _signed_url_cache[key] = _SignedUrl(url=url, expires_at=now + self.expires_in)
        return url

    async def resolve_or_blank(self, ref: str | None) -> str:
        """목록 화면용: 실패 시 빈 문자열 (No Image 처리)"""
        try:
            return await self.resolve_signed_url(ref)
        except Exception as e:
            logger.warning(f"썸네일 signed url 생성 실패 ({self.bucket}/{ref}): {e}")
            return ""

    def public_url(self, ref: str | None) -> str:
        raw = (ref or "").strip()
        if not raw:
            return ""
        if is_external_url(raw):
            return raw

        path = normalize_storage_path(raw, self.bucket)
        if not path:
            return ""
        return f"{settings.supabase_url}/storage/v1/object/public/{self.bucket}/{path}"

    async def upload(
        self,
        file_content: bytes,
        filename: str,
        directory: str,
        content_type: str | None = None,
    ) -> str:
        """
        이미지를 업로드하고 저장된 path를 반환합니다 (DB에는 path만 저장).
        Path format: {directory}/{uuid}.{ext}
        """
        ext = safe_image_ext(filename)
        clean_dir = (directory or "").strip().strip("/")
        object_path = f"{clean_dir}/{uuid.uuid4()}.{ext}" if clean_dir else f"{uuid.uuid4()}.{ext}"

        if not content_type:
            content_type = "image/jpeg" if ext in ("jpg", "jpeg") else f"image/{ext}"
            if ext == "svg":
                content_type = "image/svg+xml"

        await self.client.storage.from_(self.bucket).upload(
            path=object_path,
            file=file_content,
            file_options={
                "content-type": content_type,
                "cache-control": settings.upload_cache_control,
                "upsert": "false",
            },
        )
        logger.info(f"스토리지 업로드 완료: {self.bucket}/{object_path}")
        return object_path


def thumbnail_storage(client: AsyncClient) -> StorageService:
    return StorageService(client, settings.thumbnail_bucket)


def site_asset_storage(client: AsyncClient) -> StorageService:
    return StorageService(client, settings.site_assets_bucket)
