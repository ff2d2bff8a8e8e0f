from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    supabase_url: str = "https://localhost.supabase.co"
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""  # 설정되어 있으면 anon key 대신 사용 (서버 전용)

    # alembic 전용. Supabase Postgres 직접 접속 URL
    database_url: str = ""

    thumbnail_bucket: str = "product-thumbnails"  # private bucket (signed url)
    site_assets_bucket: str = "site-assets"  # public bucket (로고/히어로 이미지)
    signed_url_expires_in: int = 60 * 60  # 초
    signed_url_refresh_margin: int = 30  # 만료 n초 전부터 재발급
    upload_cache_control: str = "3600"

    region_all_label: str = "전체"

    admin_bookings_page_size: int = 50
    admin_users_page_size: int = 50
    notice_page_size: int = 10
    admin_notice_page_size: int = 20
    admin_inquiry_limit: int = 200
    admin_user_detail_limit: int = 50
    product_search_limit: int = 50

    cors_allow_origins: str = "http://localhost:5173"  # 쉼표로 구분

    def get_cors_origins(self) -> list[str]:
        """쉼표로 구분된 CORS 오리진을 리스트로 파싱"""
        if not self.cors_allow_origins:
            return []
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    def get_api_key(self) -> str:
        return self.supabase_service_role_key or self.supabase_anon_key

    @field_validator("supabase_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL은 'http://' 또는 'https://'로 시작해야 합니다.")
        return v.rstrip("/")

    @field_validator("database_url")
    @classmethod
    def validate_db_url(cls, v: str) -> str:
        if v and not v.startswith("postgresql"):
            raise ValueError("DB URL은 'postgresql'로 시작해야 합니다.")
        return v

    @field_validator("signed_url_expires_in")
    @classmethod
    def validate_expires_in(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("signed url 유효시간은 0보다 커야 합니다.")
        return v

    @field_validator("signed_url_refresh_margin")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("재발급 여유 시간은 0 이상이어야 합니다.")
        return v

    @field_validator(
        "admin_bookings_page_size",
        "admin_users_page_size",
        "notice_page_size",
        "admin_notice_page_size",
        "admin_user_detail_limit",
        "product_search_limit",
    )
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if not 1 <= v <= 200:
            raise ValueError("page size는 1에서 200 사이여야 합니다.")
        return v

    @model_validator(mode="after")
    def validate_refresh_margin(self) -> "Settings":
        if self.signed_url_refresh_margin >= self.signed_url_expires_in:
            raise ValueError("재발급 여유 시간은 signed url 유효시간보다 짧아야 합니다.")
        return self

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)


settings = Settings()
