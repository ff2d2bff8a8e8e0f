import logging

from fastapi import Request
from supabase import AsyncClient, acreate_client

from tourbook.settings import settings

logger = logging.getLogger(__name__)


async def create_supabase_client() -> AsyncClient:
    key = settings.get_api_key()
    if not key:
        logger.warning("Supabase key가 설정되어 있지 않습니다 (SUPABASE_ANON_KEY / SUPABASE_SERVICE_ROLE_KEY)")
    return await acreate_client(settings.supabase_url, key)


def get_client(request: Request) -> AsyncClient:
    # startup 시 app.state에 올려둔 단일 클라이언트를 재사용
    return request.app.state.supabase
