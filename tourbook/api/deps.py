import logging

from fastapi import Depends, Header, HTTPException
from supabase import AsyncClient

from tourbook.services.admin_user_service import AdminUserService
from tourbook.services.auth_service import AuthService, AuthUser
from tourbook.supabase_client import get_client

logger = logging.getLogger(__name__)


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        return ""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


async def get_optional_user(
    authorization: str | None = Header(default=None),
    client: AsyncClient = Depends(get_client),
) -> AuthUser | None:
    token = _bearer_token(authorization)
    if not token:
        return None
    try:
        return await AuthService(client).get_user(token)
    except Exception as e:
        logger.warning(f"토큰 검증 실패: {e}")
        raise HTTPException(status_code=401, detail="로그인 세션이 유효하지 않습니다")


async def get_current_user(user: AuthUser | None = Depends(get_optional_user)) -> AuthUser:
    if user is None:
        raise HTTPException(status_code=401, detail="로그인이 필요합니다")
    return user


async def require_admin(
    user: AuthUser = Depends(get_current_user),
    client: AsyncClient = Depends(get_client),
) -> AuthUser:
    if not await AdminUserService(client).is_admin(user.id):
        raise HTTPException(status_code=403, detail="관리자 권한이 없습니다")
    return user
