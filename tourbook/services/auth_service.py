"""
Supabase Auth 래퍼.

세션 조회/로그인/회원가입/로그아웃과 bearer 토큰 → 사용자 확인을 담당합니다.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from supabase import AsyncClient

from tourbook.schemas.profile import AuthSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: Optional[str]


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _to_session(response: Any) -> AuthSession:
    user = getattr(response, "user", None)
    # AuthResponse(user, session) 또는 Session 자체 모두 처리
    session = getattr(response, "session", None)
    if session is None and hasattr(response, "access_token"):
        session = response
    return AuthSession(
        user_id=str(user.id) if user else None,
        email=getattr(user, "email", None) if user else None,
        access_token=getattr(session, "access_token", None) if session else None,
        refresh_token=getattr(session, "refresh_token", None) if session else None,
    )


class AuthService:
    def __init__(self, client: AsyncClient):
        self.client = client

    async def sign_in(self, email: str, password: str) -> AuthSession:
        response = await self.client.auth.sign_in_with_password({"email": normalize_email(email), "password": password})
        return _to_session(response)

    async def sign_up(self, email: str, password: str) -> AuthSession:
        response = await self.client.auth.sign_up({"email": normalize_email(email), "password": password})
        logger.info(f"회원가입: {normalize_email(email)}")
        return _to_session(response)

    async def sign_out(self) -> None:
        await self.client.auth.sign_out()

    async def get_session(self) -> Optional[AuthSession]:
        session = await self.client.auth.get_session()
        if session is None:
            return None
        return _to_session(session)

    async def get_user(self, jwt: str) -> Optional[AuthUser]:
        """bearer 토큰으로 사용자 확인. 유효하지 않으면 None"""
        if not jwt:
            return None
        response = await self.client.auth.get_user(jwt)
        user = getattr(response, "user", None) if response else None
        if user is None:
            return None
        return AuthUser(id=str(user.id), email=getattr(user, "email", None))
