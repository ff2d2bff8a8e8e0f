import logging
from typing import Optional

from supabase import AsyncClient

from tourbook.schemas.profile import Profile, ProfileUpdate
from tourbook.services.query_utils import first_row, rows_of, utc_now_iso

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "user_id,email,name,phone,birth_date,marketing_opt_in,marketing_opt_in_at"


class ProfileService:
    def __init__(self, client: AsyncClient):
        self.client = client

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        response = await self.client.table("profiles").select(PROFILE_COLUMNS).eq("user_id", user_id).limit(1).execute()
        row = first_row(response)
        return Profile(**{**row, "user_id": str(row["user_id"])}) if row else None

    async def get_or_create_profile(self, user_id: str, email: Optional[str]) -> Profile:
        """첫 접근 시 프로필이 없으면 세션 이메일로 생성"""
        profile = await self.get_profile(user_id)
        if profile is not None:
            return profile

        data = {
            "user_id": user_id,
            "email": email,
            "name": None,
            "phone": None,
            "birth_date": None,
            "marketing_opt_in": False,
            "marketing_opt_in_at": None,
        }
        response = await self.client.table("profiles").insert(data).execute()
        logger.info(f"프로필 자동 생성: {user_id}")
        row = first_row(response) or data
        return Profile(**{**row, "user_id": str(row["user_id"])})

    async def update_my_profile(self, user_id: str, patch: ProfileUpdate) -> Optional[Profile]:
        # 동의 시각은 저장 시점의 동의 여부로만 결정 (true면 현재 시각, false면 null)
        data = {
            "name": patch.name,
            "phone": patch.phone,
            "birth_date": patch.birth_date.isoformat() if patch.birth_date else None,
            "marketing_opt_in": patch.marketing_opt_in,
            "marketing_opt_in_at": utc_now_iso() if patch.marketing_opt_in else None,
        }
        response = await self.client.table("profiles").update(data).eq("user_id", user_id).execute()
        rows = rows_of(response)
        if not rows:
            return None
        row = rows[0]
        return Profile(**{**row, "user_id": str(row["user_id"])})
